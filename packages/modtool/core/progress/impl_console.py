"""Terminal progress reporter using rich."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text


class ConsoleProgress:
    """
    Renders each step as ``[step/total] message`` with a bold, dim counter.

    Messages are printed as plain text, so paths containing brackets are
    never interpreted as markup.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def report(self, step: int, total: int, message: str) -> None:
        self.console.print(
            Text.assemble((f"[{step}/{total}]", "bold dim"), " ", message),
            highlight=False,
        )
