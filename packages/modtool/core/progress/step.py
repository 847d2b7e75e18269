"""Step counter feeding a ProgressReporter."""

from __future__ import annotations

from modtool.core.progress.impl_null import NullProgress
from modtool.core.progress.protocols import ProgressReporter


class StepProgress:
    """
    Counts steps of a fixed-length run and forwards each to a reporter.

    Example:
        >>> progress = StepProgress(2, reporter)
        >>> progress.advance("reading")   # reporter.report(1, 2, "reading")
        >>> progress.advance("finished")  # reporter.report(2, 2, "finished")
    """

    def __init__(self, total: int, reporter: ProgressReporter | None = None) -> None:
        if total < 1:
            raise ValueError(f"total must be positive, got {total}")
        self.total = total
        self.current = 0
        self.reporter = reporter or NullProgress()

    def advance(self, message: str) -> None:
        """Enter the next step and report it."""
        if self.current >= self.total:
            raise ValueError(f"all {self.total} steps already reported")
        self.current += 1
        self.reporter.report(self.current, self.total, message)

    @property
    def finished(self) -> bool:
        return self.current == self.total
