"""Protocol for step progress reporting."""

from typing import Protocol


class ProgressReporter(Protocol):
    """Consumer of ordered packaging status messages.

    Purely observational: implementations must not affect the run.
    """

    def report(self, step: int, total: int, message: str) -> None:
        """Receive one status message.

        Args:
            step: 1-based index of the step being entered
            total: Total number of steps in the run
            message: Human-readable description of the step
        """
        ...
