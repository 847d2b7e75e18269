"""Step progress reporting.

The packaging pipeline reports its steps to an injected ProgressReporter,
keeping core logic independent of any output medium.

Example:
    >>> from modtool.core.progress import ConsoleProgress, StepProgress
    >>> progress = StepProgress(5, ConsoleProgress())
    >>> progress.advance("reading the ignore list")
"""

from .impl_console import ConsoleProgress
from .impl_memory import RecordingProgress
from .impl_null import NullProgress
from .protocols import ProgressReporter
from .step import StepProgress

__all__ = [
    # Protocol
    "ProgressReporter",
    # Implementations
    "ConsoleProgress",
    "NullProgress",
    "RecordingProgress",
    # Counter
    "StepProgress",
]
