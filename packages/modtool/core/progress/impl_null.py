"""No-op progress reporter for silent runs and tests."""


class NullProgress:
    """Discards all progress messages."""

    def report(self, step: int, total: int, message: str) -> None:
        """Discard."""
        pass
