"""In-memory progress reporter."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RecordingProgress:
    """Keeps every reported ``(step, total, message)`` tuple in order."""

    events: list[tuple[int, int, str]] = field(default_factory=list)

    def report(self, step: int, total: int, message: str) -> None:
        self.events.append((step, total, message))

    @property
    def messages(self) -> list[str]:
        return [message for _, _, message in self.events]
