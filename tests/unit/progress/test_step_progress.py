"""Tests for step progress reporting."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from modtool.core.progress import ConsoleProgress, NullProgress, RecordingProgress, StepProgress


class TestStepProgress:
    """Tests for StepProgress."""

    def test_reports_each_step_in_order(self, progress: RecordingProgress) -> None:
        """Every advance() forwards step, total, and message."""
        steps = StepProgress(3, progress)

        steps.advance("first")
        steps.advance("second")
        assert not steps.finished
        steps.advance("third")

        assert progress.events == [(1, 3, "first"), (2, 3, "second"), (3, 3, "third")]
        assert progress.messages == ["first", "second", "third"]
        assert steps.finished

    def test_cannot_exceed_total(self) -> None:
        """Advancing past the last step is a programming error."""
        steps = StepProgress(1)
        steps.advance("only")

        with pytest.raises(ValueError, match="already reported"):
            steps.advance("extra")

    def test_total_must_be_positive(self) -> None:
        """Zero-step runs are rejected."""
        with pytest.raises(ValueError):
            StepProgress(0)

    def test_defaults_to_null_reporter(self) -> None:
        """Without a reporter, messages are discarded."""
        steps = StepProgress(1)

        assert isinstance(steps.reporter, NullProgress)
        steps.advance("silent")


class TestConsoleProgress:
    """Tests for ConsoleProgress."""

    def test_renders_counter_and_message(self) -> None:
        """Lines read ``[step/total] message``."""
        buffer = io.StringIO()
        reporter = ConsoleProgress(Console(file=buffer, width=200, color_system=None))

        reporter.report(2, 5, "reading the ignore list")

        assert buffer.getvalue() == "[2/5] reading the ignore list\n"

    def test_brackets_in_messages_are_literal(self) -> None:
        """Paths with brackets are not treated as markup."""
        buffer = io.StringIO()
        reporter = ConsoleProgress(Console(file=buffer, width=200, color_system=None))

        reporter.report(1, 5, "reading the '/mods/[bold]x/config.toml' configuration file")

        assert "[bold]x" in buffer.getvalue()
