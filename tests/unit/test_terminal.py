"""Unit tests for terminal width detection."""

import os
from io import StringIO
from unittest.mock import patch

import pytest

from spinline.terminal import TerminalMetrics, is_tty


class FakeTTY(StringIO):
    """In-memory stream that claims to be a terminal."""

    def isatty(self) -> bool:
        return True


class FakeTTYWithDescriptor(FakeTTY):
    """Terminal-like stream backed by a (pretend) file descriptor."""

    def fileno(self) -> int:
        return 7


class BrokenStream(StringIO):
    def isatty(self) -> bool:
        raise ValueError("I/O operation on closed file")


class TestIsTTY:
    """Tests for is_tty()."""

    def test_stringio_is_not_tty(self) -> None:
        assert is_tty(StringIO()) is False

    def test_fake_tty(self) -> None:
        assert is_tty(FakeTTY()) is True

    def test_isatty_error_is_not_tty(self) -> None:
        assert is_tty(BrokenStream()) is False

    def test_object_without_isatty(self) -> None:
        assert is_tty(object()) is False  # type: ignore[arg-type]


class TestTerminalMetrics:
    """Tests for TerminalMetrics.width()."""

    def test_non_tty_uses_default(self) -> None:
        assert TerminalMetrics(StringIO()).width() == 120

    def test_custom_default(self) -> None:
        assert TerminalMetrics(StringIO(), default_width=100).width() == 100

    def test_forced_width_skips_detection(self) -> None:
        with patch("spinline.terminal.os.get_terminal_size") as get_size:
            assert TerminalMetrics(FakeTTYWithDescriptor(), forced_width=64).width() == 64
            get_size.assert_not_called()

    def test_tty_measures_its_own_descriptor(self) -> None:
        with patch("spinline.terminal.os.get_terminal_size", return_value=os.terminal_size((77, 24))) as get_size:
            assert TerminalMetrics(FakeTTYWithDescriptor()).width() == 77
            get_size.assert_called_once_with(7)

    def test_unmeasurable_tty_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A TTY without a usable descriptor falls back to the default, not 80."""
        monkeypatch.delenv("COLUMNS", raising=False)
        assert TerminalMetrics(FakeTTY()).width() == 120

    def test_columns_env_does_not_override_measurement(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COLUMNS", "50")
        assert TerminalMetrics(FakeTTY(), default_width=100).width() == 100

    def test_size_query_error_uses_default(self) -> None:
        with patch("spinline.terminal.os.get_terminal_size", side_effect=OSError("Inappropriate ioctl for device")):
            assert TerminalMetrics(FakeTTYWithDescriptor()).width() == 120

    def test_non_positive_size_uses_default(self) -> None:
        with patch("spinline.terminal.os.get_terminal_size", return_value=os.terminal_size((0, 0))):
            assert TerminalMetrics(FakeTTYWithDescriptor()).width() == 120

    def test_width_is_cached(self) -> None:
        with patch("spinline.terminal.os.get_terminal_size", return_value=os.terminal_size((90, 24))) as get_size:
            metrics = TerminalMetrics(FakeTTYWithDescriptor())
            assert metrics.width() == 90
            get_size.return_value = os.terminal_size((50, 24))
            assert metrics.width() == 90
            assert get_size.call_count == 1
