"""Terminal width detection for the progress renderers."""

import logging
import os
from typing import TextIO

from .config import DEFAULT_TERMINAL_WIDTH

logger = logging.getLogger(__name__)


def is_tty(stream: TextIO) -> bool:
    """Check if a stream is an interactive terminal.

    Returns:
        True if the stream reports itself as a TTY, False otherwise
        (including streams without isatty() and closed streams).
    """
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (AttributeError, ValueError, OSError):
        return False


class TerminalMetrics:
    """Usable column count for an output stream.

    The width is detected once and cached: resizing the terminal mid-run is
    not tracked.

    Args:
        stream: The stream output will be written to.
        default_width: Width used when the stream is not a terminal or the
            size cannot be determined.
        forced_width: Skip detection and always report this width.
    """

    def __init__(self, stream: TextIO, default_width: int = DEFAULT_TERMINAL_WIDTH, forced_width: int | None = None) -> None:
        self._stream = stream
        self._default_width = default_width
        self._forced_width = forced_width
        self._width: int | None = None

    def width(self) -> int:
        """Return the terminal width in columns (always > 0)."""
        if self._width is None:
            self._width = self._detect()
        return self._width

    def _detect(self) -> int:
        if self._forced_width is not None:
            return self._forced_width
        if not is_tty(self._stream):
            logger.debug("Output is not a terminal, using default width %d", self._default_width)
            return self._default_width
        # Measure the output stream, not COLUMNS or the process std streams
        try:
            columns = os.get_terminal_size(self._stream.fileno()).columns
        except (AttributeError, OSError, ValueError) as e:
            logger.debug("Terminal size query failed (%s), using default width %d", e, self._default_width)
            return self._default_width
        if columns <= 0:
            return self._default_width
        return columns
