"""Text layout helpers for single-line terminal rendering.

Every rendered line is composed from a left half (status, names,
descriptions) and a right half (progress fraction) that are pushed to the
edges of the terminal. Layout math works on visual length, i.e. the number
of terminal cells the text occupies once ANSI color sequences are removed.
"""

import re

from rich.cells import cell_len, set_cell_size

# ANSI color codes
COLORS = {
    "green": "\033[32m",
    "red": "\033[31m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_white": "\033[97m",
    "reset": "\033[0m",
}

# Cursor control
CARRIAGE_RETURN = "\r"
CLEAR_LINE = "\033[K"

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

ELLIPSIS = "..."


def colorize(text: str, color: str | None, enabled: bool = True) -> str:
    """Wrap text with an ANSI color and a reset.

    Unknown colors and disabled coloring return the text unchanged.
    """
    if not enabled or color is None or color not in COLORS:
        return text
    return f"{COLORS[color]}{text}{COLORS['reset']}"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences. For measuring only, never for display."""
    return _ANSI_RE.sub("", text)


def visual_length(text: str) -> int:
    """Width of text in terminal cells (wide glyphs count as two)."""
    return cell_len(strip_ansi(text))


def truncate(text: str, max_length: int) -> str:
    """Shorten text to at most max_length visible characters with an ellipsis.

    Args:
        text: Plain text to shorten.
        max_length: Maximum visual length of the result.

    Returns:
        The text unchanged if it already fits, otherwise its first
        max_length - 3 cells followed by "...".
    """
    if visual_length(text) <= max_length:
        return text
    if max_length <= len(ELLIPSIS):
        return ELLIPSIS[: max(max_length, 0)]
    return set_cell_size(text, max_length - len(ELLIPSIS)) + ELLIPSIS


def justify(left: str, right: str, total_width: int, min_padding: int) -> str:
    """Compose a line with left flush-left and right flush-right.

    The result is exactly total_width visible characters wide unless the
    two halves plus min_padding do not fit, in which case min_padding spaces
    separate them and the line overflows.
    """
    padding = max(total_width - visual_length(left) - visual_length(right), min_padding, 0)
    return f"{left}{' ' * padding}{right}"
