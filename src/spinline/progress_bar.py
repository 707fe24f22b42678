"""Docker-style linear progress bar and standalone loader.

Renders a bracketed bar with a percentage and counter, updated in place:

    [=================>                      ] 45% 9/20 Processing file_9.txt 2s/4s

The loader is not tied to test reporting and can be used for downloads,
batch jobs, migrations or any other counted operation:

    loader = ProgressLoader(total=20, description="Processing files")
    for i in range(20):
        loader.update(i + 1, description=f"Processing file_{i + 1}.txt")
    loader.finish(description="All files processed!")
"""

import sys
import time
from typing import Callable, TextIO

from .config import DEFAULT_BAR_WIDTH
from .layout import CARRIAGE_RETURN, CLEAR_LINE


def percentage(current: int, total: int) -> int:
    """Percentage of current over total, rounded; 100 when total is 0."""
    if total == 0:
        return 100
    return round(current / total * 100)


def build_progress_bar(current: int, total: int, width: int) -> str:
    """Build a bracketed progress bar such as "[====>     ]".

    The result is always width + 2 characters; current values outside
    0..total are clamped.
    """
    width = max(width, 0)
    if total == 0:
        return f"[{' ' * width}]"

    filled_width = round(current / total * width)
    filled_width = min(max(filled_width, 0), width)

    filled = "=" * max(filled_width - 1, 0)
    arrow = ">" if filled_width > 0 else ""
    empty = " " * (width - filled_width)
    return f"[{filled}{arrow}{empty}]"


def format_time(seconds: float | None) -> str:
    """Format a duration compactly: "42s", "5m", "2h"."""
    seconds = max(seconds or 0, 0)
    if not seconds:
        return "0s"
    if seconds < 60:
        return f"{round(seconds)}s"
    if seconds < 3600:
        return f"{round(seconds / 60)}m"
    return f"{round(seconds / 3600)}h"


class ProgressLoader:
    """In-place progress bar for a known number of steps.

    Every update, increment and finish repaints the current line
    synchronously; finish() also terminates the line.

    Args:
        total: Number of steps expected.
        width: Inner width of the bar.
        description: Initial description text.
        output: Stream to render to (defaults to sys.stderr).
        clock: Monotonic clock, injectable for testing.
    """

    def __init__(
        self,
        total: int,
        width: int = DEFAULT_BAR_WIDTH,
        description: str | None = None,
        output: TextIO | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.total = total
        self.width = width
        self.current = 0
        self.description = description
        self._output = output if output is not None else sys.stderr
        self._clock = clock
        self._start_time = clock()
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def update(self, current: int, description: str | None = None) -> None:
        """Set the progress to current and repaint.

        Args:
            current: Current progress value.
            description: Replaces the displayed description when given.
        """
        self.current = current
        if description is not None:
            self.description = description
        if not self._finished:
            self._render()

    def increment(self, description: str | None = None) -> None:
        """Advance the progress by one step."""
        self.update(self.current + 1, description=description)

    def finish(self, description: str | None = None) -> None:
        """Complete the bar and move to the next line.

        Calling finish() again repaints the final state but does not emit
        another newline.
        """
        self.current = self.total
        if description is not None:
            self.description = description
        already_finished = self._finished
        self._finished = True
        self._render()
        if not already_finished:
            self._output.write("\n")
            self._output.flush()

    def percentage(self) -> int:
        return percentage(self.current, self.total)

    def elapsed_time(self) -> float:
        """Seconds since the loader was created."""
        return self._clock() - self._start_time

    def estimated_time_remaining(self) -> float | None:
        """Seconds left at the current rate, or None before the first step."""
        if self.current == 0:
            return None
        elapsed = self.elapsed_time()
        if elapsed <= 0:
            return None
        rate = self.current / elapsed
        return (self.total - self.current) / rate

    def format_time(self, seconds: float | None) -> str:
        return format_time(seconds)

    def render_line(self) -> str:
        """Build the line as displayed, without cursor control."""
        parts = [
            build_progress_bar(self.current, self.total, self.width),
            f"{self.percentage()}%",
            f"{self.current}/{self.total}",
        ]
        if self.description:
            parts.append(self.description)
        if not self._finished:
            time_info = self._time_info()
            if time_info:
                parts.append(time_info)
        return " ".join(parts)

    def _render(self) -> None:
        self._output.write(f"{CARRIAGE_RETURN}{CLEAR_LINE}{self.render_line()}")
        self._output.flush()

    def _time_info(self) -> str | None:
        elapsed = self.elapsed_time()
        remaining = self.estimated_time_remaining()
        if remaining is not None and remaining > 0:
            return f"{format_time(elapsed)}/{format_time(remaining + elapsed)}"
        # Only show elapsed time once it is meaningful
        if elapsed > 1:
            return format_time(elapsed)
        return None
