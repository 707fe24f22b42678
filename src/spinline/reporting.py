"""End-of-run summary and failure report rendering.

Functions here return lists of lines (without trailing newlines); the
formatters decide where and when to write them.
"""

from typing import Sequence

from .layout import colorize
from .models import FailureRecord, Location, PendingRecord, RunSummary

PASSED_ICON = "✔"
FAILED_ICON = "✗"
PENDING_ICON = "⊘"


def format_duration(seconds: float) -> str:
    """Format a run duration for the summary.

    Examples: "250 milliseconds", "1.5 seconds", "2 minutes 5 seconds".
    """
    seconds = max(seconds, 0)
    if seconds < 1:
        return f"{round(seconds * 1000)} milliseconds"
    if seconds < 60:
        return f"{round(seconds, 2)} seconds"
    minutes = int(seconds // 60)
    remaining_seconds = round(seconds % 60)
    return f"{minutes} minutes {remaining_seconds} seconds"


def format_location(location: Location | None) -> str:
    """Format a location as "./<file>:<line>"."""
    if location is None or not location.file:
        return "./unknown"
    path = location.file
    while path.startswith("./"):
        path = path[2:]
    if location.line is None:
        return f"./{path}"
    return f"./{path}:{location.line}"


def summary_line(summary: RunSummary, use_color: bool = True) -> str:
    """Colored "<N> examples, <F> failures, <P> pending, <S> passed" line.

    Clauses with a zero count are omitted, except the example count.
    """
    parts = [colorize(f"{summary.example_count} examples", "bright_white", use_color)]
    if summary.failure_count > 0:
        parts.append(colorize(f"{summary.failure_count} failures", "red", use_color))
    if summary.pending_count > 0:
        parts.append(colorize(f"{summary.pending_count} pending", "cyan", use_color))
    if summary.passed_count > 0:
        parts.append(colorize(f"{summary.passed_count} passed", "green", use_color))
    return ", ".join(parts)


def plain_summary_line(summary: RunSummary) -> str:
    """Uncolored summary line used by the linear formatter."""
    parts = [f"{summary.example_count} examples"]
    if summary.failure_count > 0:
        parts.append(f"{summary.failure_count} failures")
    if summary.pending_count > 0:
        parts.append(f"{summary.pending_count} pending")
    return f"{', '.join(parts)} (Finished in {format_duration(summary.duration)})"


def render_summary(summary: RunSummary, width: int, use_color: bool = True) -> list[str]:
    """Banner, counts and duration shown when the run ends.

    Args:
        summary: Totals from the test runner.
        width: Terminal width used for the banner rule.
        use_color: Emit ANSI colors.

    Returns:
        Lines to print, in order.
    """
    rule = colorize("=" * max(width, 1), "bright_white", use_color)
    return [
        "",
        "",
        rule,
        colorize("Test Summary", "bright_white", use_color),
        rule,
        "",
        summary_line(summary, use_color),
        f"Duration: {format_duration(summary.duration)}",
        "",
    ]


def render_pending(pending: Sequence[PendingRecord], use_color: bool = True) -> list[str]:
    """Pending items with their locations; empty when there are none."""
    if not pending:
        return []
    lines = ["", colorize("Pending Examples:", "cyan", use_color)]
    for record in pending:
        lines.append(colorize(f"  {PENDING_ICON} {record.description}", "cyan", use_color))
        lines.append(colorize(f"     # {format_location(record.location)}", "cyan", use_color))
    return lines


def render_failures(failures: Sequence[FailureRecord], backtrace_lines: int = 3, use_color: bool = True) -> list[str]:
    """Detail blocks for each failure in arrival order; empty when none.

    Each block has a 1-based index with the full description, the exception
    type and message, the innermost backtrace_lines stack frames and the
    item's source location.
    """
    if not failures:
        return []

    lines = ["", colorize("Failures:", "red", use_color), ""]
    for index, failure in enumerate(failures, start=1):
        lines.append(colorize(f"  {index}) {failure.description}", "red", use_color))
        if failure.error is not None:
            lines.append(colorize(f"     {failure.error.type_name}: {failure.error.message}", "red", use_color))
            for frame in failure.error.stack_frames[:backtrace_lines]:
                lines.append(colorize(f"       {frame}", "red", use_color))
        lines.append(colorize(f"     # {format_location(failure.location)}", "red", use_color))
        lines.append("")
    return lines
