"""Animated one-line-per-group progress formatter.

Renders a test run with a spinner on the group (e.g. test file) currently
executing and a static result line for every finished group:

    ✔ user_spec.rb                                              [40% 4/10]
    ✗ order_spec.rb                                             [70% 7/10]
    ⠹ cart_spec.rb --> adds an item to the cart                 [80% 8/10]

Icons: ✔ all items passed (green), ✗ any item failed (red), ⊘ pending
items but no failures (cyan), spinner while running (yellow).

Thread-safe: the runner's callbacks and the spinner thread share the
store's lock, and only one of them writes to the output at a time.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Sequence, TextIO

from .animation import SpinnerAnimator
from .config import RendererConfig
from .layout import CARRIAGE_RETURN, CLEAR_LINE, colorize, justify, truncate, visual_length
from .models import (
    UNKNOWN_GROUP,
    ErrorInfo,
    FailureRecord,
    GroupState,
    GroupStatus,
    Location,
    PendingRecord,
    RunSummary,
)
from .progress_bar import percentage
from .reporting import FAILED_ICON, PASSED_ICON, PENDING_ICON, render_failures, render_pending, render_summary
from .store import GroupStore
from .terminal import TerminalMetrics

logger = logging.getLogger(__name__)

_STATUS_ICONS = {
    GroupStatus.PASSED: PASSED_ICON,
    GroupStatus.FAILED: FAILED_ICON,
    GroupStatus.PENDING: PENDING_ICON,
}

_STATUS_COLORS = {
    GroupStatus.PASSED: "green",
    GroupStatus.FAILED: "red",
    GroupStatus.RUNNING: "yellow",
    GroupStatus.PENDING: "cyan",
}

_ARROW = "-->"
_RUNNING_PLACEHOLDER = "running..."


@dataclass(frozen=True)
class _ItemContext:
    """Metadata of the item currently running in a group."""

    description: str
    location: Location | None


class GroupedProgressFormatter:
    """Spinner-animated progress formatter with one line per group.

    Implements RunListener. Create one instance per run.

    Args:
        output: Stream to render to (defaults to sys.stderr).
        config: Renderer settings (defaults to RendererConfig()).
        metrics: Terminal width provider (defaults to one for output).
    """

    def __init__(
        self,
        output: TextIO | None = None,
        config: RendererConfig | None = None,
        metrics: TerminalMetrics | None = None,
    ) -> None:
        self._output = output if output is not None else sys.stderr
        self._config = config if config is not None else RendererConfig()
        self._metrics = metrics if metrics is not None else TerminalMetrics(self._output, self._config.default_terminal_width, self._config.terminal_width)
        self._store = GroupStore()
        self._lock = self._store.lock
        self._animator = SpinnerAnimator(self._lock, self._repaint_active, self._config.spinner_interval)
        self._items: dict[str, _ItemContext] = {}
        self._failures: list[FailureRecord] = []
        self._pending: list[PendingRecord] = []

    @property
    def store(self) -> GroupStore:
        return self._store

    @property
    def animator(self) -> SpinnerAnimator:
        return self._animator

    @property
    def failures(self) -> list[FailureRecord]:
        """Failures captured so far, in arrival order."""
        with self._lock:
            return list(self._failures)

    @property
    def pending(self) -> list[PendingRecord]:
        """Pending items captured so far, in arrival order."""
        with self._lock:
            return list(self._pending)

    # Lifecycle callbacks

    def on_run_start(self, total_count: int) -> None:
        """Record the expected item count and emit a leading blank line."""
        with self._lock:
            self._store.counters.total_count = max(total_count, 0)
            self._write("\n")

    def on_item_start(
        self,
        group_id: str | None,
        label: str,
        location: Location | None = None,
        full_description: str | None = None,
    ) -> None:
        """Switch to group_id, finalizing the previous group if it changed.

        Args:
            group_id: Group of the item (None maps to "unknown").
            label: Description shown next to the spinner.
            location: Source location, used in reports.
            full_description: Description used in reports (defaults to label).
        """
        group_id = group_id or UNKNOWN_GROUP
        with self._lock:
            previous = self._store.active_group()
            if previous is not None and previous != group_id:
                self._finalize_group(previous)

            self._store.start_item(group_id, label)
            self._items[group_id] = _ItemContext(full_description or label, location)
            self._animator.start()

    def on_item_passed(self, group_id: str | None) -> None:
        group_id = group_id or UNKNOWN_GROUP
        with self._lock:
            self._store.record_passed(group_id)
            self._items.pop(group_id, None)

    def on_item_failed(self, group_id: str | None, error: ErrorInfo | None = None) -> None:
        """Count a failure and capture it for the failure report."""
        group_id = group_id or UNKNOWN_GROUP
        with self._lock:
            self._store.record_failed(group_id)
            item = self._items.pop(group_id, None)
            self._failures.append(
                FailureRecord(
                    group_id=group_id,
                    description=item.description if item else group_id,
                    location=item.location if item else None,
                    error=error,
                )
            )

    def on_item_pending(self, group_id: str | None) -> None:
        """Count a pending item and capture it for the summary."""
        group_id = group_id or UNKNOWN_GROUP
        with self._lock:
            self._store.record_pending(group_id)
            item = self._items.pop(group_id, None)
            self._pending.append(
                PendingRecord(
                    group_id=group_id,
                    description=item.description if item else group_id,
                    location=item.location if item else None,
                )
            )

    def on_run_end(self, summary: RunSummary) -> None:
        """Finalize the last group, stop the spinner and print the summary."""
        with self._lock:
            active = self._store.active_group()
            if active is not None:
                self._finalize_group(active)

        # The spinner may be waiting on the lock, so stop it outside of it
        self._animator.stop()

        with self._lock:
            lines = render_summary(summary, self._metrics.width(), self._config.use_color)
            lines.extend(render_pending(self._pending, self._config.use_color))
            self._write_lines(lines)

    def on_dump_failures(self, failures: Sequence[FailureRecord] | None = None) -> None:
        """Print failure details; does nothing when there are none.

        Args:
            failures: Failures to report (defaults to the captured ones).
        """
        with self._lock:
            records = self._failures if failures is None else list(failures)
            lines = render_failures(records, self._config.backtrace_lines, self._config.use_color)
            if lines:
                self._write_lines(lines)

    def finalize(self, group_id: str) -> bool:
        """Finalize a group and write its result line.

        Returns:
            True if the group was finalized by this call, False if it was
            unknown or already final.
        """
        with self._lock:
            return self._finalize_group(group_id)

    def get_snapshot(self) -> list[dict[str, Any]]:
        """Get a snapshot of all group states for testing."""
        return self._store.get_snapshot()

    # Rendering (callers hold the lock)

    def format_progress(self) -> str:
        """Progress fraction such as "[40% 4/10]"."""
        counters = self._store.counters
        pct = percentage(counters.current_index, counters.total_count)
        return f"[{pct}% {counters.current_index}/{counters.total_count}]"

    def _finalize_group(self, group_id: str) -> bool:
        state = self._store.finalize(group_id)
        if state is None:
            return False
        logger.debug("Finalized group %s: %s", group_id, state.status.name)
        self._write(f"{CARRIAGE_RETURN}{CLEAR_LINE}{self._final_line(state)}\n")
        return True

    def _final_line(self, state: GroupState) -> str:
        status = state.status
        color = _STATUS_COLORS[status]
        use_color = self._config.use_color
        left = f"{colorize(_STATUS_ICONS[status], color, use_color)} {colorize(state.identifier, color, use_color)}"
        right = colorize(self.format_progress(), "bright_white", use_color)
        return justify(left, right, self._metrics.width(), self._config.min_padding)

    def _running_line(self, state: GroupState, frame: str) -> str:
        width = self._metrics.width()
        min_padding = self._config.min_padding
        group = state.identifier
        description = state.current_item_label or _RUNNING_PLACEHOLDER
        progress = self.format_progress()

        left = f"{frame} {group} {_ARROW} {description}"
        if visual_length(left) + visual_length(progress) + min_padding >= width:
            # Everything before the description: frame, spaces and the arrow
            prefix_length = visual_length(frame) + visual_length(group) + len(_ARROW) + 3
            max_description = width - prefix_length - visual_length(progress) - min_padding
            max_description = max(max_description, self._config.min_description_length)
            description = truncate(description, max_description)

        use_color = self._config.use_color
        colored_left = (
            f"{colorize(frame, 'yellow', use_color)} {colorize(group, 'yellow', use_color)} "
            f"{_ARROW} {colorize(description, 'yellow', use_color)}"
        )
        colored_right = colorize(progress, "bright_white", use_color)
        return justify(colored_left, colored_right, width, min_padding)

    def _repaint_active(self, frame: str) -> bool:
        """Spinner tick: redraw the active group's running line in place."""
        group_id = self._store.active_group()
        if group_id is None:
            return False
        state = self._store.get(group_id)
        if state is None:
            return False
        self._write(f"{CARRIAGE_RETURN}{CLEAR_LINE}{self._running_line(state, frame)}")
        return True

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def _write_lines(self, lines: list[str]) -> None:
        self._write("".join(f"{line}\n" for line in lines))
