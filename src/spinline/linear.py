"""Single progress bar formatter for a test run.

Shows one Docker-style bar for the whole run, with the last finished item
as its description:

    [===============>                        ] 38% 5/13 ✓ models/user_spec.rb:12 1s/3s
"""

import logging
import sys
from typing import Sequence, TextIO

from .config import RendererConfig
from .models import UNKNOWN_GROUP, ErrorInfo, FailureRecord, Location, PendingRecord, RunSummary
from .progress_bar import ProgressLoader
from .reporting import format_location, plain_summary_line

logger = logging.getLogger(__name__)

PASSED_SYMBOL = "✓"
FAILED_SYMBOL = "✗"
PENDING_SYMBOL = "*"

_MESSAGE_MAX_LENGTH = 100


class LinearProgressFormatter:
    """Non-animated progress formatter built on ProgressLoader.

    Implements RunListener. Every finished item advances the bar by one.

    Args:
        output: Stream to render to (defaults to sys.stderr).
        config: Renderer settings; only bar_width is used.
    """

    def __init__(self, output: TextIO | None = None, config: RendererConfig | None = None) -> None:
        self._output = output if output is not None else sys.stderr
        self._config = config if config is not None else RendererConfig()
        self._loader: ProgressLoader | None = None
        self._items: dict[str, tuple[str, Location | None]] = {}
        self._failures: list[FailureRecord] = []
        self._pending: list[PendingRecord] = []

    @property
    def loader(self) -> ProgressLoader | None:
        return self._loader

    @property
    def failures(self) -> list[FailureRecord]:
        return list(self._failures)

    @property
    def pending(self) -> list[PendingRecord]:
        return list(self._pending)

    def on_run_start(self, total_count: int) -> None:
        self._loader = ProgressLoader(
            total=max(total_count, 0),
            width=self._config.bar_width,
            description="Running examples",
            output=self._output,
        )

    def on_item_start(
        self,
        group_id: str | None,
        label: str,
        location: Location | None = None,
        full_description: str | None = None,
    ) -> None:
        self._items[group_id or UNKNOWN_GROUP] = (full_description or label, location)

    def on_item_passed(self, group_id: str | None) -> None:
        _, location = self._pop_item(group_id)
        self._advance(PASSED_SYMBOL, location)

    def on_item_failed(self, group_id: str | None, error: ErrorInfo | None = None) -> None:
        description, location = self._pop_item(group_id)
        self._failures.append(FailureRecord(group_id or UNKNOWN_GROUP, description, location, error))
        self._advance(FAILED_SYMBOL, location)

    def on_item_pending(self, group_id: str | None) -> None:
        description, location = self._pop_item(group_id)
        self._pending.append(PendingRecord(group_id or UNKNOWN_GROUP, description, location))
        self._advance(PENDING_SYMBOL, location)

    def on_run_end(self, summary: RunSummary) -> None:
        """Complete the bar and print the summary and pending list."""
        self._ensure_loader().finish(description="Completed")

        lines = ["", plain_summary_line(summary)]
        if self._pending:
            lines.append("")
            lines.append("Pending examples:")
            lines.extend(f"  {record.description}" for record in self._pending)
        self._write_lines(lines)

    def on_dump_failures(self, failures: Sequence[FailureRecord] | None = None) -> None:
        records = self._failures if failures is None else list(failures)
        if not records:
            return

        lines = ["", "Failures:", ""]
        for index, failure in enumerate(records, start=1):
            lines.append(f"  {index}) {failure.description}")
            lines.append(f"     {_failure_message(failure.error)}")
            lines.append(f"     # {format_location(failure.location)}")
            lines.append("")
        self._write_lines(lines)

    def _pop_item(self, group_id: str | None) -> tuple[str, Location | None]:
        group_id = group_id or UNKNOWN_GROUP
        return self._items.pop(group_id, (group_id, None))

    def _advance(self, symbol: str, location: Location | None) -> None:
        self._ensure_loader().increment(description=_item_description(symbol, location))

    def _ensure_loader(self) -> ProgressLoader:
        if self._loader is None:
            logger.debug("Item reported before run start, creating loader without a total")
            self.on_run_start(0)
        assert self._loader is not None
        return self._loader

    def _write_lines(self, lines: list[str]) -> None:
        self._output.write("".join(f"{line}\n" for line in lines))
        self._output.flush()


def _item_description(symbol: str, location: Location | None) -> str:
    if location is None:
        return f"{symbol} {UNKNOWN_GROUP}"
    line = f":{location.line}" if location.line is not None else ""
    return f"{symbol} {location.short_path()}{line}"


def _failure_message(error: ErrorInfo | None) -> str:
    if error is None:
        return "No exception message"
    return error.first_line(_MESSAGE_MAX_LENGTH)
