"""Data models for the progress renderers.

Defines the records that flow from the test runner into the formatters:
- GroupStatus: Displayed state of a group line
- GroupState: Live aggregate counts for one group (e.g. one test file)
- RunCounters: Items started so far versus the expected total
- Location, ErrorInfo: Metadata supplied with item events
- FailureRecord, PendingRecord: Captured at event time for end-of-run reports
- RunSummary: Totals handed over when the run finishes
"""

import os
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any

UNKNOWN_GROUP = "unknown"


class GroupStatus(Enum):
    """Displayed status of a group."""

    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


@dataclass(frozen=True)
class Location:
    """Source location of an item.

    Attributes:
        file: File path as reported by the runner (e.g. "spec/models/user_spec.rb")
        line: Line number, if known
    """

    file: str | None
    line: int | None = None

    @property
    def group_id(self) -> str:
        """Group identifier for this location: the file's basename."""
        if not self.file:
            return UNKNOWN_GROUP
        return os.path.basename(self.file) or UNKNOWN_GROUP

    def short_path(self, segments: int = 2) -> str:
        """Last segments of the file path joined with "/"."""
        if not self.file:
            return UNKNOWN_GROUP
        parts = [p for p in self.file.replace("\\", "/").split("/") if p]
        return "/".join(parts[-segments:]) if parts else UNKNOWN_GROUP


@dataclass(frozen=True)
class ErrorInfo:
    """Exception detail of a failed item, captured as data.

    Attributes:
        type_name: Exception class name (e.g. "AssertionError")
        message: Full exception message
        stack_frames: Formatted stack frames, innermost (raising frame) first
    """

    type_name: str
    message: str
    stack_frames: tuple[str, ...] = ()

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        """Capture an ErrorInfo from a raised exception."""
        frames = tuple(f"{fs.filename}:{fs.lineno}:in {fs.name}" for fs in reversed(traceback.extract_tb(exc.__traceback__)))
        return cls(type_name=type(exc).__name__, message=str(exc), stack_frames=frames)

    def first_line(self, max_length: int = 100) -> str:
        """First line of the message, truncated to max_length characters."""
        lines = self.message.splitlines()
        message = lines[0] if lines else ""
        if len(message) > max_length:
            return message[: max_length - 3] + "..."
        return message


@dataclass
class GroupState:
    """Aggregate state of one group while the run is in progress.

    Attributes:
        identifier: Group key, stable for the run
        passed_count: Items that passed
        failed_count: Items that failed
        pending_count: Items marked pending
        current_item_label: Description of the item executing now, if any
        finalized: Whether the group's final line has been written
        final_status: Status frozen at finalization
    """

    identifier: str
    passed_count: int = 0
    failed_count: int = 0
    pending_count: int = 0
    current_item_label: str | None = None
    finalized: bool = False
    final_status: GroupStatus | None = None

    @property
    def item_count(self) -> int:
        return self.passed_count + self.failed_count + self.pending_count

    @property
    def status(self) -> GroupStatus:
        """RUNNING until finalized, then the frozen final status."""
        if self.final_status is not None:
            return self.final_status
        return GroupStatus.RUNNING

    def compute_status(self) -> GroupStatus:
        """Status derived from the counts: any failure wins, then pending."""
        if self.failed_count > 0:
            return GroupStatus.FAILED
        if self.pending_count > 0:
            return GroupStatus.PENDING
        return GroupStatus.PASSED

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "identifier": self.identifier,
            "passed_count": self.passed_count,
            "failed_count": self.failed_count,
            "pending_count": self.pending_count,
            "current_item_label": self.current_item_label,
            "finalized": self.finalized,
            "status": self.status.value,
        }


@dataclass
class RunCounters:
    """Run-wide progress counters.

    Attributes:
        current_index: Items started so far (1-based once the first starts)
        total_count: Items expected, fixed at run start
    """

    current_index: int = 0
    total_count: int = 0

    def advance(self) -> int:
        self.current_index += 1
        return self.current_index


@dataclass(frozen=True)
class FailureRecord:
    """A failed item, captured when the failure was reported."""

    group_id: str
    description: str
    location: Location | None = None
    error: ErrorInfo | None = None


@dataclass(frozen=True)
class PendingRecord:
    """A pending item, captured when it was reported."""

    group_id: str
    description: str
    location: Location | None = None


@dataclass(frozen=True)
class RunSummary:
    """End-of-run totals supplied by the test runner.

    Attributes:
        example_count: Items run
        failure_count: Items that failed
        pending_count: Items pending
        duration: Wall-clock duration in seconds
    """

    example_count: int
    failure_count: int = 0
    pending_count: int = 0
    duration: float = 0.0

    @property
    def passed_count(self) -> int:
        return max(self.example_count - self.failure_count - self.pending_count, 0)
