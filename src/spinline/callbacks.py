"""Lifecycle callback protocol consumed by the progress formatters.

A test runner drives a formatter through these callbacks, in order:
on_run_start, then per item on_item_start followed by exactly one of
on_item_passed / on_item_failed / on_item_pending, then on_run_end and
on_dump_failures.
"""

from typing import Protocol, Sequence, runtime_checkable

from .models import ErrorInfo, FailureRecord, Location, RunSummary


@runtime_checkable
class RunListener(Protocol):
    """Protocol for receiving test run lifecycle events."""

    def on_run_start(self, total_count: int) -> None:
        """Called once before any item starts.

        Args:
            total_count: Number of items the run will execute.
        """
        ...

    def on_item_start(
        self,
        group_id: str | None,
        label: str,
        location: Location | None = None,
        full_description: str | None = None,
    ) -> None:
        """Called when an item begins executing.

        Args:
            group_id: Group the item belongs to (e.g. its file's basename).
            label: Short item description shown while it runs.
            location: Source location of the item.
            full_description: Description used in reports (defaults to label).
        """
        ...

    def on_item_passed(self, group_id: str | None) -> None: ...

    def on_item_failed(self, group_id: str | None, error: ErrorInfo | None = None) -> None: ...

    def on_item_pending(self, group_id: str | None) -> None: ...

    def on_run_end(self, summary: RunSummary) -> None:
        """Called once after the last item with the run's totals."""
        ...

    def on_dump_failures(self, failures: Sequence[FailureRecord] | None = None) -> None:
        """Called after on_run_end to report failure details."""
        ...


class NullListener:
    """No-op listener for runs that should not render anything."""

    def on_run_start(self, total_count: int) -> None:
        pass

    def on_item_start(
        self,
        group_id: str | None,
        label: str,
        location: Location | None = None,
        full_description: str | None = None,
    ) -> None:
        pass

    def on_item_passed(self, group_id: str | None) -> None:
        pass

    def on_item_failed(self, group_id: str | None, error: ErrorInfo | None = None) -> None:
        pass

    def on_item_pending(self, group_id: str | None) -> None:
        pass

    def on_run_end(self, summary: RunSummary) -> None:
        pass

    def on_dump_failures(self, failures: Sequence[FailureRecord] | None = None) -> None:
        pass
