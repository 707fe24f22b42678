"""Per-group aggregate state for the grouped progress formatter.

The store is the single source of truth for what gets rendered. The
formatter mutates it from the runner's thread while the spinner thread
reads it to repaint; both go through the store's lock, which is reentrant
so a caller can hold it across several store calls and an output write.
"""

import logging
import threading
from typing import Any

from .models import UNKNOWN_GROUP, GroupState, RunCounters

logger = logging.getLogger(__name__)


class GroupStore:
    """Map from group identifier to its live GroupState.

    Thread-safe: every method acquires the store lock. Hold ``store.lock``
    yourself to make a read-modify-render sequence atomic.

    Usage:
        store = GroupStore()
        store.counters.total_count = 3
        store.start_item("user_spec.rb", "creates a user")
        store.record_passed("user_spec.rb")
        state = store.finalize("user_spec.rb")
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.counters = RunCounters()
        self._groups: dict[str, GroupState] = {}
        self._order: list[str] = []
        self._history: list[GroupState] = []
        self._active: str | None = None

    def start_item(self, group_id: str | None, label: str | None) -> GroupState:
        """Record that an item of group_id started executing.

        Creates the group on first use. A group that was already finalized
        is reopened as a fresh record; the finalized one is kept in history.

        Returns:
            The group's live state.
        """
        group_id = group_id or UNKNOWN_GROUP
        with self.lock:
            state = self._groups.get(group_id)
            if state is None:
                state = GroupState(group_id)
                self._groups[group_id] = state
                self._order.append(group_id)
            elif state.finalized:
                logger.debug("Reopening finalized group %s", group_id)
                self._history.append(state)
                state = GroupState(group_id)
                self._groups[group_id] = state
            state.current_item_label = label
            self._active = group_id
            self.counters.advance()
            return state

    def record_passed(self, group_id: str | None) -> GroupState:
        return self._record(group_id, "passed_count")

    def record_failed(self, group_id: str | None) -> GroupState:
        return self._record(group_id, "failed_count")

    def record_pending(self, group_id: str | None) -> GroupState:
        return self._record(group_id, "pending_count")

    def _record(self, group_id: str | None, counter: str) -> GroupState:
        group_id = group_id or UNKNOWN_GROUP
        with self.lock:
            state = self._groups.get(group_id)
            if state is None:
                # Result without a start event: track it anyway
                state = GroupState(group_id)
                self._groups[group_id] = state
                self._order.append(group_id)
            if state.finalized:
                logger.debug("Ignoring result for finalized group %s", group_id)
                return state
            setattr(state, counter, getattr(state, counter) + 1)
            state.current_item_label = None
            return state

    def finalize(self, group_id: str | None) -> GroupState | None:
        """Freeze a group's status.

        Idempotent: finalizing an already-finalized (or unknown) group
        changes nothing.

        Returns:
            The group's state if this call finalized it, otherwise None.
        """
        group_id = group_id or UNKNOWN_GROUP
        with self.lock:
            state = self._groups.get(group_id)
            if state is None or state.finalized:
                return None
            state.final_status = state.compute_status()
            state.finalized = True
            state.current_item_label = None
            if self._active == group_id:
                self._active = None
            return state

    def active_group(self) -> str | None:
        """Identifier of the group currently receiving events, if unfinalized."""
        with self.lock:
            if self._active is None:
                return None
            state = self._groups.get(self._active)
            if state is None or state.finalized:
                return None
            return self._active

    def get(self, group_id: str) -> GroupState | None:
        with self.lock:
            return self._groups.get(group_id)

    def __contains__(self, group_id: object) -> bool:
        with self.lock:
            return group_id in self._groups

    def __len__(self) -> int:
        with self.lock:
            return len(self._groups)

    @property
    def history(self) -> list[GroupState]:
        """Finalized records of groups that were later reopened."""
        with self.lock:
            return list(self._history)

    def get_snapshot(self) -> list[dict[str, Any]]:
        """Get a snapshot of the live group states in first-seen order, for testing."""
        with self.lock:
            return [self._groups[group_id].to_dict() for group_id in self._order]
