"""Background spinner animation for the grouped progress formatter.

A single worker thread ticks at a fixed interval and asks the formatter to
repaint the active group's line with the next spinner frame. Each tick runs
under the lock shared with the formatter's event handlers, so a repaint
never interleaves with a foreground write. The lock is never held while the
thread sleeps.
"""

import logging
import threading
from contextlib import AbstractContextManager
from enum import Enum
from typing import Any, Callable, Sequence

from .config import DEFAULT_SPINNER_INTERVAL

logger = logging.getLogger(__name__)

# Braille spinner frames for the running-group animation
SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class AnimatorState(Enum):
    """Lifecycle state of the spinner thread."""

    IDLE = "idle"
    RUNNING = "running"


class SpinnerAnimator:
    """Periodic repaint driver running on a daemon thread.

    The repaint callback receives the current spinner frame and returns True
    if it drew something. The frame only advances on ticks that drew, so
    ticks with nothing to animate are no-ops.

    Args:
        lock: Lock shared with the foreground writer.
        repaint: Called under the lock once per tick with the current frame.
        interval: Seconds between ticks.
        frames: Spinner glyphs, cycled in order.
    """

    def __init__(
        self,
        lock: AbstractContextManager[Any],
        repaint: Callable[[str], bool],
        interval: float = DEFAULT_SPINNER_INTERVAL,
        frames: Sequence[str] = SPINNER_FRAMES,
    ) -> None:
        if not frames:
            raise ValueError("frames must not be empty")
        self._lock = lock
        self._repaint = repaint
        self._interval = interval
        self._frames = tuple(frames)
        self._frame_index = 0
        self._state_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def frame_index(self) -> int:
        return self._frame_index

    @property
    def current_frame(self) -> str:
        return self._frames[self._frame_index]

    @property
    def state(self) -> AnimatorState:
        with self._state_lock:
            if self._thread is not None and self._thread.is_alive():
                return AnimatorState.RUNNING
            return AnimatorState.IDLE

    @property
    def is_running(self) -> bool:
        return self.state == AnimatorState.RUNNING

    def start(self) -> bool:
        """Start the tick loop if it is not already running.

        Safe to call repeatedly and from several threads: at most one loop
        runs at a time.

        Returns:
            True if this call started a new loop.
        """
        with self._state_lock:
            if self._thread is not None and self._thread.is_alive():
                return False
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(target=self._run, args=(stop_event,), name="SpinnerAnimator", daemon=True)
            self._thread.start()
        logger.debug("Spinner started (interval %.3fs)", self._interval)
        return True

    def stop(self) -> None:
        """Stop the tick loop and wait for the thread to exit.

        Must not be called while holding the shared lock: the final tick
        may be waiting on it.
        """
        with self._state_lock:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
        if thread is None:
            return
        if thread is not threading.current_thread():
            thread.join()
        logger.debug("Spinner stopped")

    def tick(self) -> bool:
        """Run one repaint cycle under the shared lock.

        Returns:
            True if the repaint drew a frame.
        """
        with self._lock:
            painted = self._repaint(self._frames[self._frame_index])
            if painted:
                self._frame_index = (self._frame_index + 1) % len(self._frames)
            return painted

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                logger.error("Spinner repaint failed, stopping animation: %s", e, exc_info=True)
                return
            stop_event.wait(self._interval)

    def __enter__(self) -> "SpinnerAnimator":
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()
