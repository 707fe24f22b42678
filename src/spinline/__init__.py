"""Terminal progress reporting for test runs and other counted work.

Public API:
    GroupedProgressFormatter: Spinner-animated formatter, one line per group.
    LinearProgressFormatter: Single progress bar for the whole run.
    ProgressLoader: Standalone in-place progress bar for any batch operation.
    create_formatter / register_formatter: Explicit formatter registration.
"""

from .animation import SPINNER_FRAMES, AnimatorState, SpinnerAnimator
from .callbacks import NullListener, RunListener
from .config import RendererConfig
from .errors import ConfigError, SpinlineError, UnknownFormatterError
from .formatter import GroupedProgressFormatter
from .layout import colorize, justify, strip_ansi, truncate, visual_length
from .linear import LinearProgressFormatter
from .models import (
    ErrorInfo,
    FailureRecord,
    GroupState,
    GroupStatus,
    Location,
    PendingRecord,
    RunCounters,
    RunSummary,
)
from .progress_bar import ProgressLoader, build_progress_bar, format_time, percentage
from .registry import available_formatters, create_formatter, register_formatter
from .store import GroupStore
from .terminal import TerminalMetrics

__all__ = [
    "SPINNER_FRAMES",
    "AnimatorState",
    "ConfigError",
    "ErrorInfo",
    "FailureRecord",
    "GroupState",
    "GroupStatus",
    "GroupStore",
    "GroupedProgressFormatter",
    "LinearProgressFormatter",
    "Location",
    "NullListener",
    "PendingRecord",
    "ProgressLoader",
    "RendererConfig",
    "RunCounters",
    "RunListener",
    "RunSummary",
    "SpinlineError",
    "SpinnerAnimator",
    "TerminalMetrics",
    "UnknownFormatterError",
    "available_formatters",
    "build_progress_bar",
    "colorize",
    "create_formatter",
    "format_time",
    "justify",
    "percentage",
    "register_formatter",
    "strip_ansi",
    "truncate",
    "visual_length",
]
