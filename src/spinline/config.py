"""Renderer configuration.

Presentation tuning knobs for the progress renderers. The defaults match the
classic look (80ms spinner, 120-column fallback). A few of them can be
overridden from the environment:

- SPINLINE_SPINNER_INTERVAL: spinner tick interval in seconds (e.g. "0.05")
- SPINLINE_TERMINAL_WIDTH: force a terminal width instead of detecting it
- NO_COLOR: disable ANSI colors when set to any non-empty value
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SPINNER_INTERVAL = 0.08
DEFAULT_TERMINAL_WIDTH = 120
DEFAULT_BAR_WIDTH = 40
MIN_PADDING = 2
MIN_DESCRIPTION_LENGTH = 10
BACKTRACE_LINES = 3


@dataclass(frozen=True)
class RendererConfig:
    """Settings shared by the grouped and linear formatters.

    Attributes:
        spinner_interval: Seconds between spinner repaints.
        default_terminal_width: Width used when the output is not a terminal.
        terminal_width: Forced width; skips terminal detection when set.
        min_padding: Minimum spaces between the left and right halves of a line.
        min_description_length: Floor for the truncated item description.
        backtrace_lines: Stack frames shown per failure.
        bar_width: Inner width of the linear progress bar.
        use_color: Emit ANSI color sequences.
    """

    spinner_interval: float = DEFAULT_SPINNER_INTERVAL
    default_terminal_width: int = DEFAULT_TERMINAL_WIDTH
    terminal_width: int | None = None
    min_padding: int = MIN_PADDING
    min_description_length: int = MIN_DESCRIPTION_LENGTH
    backtrace_lines: int = BACKTRACE_LINES
    bar_width: int = DEFAULT_BAR_WIDTH
    use_color: bool = True

    def __post_init__(self) -> None:
        if self.spinner_interval <= 0:
            raise ConfigError(f"spinner_interval must be positive, got {self.spinner_interval}")
        if self.default_terminal_width <= 0:
            raise ConfigError(f"default_terminal_width must be positive, got {self.default_terminal_width}")
        if self.terminal_width is not None and self.terminal_width <= 0:
            raise ConfigError(f"terminal_width must be positive, got {self.terminal_width}")
        if self.min_padding < 0:
            raise ConfigError(f"min_padding must not be negative, got {self.min_padding}")
        if self.min_description_length < 4:
            raise ConfigError(f"min_description_length must be at least 4, got {self.min_description_length}")
        if self.backtrace_lines < 0:
            raise ConfigError(f"backtrace_lines must not be negative, got {self.backtrace_lines}")
        if self.bar_width < 1:
            raise ConfigError(f"bar_width must be at least 1, got {self.bar_width}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RendererConfig":
        """Build a config from environment variables.

        Malformed values are logged and ignored so a bad variable never
        prevents a run from reporting.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Returns:
            A RendererConfig with any valid overrides applied.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        interval = env.get("SPINLINE_SPINNER_INTERVAL")
        if interval:
            try:
                value = float(interval)
            except ValueError:
                logger.warning("Ignoring SPINLINE_SPINNER_INTERVAL=%r: not a number", interval)
            else:
                if value > 0:
                    overrides["spinner_interval"] = value
                else:
                    logger.warning("Ignoring SPINLINE_SPINNER_INTERVAL=%r: must be positive", interval)

        width = env.get("SPINLINE_TERMINAL_WIDTH")
        if width:
            if width.isdigit() and int(width) > 0:
                overrides["terminal_width"] = int(width)
            else:
                logger.warning("Ignoring SPINLINE_TERMINAL_WIDTH=%r: must be a positive integer", width)

        if env.get("NO_COLOR"):
            overrides["use_color"] = False

        return cls(**overrides)  # type: ignore[arg-type]
