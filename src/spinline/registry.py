"""Explicit formatter registration and lookup.

Runners pick a formatter by name at startup:

    formatter = create_formatter("grouped", output=sys.stderr)
    formatter.on_run_start(len(items))
"""

import sys
from typing import Callable, TextIO

from .callbacks import RunListener
from .config import RendererConfig
from .errors import UnknownFormatterError
from .formatter import GroupedProgressFormatter
from .linear import LinearProgressFormatter

FormatterFactory = Callable[[TextIO, RendererConfig], RunListener]

_FORMATTERS: dict[str, FormatterFactory] = {}


def register_formatter(name: str, factory: FormatterFactory) -> None:
    """Register a formatter factory under name, replacing any previous one.

    Args:
        name: Lookup key (case-insensitive).
        factory: Callable taking (output, config) and returning a RunListener.
    """
    if not name:
        raise ValueError("Formatter name must not be empty")
    _FORMATTERS[name.lower()] = factory


def available_formatters() -> list[str]:
    return sorted(_FORMATTERS)


def create_formatter(name: str = "grouped", output: TextIO | None = None, config: RendererConfig | None = None) -> RunListener:
    """Instantiate a registered formatter.

    Args:
        name: Registered formatter name.
        output: Stream to render to (defaults to sys.stderr).
        config: Renderer settings (defaults to RendererConfig.from_env()).

    Returns:
        A new formatter instance.

    Raises:
        UnknownFormatterError: If no formatter is registered under name.
    """
    factory = _FORMATTERS.get(name.lower())
    if factory is None:
        raise UnknownFormatterError(f"Unknown formatter '{name}' (available: {', '.join(available_formatters())})")
    return factory(output if output is not None else sys.stderr, config if config is not None else RendererConfig.from_env())


def _grouped(output: TextIO, config: RendererConfig) -> RunListener:
    return GroupedProgressFormatter(output=output, config=config)


def _linear(output: TextIO, config: RendererConfig) -> RunListener:
    return LinearProgressFormatter(output=output, config=config)


register_formatter("grouped", _grouped)
register_formatter("progress_bar", _grouped)
register_formatter("linear", _linear)
