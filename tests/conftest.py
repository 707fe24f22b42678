"""Pytest configuration and fixtures for spinline tests.

Formatter fixtures render into an in-memory stream at a fixed width with a
fast spinner, and always stop the spinner thread on teardown so no daemon
thread outlives its test.
"""

from collections.abc import Iterator
from io import StringIO

import pytest

from spinline.config import RendererConfig
from spinline.formatter import GroupedProgressFormatter


@pytest.fixture
def output() -> StringIO:
    return StringIO()


@pytest.fixture
def config() -> RendererConfig:
    """80 columns, 10ms spinner."""
    return RendererConfig(spinner_interval=0.01, terminal_width=80)


@pytest.fixture
def formatter(output: StringIO, config: RendererConfig) -> Iterator[GroupedProgressFormatter]:
    fmt = GroupedProgressFormatter(output=output, config=config)
    yield fmt
    fmt.animator.stop()
