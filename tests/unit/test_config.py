"""Unit tests for RendererConfig."""

import logging

import pytest

from spinline.config import RendererConfig
from spinline.errors import ConfigError, SpinlineError


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self) -> None:
        config = RendererConfig()
        assert config.spinner_interval == pytest.approx(0.08)
        assert config.default_terminal_width == 120
        assert config.terminal_width is None
        assert config.min_padding == 2
        assert config.min_description_length == 10
        assert config.backtrace_lines == 3
        assert config.bar_width == 40
        assert config.use_color is True

    def test_frozen(self) -> None:
        config = RendererConfig()
        with pytest.raises(AttributeError):
            config.min_padding = 5  # type: ignore[misc]


class TestValidation:
    """Tests for out-of-range values."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"spinner_interval": 0},
            {"spinner_interval": -1.0},
            {"default_terminal_width": 0},
            {"terminal_width": -3},
            {"min_padding": -1},
            {"min_description_length": 3},
            {"backtrace_lines": -1},
            {"bar_width": 0},
        ],
    )
    def test_invalid_values_raise(self, kwargs: dict) -> None:
        with pytest.raises(ConfigError):
            RendererConfig(**kwargs)

    def test_config_error_hierarchy(self) -> None:
        assert issubclass(ConfigError, SpinlineError)
        assert issubclass(ConfigError, ValueError)


class TestFromEnv:
    """Tests for environment overrides."""

    def test_empty_environment(self) -> None:
        assert RendererConfig.from_env({}) == RendererConfig()

    def test_overrides(self) -> None:
        config = RendererConfig.from_env(
            {"SPINLINE_SPINNER_INTERVAL": "0.05", "SPINLINE_TERMINAL_WIDTH": "100", "NO_COLOR": "1"}
        )
        assert config.spinner_interval == pytest.approx(0.05)
        assert config.terminal_width == 100
        assert config.use_color is False

    def test_empty_no_color_keeps_color(self) -> None:
        assert RendererConfig.from_env({"NO_COLOR": ""}).use_color is True

    @pytest.mark.parametrize(
        "environ",
        [
            {"SPINLINE_SPINNER_INTERVAL": "fast"},
            {"SPINLINE_SPINNER_INTERVAL": "-0.5"},
            {"SPINLINE_TERMINAL_WIDTH": "wide"},
            {"SPINLINE_TERMINAL_WIDTH": "0"},
        ],
    )
    def test_malformed_values_are_ignored(self, environ: dict, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="spinline.config"):
            assert RendererConfig.from_env(environ) == RendererConfig()
        assert "Ignoring" in caplog.text
