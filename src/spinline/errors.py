"""Exceptions raised by spinline during setup.

Rendering never raises: these errors surface only while configuring a
renderer or resolving a formatter by name.
"""


class SpinlineError(Exception):
    """Base class for all spinline errors."""

    pass


class ConfigError(SpinlineError, ValueError):
    """Raised when a RendererConfig value is out of range."""

    pass


class UnknownFormatterError(SpinlineError, LookupError):
    """Raised when create_formatter() is asked for an unregistered name."""

    pass
