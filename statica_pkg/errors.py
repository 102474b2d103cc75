"""
Exception types raised by Statica.
"""


class StaticaError(Exception):
    """Base class for every error Statica raises on purpose."""


class ConfigError(StaticaError):
    """The site configuration could not be read, parsed or validated."""


class BuildError(StaticaError):
    """The build tried to do something unsafe with the output directory."""
