"""
Exception types raised at the package boundaries.

The core (parser, classifier, index, generator) never raises for bad input;
these are only used where the package touches the outside world: reading
files, decoding transport messages and loading settings.
"""


class CubbyError(Exception):
    """Base class for all errors raised by this package."""


class ReabankLoadError(CubbyError):
    """A .reabank file or directory could not be read."""


class ProtocolError(CubbyError):
    """A transport envelope was malformed or of an unknown type."""


class ConfigError(CubbyError):
    """Settings were readable but contained invalid values."""
