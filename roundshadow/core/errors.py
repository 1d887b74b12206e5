"""
Exception types raised by roundshadow.

Every error the library raises derives from RoundShadowError so the CLI
can report failures with a single except clause. Errors about bad values
also derive from ValueError.
"""


class RoundShadowError(Exception):
    """Base class for all roundshadow errors."""


class InvalidDimensions(RoundShadowError, ValueError):
    """Raster is empty, malformed, or a computed canvas is out of range."""


class UnsupportedRadius(RoundShadowError, ValueError):
    """Corner radius cannot be interpreted as an integer pixel count."""


class BlurParameterOutOfRange(RoundShadowError, ValueError):
    """Blur radius is negative, not an integer, or absurdly large."""


class ConfigError(RoundShadowError, ValueError):
    """
    Invalid configuration value.

    Attributes:
        flag: Name of the offending option (e.g. '--alpha' or 'shadow.spread')
        value: The raw value that was rejected
    """

    def __init__(self, flag: str, value, reason: str):
        self.flag = flag
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {flag}: {value!r} ({reason})")


class InputError(RoundShadowError):
    """Input bytes could not be read."""


class DecodeError(RoundShadowError):
    """Input bytes are not a decodable image."""


class EncodeError(RoundShadowError):
    """Raster could not be encoded to the requested format."""
