"""
Error types raised by Lunar Atelier.

Classes:
    LunarAtelierError: Base class for all library errors
    ImageLoadError: A source image could not be read, fetched or decoded
    InvalidImageError: A decoded pixel buffer is empty or inconsistent
    InvalidParameterError: An adjustment value or preset name is invalid
    EditNotFoundError: A saved edit or album id is unknown
"""


class LunarAtelierError(Exception):
    """Base class for Lunar Atelier errors."""


class ImageLoadError(LunarAtelierError):
    """Raised when an image source cannot be fetched or decoded."""


class InvalidImageError(LunarAtelierError, ValueError):
    """Raised when a pixel buffer has no pixels or does not match its size."""


class InvalidParameterError(LunarAtelierError, ValueError):
    """Raised when an adjustment value is outside its domain."""


class EditNotFoundError(LunarAtelierError, KeyError):
    """Raised when a stored edit or album does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""
