"""
Conversion Errors

All errors raised by the psychrometric engine are validation failures.
They are raised at the point of violation and carry a message that is
safe to show to the end user verbatim.
"""


class ConversionError(ValueError):
    """Base class for psychrometric conversion errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ConversionError):
    """Humidity value out of physical bounds, or a non-numeric/missing value."""


class InvalidSourceError(ConversionError):
    """Unrecognized humidity source tag."""
