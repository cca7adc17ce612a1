"""
Error types raised by the data preparation pipeline.

All of them subclass ValueError, so callers catching ValueError around a
cleaning step keep working.
"""


class GeovizError(ValueError):
    """Base class for pipeline errors."""


class SchemaError(GeovizError):
    """A column required by a later step is missing or misnamed."""

    def __init__(self, message, missing=()):
        super().__init__(message)
        self.missing = tuple(missing)


class DateParseError(GeovizError):
    """A date column holds a value that is not a calendar date."""

    def __init__(self, message, values=()):
        super().__init__(message)
        self.values = tuple(values)


class DomainError(GeovizError):
    """A value falls outside its finite domain (e.g. month 13)."""


class PaletteError(GeovizError):
    """Not enough distinct colors for the category domain."""
