"""Domain-specific exceptions for the expense tracker core services."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when an expense record cannot be located."""


class StorageError(IOError):
    """Raised when the persistence layer cannot read or write a resource."""


class RangeError(ValueError):
    """Raised when a report cannot be produced for the requested period."""


class InvalidRangeError(RangeError):
    """Raised when the report start date falls after the end date."""


class EmptyResultError(RangeError):
    """Raised when no expenses fall within the requested report period."""
