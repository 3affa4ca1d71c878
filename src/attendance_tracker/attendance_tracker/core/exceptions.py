class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateFormat(ValidationError):
    """Raised when a record date is not a YYYY-MM-DD calendar date."""

    def __init__(self, value):
        super().__init__(f"Invalid date (expected YYYY-MM-DD): {value!r}")
        self.value = value


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class ConflictError(DomainError):
    """Raised when a write would duplicate an existing entity."""
