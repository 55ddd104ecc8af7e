"""Custom exception hierarchy for book-lending."""


class LendingError(Exception):
    """Base exception for all book-lending errors."""


class EntityNotFoundError(LendingError):
    """Raised when a referenced user, book or reservation does not exist."""


class BookUnavailableError(LendingError):
    """Raised when no inventory unit of a book is free."""


class InvalidEntityStateError(LendingError):
    """Raised when an entity is in an invalid state for the operation."""


class InvalidInputError(LendingError):
    """Raised when operation input violates a business rule."""


class ConfigurationError(LendingError):
    """Raised when configuration is invalid or missing."""


class SinkError(LendingError):
    """Raised when a sink operation fails."""
