"""Domain models for book lending."""

from book_lending.models.base import Event

__all__ = ["Event"]
