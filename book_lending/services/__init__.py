"""Application services."""

from book_lending.services.reservation import ReservationService

__all__ = ["ReservationService"]
