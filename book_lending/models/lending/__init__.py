"""Lending domain models."""

from book_lending.models.lending.catalog import Book, User
from book_lending.models.lending.enums import ReservationStatus
from book_lending.models.lending.reservation import (
    Reservation,
    validate_calendar_date,
    validate_rental_days,
)
from book_lending.models.lending.views import ReservationRequest, ReservationView

__all__ = [
    "Book",
    "Reservation",
    "ReservationRequest",
    "ReservationStatus",
    "ReservationView",
    "User",
    "validate_calendar_date",
    "validate_rental_days",
]
