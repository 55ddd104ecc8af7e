"""Request and projection records at the service boundary."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from book_lending.models.lending.catalog import Book, User
from book_lending.models.lending.enums import ReservationStatus
from book_lending.models.lending.reservation import Reservation


@dataclass(frozen=True)
class ReservationRequest:
    """Input for creating a reservation."""

    user_id: int
    book_external_id: int
    rental_days: int
    start_date: date


@dataclass(frozen=True)
class ReservationView:
    """Read-only projection of a reservation with display names."""

    reservation_id: int
    user_id: int
    user_name: str
    book_external_id: int
    book_title: str
    rental_days: int
    start_date: date
    expected_return_date: date
    actual_return_date: date | None
    daily_rate: Decimal
    total_fee: Decimal
    late_fee: Decimal
    status: ReservationStatus
    created_at: datetime

    @classmethod
    def from_reservation(cls, reservation: Reservation, user: User, book: Book) -> "ReservationView":
        return cls(
            reservation_id=reservation.reservation_id,
            user_id=reservation.user_id,
            user_name=user.name,
            book_external_id=reservation.book_external_id,
            book_title=book.title,
            rental_days=reservation.rental_days,
            start_date=reservation.start_date,
            expected_return_date=reservation.expected_return_date,
            actual_return_date=reservation.actual_return_date,
            daily_rate=reservation.daily_rate,
            total_fee=reservation.total_fee,
            late_fee=reservation.late_fee,
            status=reservation.status,
            created_at=reservation.created_at,
        )
