"""Reservation entity and its lifecycle transitions."""

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal

from book_lending.exceptions import InvalidInputError
from book_lending.fees import ZERO_MONEY, days_between, rental_fee, round_money
from book_lending.models.lending.enums import ReservationStatus


def validate_rental_days(rental_days: int) -> None:
    """Reject anything but a positive ``int`` rental duration."""
    if isinstance(rental_days, bool) or not isinstance(rental_days, int):
        raise InvalidInputError(f"Rental days must be an integer, got {rental_days!r}")
    if rental_days <= 0:
        raise InvalidInputError(f"Rental days must be positive, got {rental_days}")


def validate_calendar_date(value: date, name: str) -> None:
    """Reject anything but a plain ``date``; datetimes are refused too."""
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidInputError(f"{name} must be a date, got {value!r}")


@dataclass(frozen=True)
class Reservation:
    """A user's booking of one copy of a book for a fixed number of days.

    Instances are immutable. ``open`` builds the initial ACTIVE
    reservation; ``apply_on_time_return`` and ``apply_overdue_return``
    produce the terminal versions. ``reservation_id`` stays ``None``
    until the store assigns one.
    """

    reservation_id: int | None
    user_id: int
    book_external_id: int
    rental_days: int
    start_date: date
    expected_return_date: date
    daily_rate: Decimal  # Book price snapshot at creation
    total_fee: Decimal
    late_fee: Decimal
    status: ReservationStatus
    created_at: datetime
    actual_return_date: date | None = None

    @classmethod
    def open(
        cls,
        user_id: int,
        book_external_id: int,
        rental_days: int,
        start_date: date,
        book_price: Decimal,
        created_at: datetime | None = None,
    ) -> "Reservation":
        """Build a new ACTIVE reservation priced from ``book_price``.

        Raises
        ------
        InvalidInputError
            If ``rental_days`` is not a positive integer or ``start_date``
            is not a date.
        """
        validate_rental_days(rental_days)
        validate_calendar_date(start_date, "Start date")
        daily_rate = round_money(book_price)
        return cls(
            reservation_id=None,
            user_id=user_id,
            book_external_id=book_external_id,
            rental_days=rental_days,
            start_date=start_date,
            expected_return_date=start_date + timedelta(days=rental_days),
            daily_rate=daily_rate,
            total_fee=rental_fee(daily_rate, rental_days),
            late_fee=ZERO_MONEY,
            status=ReservationStatus.ACTIVE,
            created_at=created_at or datetime.now(),
        )

    def with_id(self, reservation_id: int) -> "Reservation":
        """Copy carrying the store-assigned identifier."""
        return replace(self, reservation_id=reservation_id)

    def days_late(self, return_date: date) -> int:
        """Days past the expected return date; zero or negative when on time."""
        return days_between(self.expected_return_date, return_date)

    def apply_on_time_return(self, return_date: date) -> "Reservation":
        """Close the reservation without a late charge."""
        return self._close(ReservationStatus.RETURNED, return_date, ZERO_MONEY)

    def apply_overdue_return(self, return_date: date, late_fee: Decimal) -> "Reservation":
        """Close the reservation and add ``late_fee`` to the total."""
        return self._close(ReservationStatus.OVERDUE, return_date, round_money(late_fee))

    def _close(self, target: ReservationStatus, return_date: date, late_fee: Decimal) -> "Reservation":
        status = self.status.transition_to(target)
        if return_date < self.start_date:
            raise InvalidInputError(
                f"Return date {return_date} is before start date {self.start_date}"
            )
        return replace(
            self,
            status=status,
            actual_return_date=return_date,
            late_fee=late_fee,
            total_fee=round_money(self.total_fee + late_fee),
        )
