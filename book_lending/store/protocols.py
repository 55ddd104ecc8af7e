"""Collaborator interfaces consumed by the reservation service.

Any object with matching methods qualifies; the in-memory stores in this
package are one implementation, test doubles are another.
"""

from typing import Protocol, Sequence

from book_lending.models.base import Event
from book_lending.models.lending import Book, Reservation, ReservationStatus, User


class UserLookup(Protocol):
    def get_user(self, user_id: int) -> User:
        """Return the user or raise ``EntityNotFoundError``."""
        ...


class BookLookup(Protocol):
    def get_book(self, external_id: int) -> Book:
        """Return the book or raise ``EntityNotFoundError``."""
        ...


class InventoryLedger(Protocol):
    def decrease_available(self, external_id: int) -> None:
        """Take one copy off the shelf or raise ``BookUnavailableError``."""
        ...

    def increase_available(self, external_id: int) -> None:
        """Put one copy back on the shelf."""
        ...


class ReservationStore(Protocol):
    def save(self, reservation: Reservation) -> Reservation:
        """Persist and return the stored copy; assigns an id on first save."""
        ...

    def find_by_id(self, reservation_id: int) -> Reservation | None: ...

    def find_all(self) -> Sequence[Reservation]: ...

    def find_by_user_id(self, user_id: int) -> Sequence[Reservation]: ...

    def find_by_status(self, status: ReservationStatus) -> Sequence[Reservation]: ...

    def find_overdue(self) -> Sequence[Reservation]: ...


class EventSink(Protocol):
    def publish(self, event: Event) -> None: ...
