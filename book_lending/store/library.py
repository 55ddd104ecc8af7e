"""In-memory library stores: catalog, inventory and reservations."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from book_lending.exceptions import (
    BookUnavailableError,
    EntityNotFoundError,
    InvalidEntityStateError,
)
from book_lending.models.lending import Book, Reservation, ReservationStatus, User

logger = logging.getLogger(__name__)


@dataclass
class LibraryDataStore:
    """In-memory users, books and available-copy counters.

    Serves as the user lookup, book lookup and inventory ledger of
    ``ReservationService``.
    """

    users: dict[int, User] = field(default_factory=dict)
    books: dict[int, Book] = field(default_factory=dict)

    def add_user(self, user: User) -> None:
        """Add a user to the store."""
        if user.created_at is None:
            user.created_at = datetime.now()
        self.users[user.user_id] = user

    def add_book(self, book: Book) -> None:
        """Add a book to the store."""
        if book.stock_quantity < 0:
            raise InvalidEntityStateError(
                f"Book {book.external_id} has negative stock {book.stock_quantity}"
            )
        if not 0 <= book.available_quantity <= book.stock_quantity:
            raise InvalidEntityStateError(
                f"Book {book.external_id} available quantity {book.available_quantity} "
                f"outside 0..{book.stock_quantity}"
            )
        if book.created_at is None:
            book.created_at = datetime.now()
        self.books[book.external_id] = book

    def get_user(self, user_id: int) -> User:
        """Get a user by id."""
        try:
            return self.users[user_id]
        except KeyError:
            raise EntityNotFoundError(f"User {user_id} not found") from None

    def get_book(self, external_id: int) -> Book:
        """Get a book by its external id."""
        try:
            return self.books[external_id]
        except KeyError:
            raise EntityNotFoundError(f"Book {external_id} not found") from None

    def decrease_available(self, external_id: int) -> None:
        """Take one copy of a book off the shelf."""
        book = self.get_book(external_id)
        if book.available_quantity <= 0:
            raise BookUnavailableError(f"No copies of book {external_id} available")
        book.available_quantity -= 1
        logger.debug("Book %s available: %d", external_id, book.available_quantity)

    def increase_available(self, external_id: int) -> None:
        """Put one copy of a book back on the shelf."""
        book = self.get_book(external_id)
        book.available_quantity += 1
        logger.debug("Book %s available: %d", external_id, book.available_quantity)

    def summary(self) -> dict[str, int]:
        """Return summary counts of users, titles and copies."""
        return {
            "users": len(self.users),
            "books": len(self.books),
            "copies": sum(b.stock_quantity for b in self.books.values()),
            "copies_available": sum(b.available_quantity for b in self.books.values()),
        }


@dataclass
class ReservationDataStore:
    """In-memory reservation repository with sequential ids."""

    reservations: dict[int, Reservation] = field(default_factory=dict)

    # Relationship index
    _user_reservations: dict[int, list[int]] = field(default_factory=dict)
    _next_id: int = 1

    def save(self, reservation: Reservation) -> Reservation:
        """Store a reservation, assigning an id on first save."""
        if reservation.reservation_id is None:
            reservation = reservation.with_id(self._next_id)
            self._next_id += 1
            self._user_reservations.setdefault(reservation.user_id, []).append(
                reservation.reservation_id
            )
            logger.debug("Assigned reservation id %d", reservation.reservation_id)
        elif reservation.reservation_id not in self.reservations:
            raise EntityNotFoundError(f"Reservation {reservation.reservation_id} not found")

        self.reservations[reservation.reservation_id] = reservation
        return reservation

    def find_by_id(self, reservation_id: int) -> Reservation | None:
        """Get a reservation by id, or None."""
        return self.reservations.get(reservation_id)

    def find_all(self) -> list[Reservation]:
        """Get all reservations in id order."""
        return [self.reservations[rid] for rid in sorted(self.reservations)]

    def find_by_user_id(self, user_id: int) -> list[Reservation]:
        """Get all reservations for a user."""
        return [self.reservations[rid] for rid in self._user_reservations.get(user_id, [])]

    def find_by_status(self, status: ReservationStatus) -> list[Reservation]:
        """Get all reservations in a status."""
        return [r for r in self.find_all() if r.status == status]

    def find_overdue(self) -> list[Reservation]:
        """Get reservations that were returned late."""
        return self.find_by_status(ReservationStatus.OVERDUE)

    def summary(self) -> dict[str, int]:
        """Return reservation counts by status."""
        counts = {status.value.lower(): 0 for status in ReservationStatus}
        for reservation in self.reservations.values():
            counts[reservation.status.value.lower()] += 1
        return {"reservations": len(self.reservations), **counts}
