"""Tests for the in-memory library and reservation stores."""

from datetime import date
from decimal import Decimal

import pytest

from book_lending.exceptions import (
    BookUnavailableError,
    EntityNotFoundError,
    InvalidEntityStateError,
)
from book_lending.models.lending import Book, Reservation, ReservationStatus, User
from book_lending.store.library import LibraryDataStore, ReservationDataStore


def _reservation(user_id: int = 1, book_id: int = 100) -> Reservation:
    return Reservation.open(user_id, book_id, 7, date(2024, 1, 10), Decimal("15.99"))


class TestLibraryDataStore:
    """Tests for users, books and inventory counters."""

    def test_add_and_get_user(self) -> None:
        store = LibraryDataStore()
        store.add_user(User(user_id=5, name="Ana", email="ana@example.com"))

        user = store.get_user(5)
        assert user.name == "Ana"
        assert user.created_at is not None

    def test_get_missing_user(self) -> None:
        with pytest.raises(EntityNotFoundError, match="User 99 not found"):
            LibraryDataStore().get_user(99)

    def test_get_missing_book(self) -> None:
        with pytest.raises(EntityNotFoundError, match="Book 99 not found"):
            LibraryDataStore().get_book(99)

    @pytest.mark.parametrize("stock,available", [(3, 4), (3, -1), (-1, 0)])
    def test_add_book_rejects_inconsistent_counters(self, stock: int, available: int) -> None:
        book = Book(1, "T", "A", Decimal("1.00"), stock, available)
        with pytest.raises(InvalidEntityStateError):
            LibraryDataStore().add_book(book)

    def test_decrease_until_unavailable(self) -> None:
        store = LibraryDataStore()
        store.add_book(Book(1, "T", "A", Decimal("1.00"), stock_quantity=2, available_quantity=2))

        store.decrease_available(1)
        store.decrease_available(1)
        assert store.get_book(1).available_quantity == 0

        with pytest.raises(BookUnavailableError, match="No copies of book 1"):
            store.decrease_available(1)
        assert store.get_book(1).available_quantity == 0

    def test_increase(self, library: LibraryDataStore, sample_book: Book) -> None:
        library.increase_available(sample_book.external_id)
        assert library.get_book(sample_book.external_id).available_quantity == 6

    def test_inventory_on_missing_book(self) -> None:
        store = LibraryDataStore()
        with pytest.raises(EntityNotFoundError):
            store.decrease_available(42)
        with pytest.raises(EntityNotFoundError):
            store.increase_available(42)

    def test_summary(self, library: LibraryDataStore) -> None:
        assert library.summary() == {
            "users": 1,
            "books": 1,
            "copies": 10,
            "copies_available": 5,
        }


class TestReservationDataStore:
    """Tests for reservation persistence and queries."""

    def test_save_assigns_sequential_ids(self) -> None:
        store = ReservationDataStore()

        first = store.save(_reservation())
        second = store.save(_reservation())

        assert first.reservation_id == 1
        assert second.reservation_id == 2
        assert store.find_by_id(1) == first

    def test_save_existing_replaces(self) -> None:
        store = ReservationDataStore()
        saved = store.save(_reservation())

        returned = saved.apply_on_time_return(date(2024, 1, 17))
        store.save(returned)

        assert store.find_by_id(saved.reservation_id).status == ReservationStatus.RETURNED
        assert len(store.find_all()) == 1

    def test_save_unknown_id_rejected(self) -> None:
        with pytest.raises(EntityNotFoundError):
            ReservationDataStore().save(_reservation().with_id(77))

    def test_find_by_id_missing(self) -> None:
        assert ReservationDataStore().find_by_id(1) is None

    def test_find_by_user_id(self) -> None:
        store = ReservationDataStore()
        store.save(_reservation(user_id=1))
        store.save(_reservation(user_id=2))
        store.save(_reservation(user_id=1))

        assert [r.reservation_id for r in store.find_by_user_id(1)] == [1, 3]
        assert store.find_by_user_id(3) == []

    def test_find_by_status_and_overdue(self) -> None:
        store = ReservationDataStore()
        active = store.save(_reservation())
        on_time = store.save(_reservation())
        late = store.save(_reservation())
        store.save(on_time.apply_on_time_return(date(2024, 1, 17)))
        store.save(late.apply_overdue_return(date(2024, 1, 20), Decimal("7.20")))

        assert [r.reservation_id for r in store.find_by_status(ReservationStatus.ACTIVE)] == [
            active.reservation_id
        ]
        assert [r.reservation_id for r in store.find_overdue()] == [late.reservation_id]

    def test_summary(self) -> None:
        store = ReservationDataStore()
        saved = store.save(_reservation())
        store.save(_reservation())
        store.save(saved.apply_overdue_return(date(2024, 1, 20), Decimal("7.20")))

        assert store.summary() == {"reservations": 2, "active": 1, "returned": 0, "overdue": 1}
