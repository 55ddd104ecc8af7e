"""Pytest configuration and fixtures."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from book_lending.models.lending import Book, ReservationRequest, User
from book_lending.services.reservation import ReservationService
from book_lending.sinks.memory import MemorySink
from book_lending.store.library import LibraryDataStore, ReservationDataStore

BOOK_ID = 258027
USER_ID = 1
START_DATE = date(2024, 1, 10)
FIXED_NOW = datetime(2024, 1, 10, 9, 30)


@pytest.fixture
def start_date() -> date:
    """Start date of the sample reservation."""
    return START_DATE


@pytest.fixture
def expected_return(start_date: date) -> date:
    """Expected return date of a seven-day reservation from ``start_date``."""
    return start_date + timedelta(days=7)


@pytest.fixture
def fixed_now() -> datetime:
    """Timestamp returned by the service clock."""
    return FIXED_NOW


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_user() -> User:
    """Sample library member."""
    return User(user_id=USER_ID, name="Juan Pérez", email="juan@example.com")


@pytest.fixture
def sample_book() -> Book:
    """Sample book priced 15.99 with 5 of 10 copies on the shelf."""
    return Book(
        external_id=BOOK_ID,
        title="The Lord of the Rings",
        author="J. R. R. Tolkien",
        price=Decimal("15.99"),
        stock_quantity=10,
        available_quantity=5,
    )


@pytest.fixture
def library(sample_user: User, sample_book: Book) -> LibraryDataStore:
    """Library store holding the sample user and book."""
    store = LibraryDataStore()
    store.add_user(sample_user)
    store.add_book(sample_book)
    return store


@pytest.fixture
def reservation_store() -> ReservationDataStore:
    """Empty reservation store."""
    return ReservationDataStore()


@pytest.fixture
def events() -> MemorySink:
    """Sink collecting lifecycle events."""
    return MemorySink()


@pytest.fixture
def service(
    library: LibraryDataStore,
    reservation_store: ReservationDataStore,
    events: MemorySink,
    fixed_now: datetime,
) -> ReservationService:
    """Service wired to the in-memory stores with a fixed clock."""
    return ReservationService(
        users=library,
        books=library,
        inventory=library,
        reservations=reservation_store,
        event_sink=events,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def seven_day_request(start_date: date) -> ReservationRequest:
    """Seven-day reservation of the sample book starting on ``start_date``."""
    return ReservationRequest(
        user_id=USER_ID,
        book_external_id=BOOK_ID,
        rental_days=7,
        start_date=start_date,
    )
