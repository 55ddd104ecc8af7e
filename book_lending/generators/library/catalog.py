"""User and book generators for the library domain."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterator

from book_lending.fees import round_money
from book_lending.generators.base import BaseGenerator
from book_lending.models.lending import Book, User


class UserGenerator(BaseGenerator):
    """Generate library members with sequential ids."""

    def __init__(self, seed: int | None = None, start_id: int = 1) -> None:
        super().__init__(seed)
        self._next_id = start_id

    def generate(self) -> User:
        """Generate a single user.

        Returns
        -------
        User
            Generated user.
        """
        user = User(
            user_id=self._next_id,
            name=self.fake.name(),
            email=self.fake.email(),
            created_at=datetime.now() - timedelta(days=self.rng.randint(0, 3 * 365)),
        )
        self._next_id += 1
        return user

    def generate_batch(self, count: int) -> Iterator[User]:
        """Generate ``count`` users."""
        for _ in range(count):
            yield self.generate()


class BookGenerator(BaseGenerator):
    """Generate catalog books with fully stocked shelves."""

    # Price range in whole cents
    PRICE_RANGE = (500, 6000)
    STOCK_RANGE = (1, 10)

    def __init__(self, seed: int | None = None, start_id: int = 100000) -> None:
        super().__init__(seed)
        self._next_id = start_id

    def generate(self) -> Book:
        """Generate a single book.

        Returns
        -------
        Book
            Generated book with ``available_quantity == stock_quantity``.
        """
        stock = self.rng.randint(*self.STOCK_RANGE)
        cents = self.rng.randint(*self.PRICE_RANGE)

        book = Book(
            external_id=self._next_id,
            title=self.fake.catch_phrase().title(),
            author=self.fake.name(),
            price=round_money(Decimal(cents) / 100),
            stock_quantity=stock,
            available_quantity=stock,
            created_at=datetime.now() - timedelta(days=self.rng.randint(0, 5 * 365)),
        )
        self._next_id += 1
        return book

    def generate_batch(self, count: int) -> Iterator[Book]:
        """Generate ``count`` books."""
        for _ in range(count):
            yield self.generate()
