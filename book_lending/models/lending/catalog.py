"""User and book records consumed by the reservation engine."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class User:
    """Library member."""

    user_id: int
    name: str
    email: str
    created_at: datetime | None = None


@dataclass
class Book:
    """Catalog entry with its inventory counters."""

    external_id: int
    title: str
    author: str
    price: Decimal  # Reference price, basis for daily rate and late fees
    stock_quantity: int  # Copies owned
    available_quantity: int  # Copies on the shelf
    created_at: datetime | None = None
