"""Tests for shared serialization utilities."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from book_lending.models.base import Event
from book_lending.models.lending import Book, ReservationStatus
from book_lending.sinks.serialization import dataclass_to_dict, serialize_value, to_dict


@dataclass
class _Wrapper:
    book: Book
    tags: tuple


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        book = Book(1, "Dune", "Frank Herbert", Decimal("9.90"), 2, 1, datetime(2024, 1, 1))
        result = to_dict(book)

        assert result["title"] == "Dune"
        assert result["price"] == "9.90"
        assert result["created_at"] == "2024-01-01T00:00:00"

    def test_dict_values_serialized(self) -> None:
        assert to_dict({"fee": Decimal("1.50")}) == {"fee": "1.50"}

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}

    def test_event_envelope(self) -> None:
        event = Event(
            event_id="e-1",
            event_type="reservation.returned",
            event_time=datetime(2024, 1, 20, 12, 0),
            source="book-lending",
            subject="3",
            data={"late_fee": Decimal("7.20"), "status": ReservationStatus.OVERDUE},
        )
        result = to_dict(event)

        assert result["event_time"] == "2024-01-20T12:00:00"
        assert result["data"] == {"late_fee": "7.20", "status": "OVERDUE"}


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal_keeps_scale(self) -> None:
        assert serialize_value(Decimal("111.90")) == "111.90"

    def test_enum(self) -> None:
        assert serialize_value(ReservationStatus.ACTIVE) == "ACTIVE"

    def test_date_and_datetime(self) -> None:
        assert serialize_value(date(2024, 1, 17)) == "2024-01-17"
        assert serialize_value(datetime(2024, 1, 17, 8, 0)) == "2024-01-17T08:00:00"

    def test_collections(self) -> None:
        assert serialize_value([Decimal("1.00"), (date(2024, 1, 1),)]) == ["1.00", ["2024-01-01"]]

    def test_passthrough(self) -> None:
        assert serialize_value("x") == "x"
        assert serialize_value(3) == 3
        assert serialize_value(None) is None


class TestDataclassToDict:
    """Tests for dataclass_to_dict function."""

    def test_nested_dataclass(self) -> None:
        obj = _Wrapper(book=Book(1, "Dune", "F. H.", Decimal("9.90"), 2, 1), tags=("sf",))
        result = dataclass_to_dict(obj)

        assert result["book"]["price"] == "9.90"
        assert result["book"]["created_at"] is None
        assert result["tags"] == ["sf"]
