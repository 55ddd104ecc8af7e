"""Enumeration types for the lending domain."""

from enum import Enum

from book_lending.exceptions import InvalidEntityStateError


class ReservationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RETURNED = "RETURNED"
    OVERDUE = "OVERDUE"

    @property
    def is_terminal(self) -> bool:
        """True once the book has been returned, on time or late."""
        return self is not ReservationStatus.ACTIVE

    def transition_to(self, target: "ReservationStatus") -> "ReservationStatus":
        """Return ``target`` if moving there from this status is allowed.

        Only ACTIVE -> RETURNED and ACTIVE -> OVERDUE exist.

        Raises
        ------
        InvalidEntityStateError
            For every other pair, including staying in the same status.
        """
        if target not in _TRANSITIONS[self]:
            raise InvalidEntityStateError(
                f"Reservation cannot move from {self.value} to {target.value}"
            )
        return target


_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.ACTIVE: frozenset({ReservationStatus.RETURNED, ReservationStatus.OVERDUE}),
    ReservationStatus.RETURNED: frozenset(),
    ReservationStatus.OVERDUE: frozenset(),
}
