"""Reservation lifecycle: creation, return and read projections."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable

from book_lending.config import LendingConfig
from book_lending.exceptions import EntityNotFoundError, InvalidEntityStateError, InvalidInputError
from book_lending.fees import late_fee
from book_lending.models.base import Event
from book_lending.models.lending import (
    Reservation,
    ReservationRequest,
    ReservationStatus,
    ReservationView,
    validate_calendar_date,
    validate_rental_days,
)
from book_lending.sinks.serialization import to_dict
from book_lending.store.protocols import (
    BookLookup,
    EventSink,
    InventoryLedger,
    ReservationStore,
    UserLookup,
)

logger = logging.getLogger(__name__)


class ReservationService:
    """Create and return reservations against delegated collaborators.

    Each call is sequential and fail-fast: a collaborator error
    propagates unchanged. Inventory is decremented before a reservation
    is built and incremented exactly once per successful return. When
    ``config.compensate_on_failure`` is set, a failed save undoes the
    inventory movement that preceded it before the error is re-raised;
    otherwise the caller's transaction is expected to roll back.

    Parameters
    ----------
    users : UserLookup
        Resolves user ids.
    books : BookLookup
        Resolves books by external id.
    inventory : InventoryLedger
        Takes copies off and puts them back on the shelf.
    reservations : ReservationStore
        Persists reservations.
    event_sink : EventSink | None
        Receives ``reservation.created`` / ``reservation.returned``
        events after each successful save.
    config : LendingConfig | None
        Fee rate and compensation settings.
    clock : Callable[[], datetime]
        Source of creation timestamps.
    """

    def __init__(
        self,
        users: UserLookup,
        books: BookLookup,
        inventory: InventoryLedger,
        reservations: ReservationStore,
        event_sink: EventSink | None = None,
        config: LendingConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.users = users
        self.books = books
        self.inventory = inventory
        self.reservations = reservations
        self.event_sink = event_sink
        self.config = config or LendingConfig()
        self._clock = clock

    def create_reservation(self, request: ReservationRequest) -> ReservationView:
        """Reserve one copy of a book for a user.

        The reservation is committed once ``save`` returns. A failure of
        the event sink after that point still raises, but the reservation
        stays saved and the copy stays taken, so callers must not retry
        the request blindly.

        Raises
        ------
        InvalidInputError
            If ``rental_days`` is not a positive integer or ``start_date``
            is not a date.
        EntityNotFoundError
            If the user or the book does not exist.
        BookUnavailableError
            If no copy is free. Nothing is saved in that case.
        SinkError
            If publishing ``reservation.created`` fails after the save.
        """
        validate_rental_days(request.rental_days)
        validate_calendar_date(request.start_date, "Start date")

        user = self.users.get_user(request.user_id)
        book = self.books.get_book(request.book_external_id)

        self.inventory.decrease_available(book.external_id)

        try:
            reservation = Reservation.open(
                user_id=user.user_id,
                book_external_id=book.external_id,
                rental_days=request.rental_days,
                start_date=request.start_date,
                book_price=book.price,
                created_at=self._clock(),
            )
            saved = self.reservations.save(reservation)
        except Exception:
            self._compensate(self.inventory.increase_available, book.external_id, "create")
            raise

        logger.info(
            "Reservation %d created: user=%d book=%d days=%d total=%s",
            saved.reservation_id,
            saved.user_id,
            saved.book_external_id,
            saved.rental_days,
            saved.total_fee,
        )

        view = ReservationView.from_reservation(saved, user, book)
        self._publish("reservation.created", view)
        return view

    def return_book(self, reservation_id: int, return_date: date) -> ReservationView:
        """Close a reservation, charging a late fee if it is overdue.

        Returning on the expected return date is on time. As with
        creation, the return is committed once ``save`` returns; a sink
        failure after that point does not undo it.

        Raises
        ------
        EntityNotFoundError
            If the reservation, its user or its book does not exist.
        InvalidEntityStateError
            If the reservation was already returned.
        InvalidInputError
            If ``return_date`` is not a date or precedes the start date.
        SinkError
            If publishing ``reservation.returned`` fails after the save.
        """
        validate_calendar_date(return_date, "Return date")
        reservation = self._load(reservation_id)

        # Rejected before any lookup or inventory movement
        if reservation.status.is_terminal:
            raise InvalidEntityStateError(
                f"Reservation {reservation_id} was already returned ({reservation.status.value})"
            )
        if return_date < reservation.start_date:
            raise InvalidInputError(
                f"Return date {return_date} is before start date {reservation.start_date}"
            )

        user = self.users.get_user(reservation.user_id)
        book = self.books.get_book(reservation.book_external_id)
        days_late = reservation.days_late(return_date)

        if days_late > 0:
            fee = late_fee(book.price, days_late, self.config.fees.late_fee_rate)
            updated = reservation.apply_overdue_return(return_date, fee)
        else:
            updated = reservation.apply_on_time_return(return_date)

        self.inventory.increase_available(reservation.book_external_id)

        try:
            saved = self.reservations.save(updated)
        except Exception:
            self._compensate(self.inventory.decrease_available, reservation.book_external_id, "return")
            raise

        logger.info(
            "Reservation %d returned %s: days_late=%d late_fee=%s total=%s",
            saved.reservation_id,
            saved.status.value,
            max(days_late, 0),
            saved.late_fee,
            saved.total_fee,
        )

        view = ReservationView.from_reservation(saved, user, book)
        self._publish("reservation.returned", view)
        return view

    # Query methods
    def get_reservation(self, reservation_id: int) -> ReservationView:
        """Get one reservation by id."""
        return self._to_view(self._load(reservation_id))

    def list_reservations(self) -> list[ReservationView]:
        """Get all reservations."""
        return self._to_views(self.reservations.find_all())

    def list_user_reservations(self, user_id: int) -> list[ReservationView]:
        """Get all reservations made by a user."""
        return self._to_views(self.reservations.find_by_user_id(user_id))

    def list_active_reservations(self) -> list[ReservationView]:
        """Get reservations whose book is still out."""
        return self._to_views(self.reservations.find_by_status(ReservationStatus.ACTIVE))

    def list_overdue_reservations(self) -> list[ReservationView]:
        """Get reservations that were returned late."""
        return self._to_views(self.reservations.find_overdue())

    def _load(self, reservation_id: int) -> Reservation:
        reservation = self.reservations.find_by_id(reservation_id)
        if reservation is None:
            raise EntityNotFoundError(f"Reservation {reservation_id} not found")
        return reservation

    def _to_view(self, reservation: Reservation) -> ReservationView:
        return ReservationView.from_reservation(
            reservation,
            self.users.get_user(reservation.user_id),
            self.books.get_book(reservation.book_external_id),
        )

    def _to_views(self, reservations: Iterable[Reservation]) -> list[ReservationView]:
        views = [self._to_view(r) for r in reservations]
        logger.debug("Projected %d reservations", len(views))
        return views

    def _compensate(self, undo: Callable[[int], None], external_id: int, operation: str) -> None:
        """Reverse an inventory movement after a failed build or save.

        A failing undo is logged; the caller re-raises the original error.
        """
        if not self.config.compensate_on_failure:
            return
        logger.warning("%s failed after inventory moved; reverting book %d", operation.capitalize(), external_id)
        try:
            undo(external_id)
        except Exception:
            logger.exception("Inventory compensation for book %d failed", external_id)

    def _publish(self, event_type: str, view: ReservationView) -> None:
        if self.event_sink is None:
            return
        self.event_sink.publish(
            Event.create(event_type=event_type, subject=str(view.reservation_id), data=to_dict(view))
        )
