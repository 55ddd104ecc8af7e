"""Lending activity scenario: members borrowing and returning books."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from book_lending.config import LendingConfig
from book_lending.exceptions import BookUnavailableError
from book_lending.generators.library import BookGenerator, UserGenerator
from book_lending.models.lending import ReservationRequest, ReservationStatus, ReservationView
from book_lending.services.reservation import ReservationService
from book_lending.sinks.memory import MemorySink
from book_lending.store.library import LibraryDataStore, ReservationDataStore

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Counters collected while the scenario runs."""

    created: list[ReservationView] = field(default_factory=list)
    returned: list[ReservationView] = field(default_factory=list)
    unavailable: int = 0


class LendingActivityScenario:
    """Simulate a period of library activity through ``ReservationService``.

    This scenario creates:
    - Members and a stocked catalog
    - Reservations spread over the weeks before ``reference_date``
    - Returns with realistic behavior:
        - On time (on or before the expected return date)
        - Late (1-14 days past the expected return date)
        - Still out (left ACTIVE)

    Requests for books with no free copy are counted and skipped.
    """

    RENTAL_DAY_CHOICES = [3, 7, 14, 21]

    def __init__(
        self,
        num_users: int = 50,
        num_books: int = 30,
        reservations_per_user: int = 2,
        on_time_rate: float = 0.70,
        late_rate: float = 0.20,
        reference_date: date | None = None,
        seed: int | None = None,
        *,
        config: LendingConfig | None = None,
    ) -> None:
        """Initialize lending activity scenario.

        Parameters
        ----------
        num_users : int
            Number of members to generate.
        num_books : int
            Number of catalog titles to generate.
        reservations_per_user : int
            Reservation attempts per member.
        on_time_rate : float
            Share of reservations returned on time (0.0 to 1.0).
        late_rate : float
            Share of reservations returned late. The remainder stays ACTIVE.
        reference_date : date | None
            "Today" for the simulation (default: today).
        seed : int | None
            Random seed for reproducibility.
        config : LendingConfig | None
            Fee and compensation settings for the service. Its ``seed``
            is used when ``seed`` is not given.
        """
        if on_time_rate < 0 or late_rate < 0 or on_time_rate + late_rate > 1:
            raise ValueError("on_time_rate and late_rate must be non-negative and sum to at most 1")

        self.config = config or LendingConfig()
        self.seed = seed if seed is not None else self.config.seed
        self.num_users = num_users
        self.num_books = num_books
        self.reservations_per_user = reservations_per_user
        self.on_time_rate = on_time_rate
        self.late_rate = late_rate
        self.reference_date = reference_date or date.today()

        self._rng = random.Random(self.seed)
        self.library = LibraryDataStore()
        self.reservations = ReservationDataStore()
        self.events = MemorySink()
        self.service = ReservationService(
            users=self.library,
            books=self.library,
            inventory=self.library,
            reservations=self.reservations,
            event_sink=self.events,
            config=self.config,
        )
        self.result = ScenarioResult()
        self._user_gen = UserGenerator(seed=self.seed)
        self._book_gen = BookGenerator(seed=self.seed)

    def generate(self) -> ReservationDataStore:
        """Run the scenario.

        Returns
        -------
        ReservationDataStore
            Store containing all reservations created.
        """
        logger.info(
            "Starting lending scenario: %d users, %d books, %d reservations per user",
            self.num_users,
            self.num_books,
            self.reservations_per_user,
        )

        for user in self._user_gen.generate_batch(self.num_users):
            self.library.add_user(user)
        for book in self._book_gen.generate_batch(self.num_books):
            self.library.add_book(book)

        logger.info("Catalog ready: %s", self.library.summary())

        self._create_reservations()
        self._process_returns()

        logger.info(
            "Scenario complete: %d created, %d returned, %d unavailable",
            len(self.result.created),
            len(self.result.returned),
            self.result.unavailable,
        )
        return self.reservations

    def _create_reservations(self) -> None:
        book_ids = list(self.library.books)
        if not book_ids:
            return

        for user_id in self.library.users:
            for _ in range(self.reservations_per_user):
                rental_days = self._rng.choice(self.RENTAL_DAY_CHOICES)
                start = self.reference_date - timedelta(days=self._rng.randint(rental_days, rental_days + 30))
                request = ReservationRequest(
                    user_id=user_id,
                    book_external_id=self._rng.choice(book_ids),
                    rental_days=rental_days,
                    start_date=start,
                )
                try:
                    self.result.created.append(self.service.create_reservation(request))
                except BookUnavailableError:
                    self.result.unavailable += 1

    def _process_returns(self) -> None:
        for view in self.result.created:
            behavior = self._rng.choices(
                ["on_time", "late", "still_out"],
                weights=[self.on_time_rate, self.late_rate, max(0.0, 1 - self.on_time_rate - self.late_rate)],
                k=1,
            )[0]

            if behavior == "on_time":
                early_by = self._rng.randint(0, view.rental_days - 1)
                return_date = view.expected_return_date - timedelta(days=early_by)
            elif behavior == "late":
                return_date = view.expected_return_date + timedelta(days=self._rng.randint(1, 14))
            else:
                continue

            self.result.returned.append(self.service.return_book(view.reservation_id, return_date))

    def export(self, sinks: list[Any]) -> None:
        """Export generated data to sinks.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances with ``write_batch`` (ConsoleSink, JsonFileSink, ...).
        """
        reservations = self.service.list_reservations()
        for sink in sinks:
            sink.write_batch("users", list(self.library.users.values()))
            sink.write_batch("books", list(self.library.books.values()))
            sink.write_batch("reservations", reservations)
            sink.write_batch("events", self.events.events)

        logger.info("Exported lending activity to %d sinks", len(sinks))

    def get_fee_summary(self) -> dict[str, Any]:
        """Get fee and status statistics for the simulated period.

        Returns
        -------
        dict[str, Any]
            Counts by status and fee totals as ``Decimal``.
        """
        reservations = self.reservations.find_all()
        if not reservations:
            return {}

        status_counts = {status.value: 0 for status in ReservationStatus}
        for reservation in reservations:
            status_counts[reservation.status.value] += 1

        return {
            "total_reservations": len(reservations),
            "unavailable_requests": self.result.unavailable,
            "status_distribution": status_counts,
            "total_fees": sum((r.total_fee for r in reservations), Decimal("0.00")),
            "late_fees": sum((r.late_fee for r in reservations), Decimal("0.00")),
        }
