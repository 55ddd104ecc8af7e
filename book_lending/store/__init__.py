"""In-memory data stores and collaborator interfaces."""

from book_lending.store.library import LibraryDataStore, ReservationDataStore
from book_lending.store.protocols import (
    BookLookup,
    EventSink,
    InventoryLedger,
    ReservationStore,
    UserLookup,
)

__all__ = [
    "BookLookup",
    "EventSink",
    "InventoryLedger",
    "LibraryDataStore",
    "ReservationDataStore",
    "ReservationStore",
    "UserLookup",
]
