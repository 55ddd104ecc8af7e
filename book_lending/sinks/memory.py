"""In-memory sink that keeps everything it receives."""

from typing import Any

from book_lending.models.base import Event


class MemorySink:
    """Collect events and batches in lists, for tests and scenarios."""

    def __init__(self) -> None:
        self.events: list[Event] = []
        self.batches: dict[str, list[Any]] = {}

    def publish(self, event: Event) -> None:
        self.events.append(event)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        self.batches.setdefault(entity_type, []).extend(records)

    def events_of_type(self, event_type: str) -> list[Event]:
        """Events whose ``event_type`` matches exactly."""
        return [e for e in self.events if e.event_type == event_type]

    def close(self) -> None:
        pass
