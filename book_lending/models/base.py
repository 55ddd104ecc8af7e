"""Base models shared across the package."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for lifecycle notifications to sinks."""

    event_id: str
    event_type: str  # entity.action (e.g., reservation.created)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)

    @classmethod
    def create(cls, event_type: str, subject: str, data: dict, source: str = "book-lending") -> "Event":
        """Build an event with a fresh id stamped now."""
        return cls(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            event_time=datetime.now(),
            source=source,
            subject=subject,
            data=data,
        )
