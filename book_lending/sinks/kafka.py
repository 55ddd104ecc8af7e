"""Kafka sink for publishing reservation lifecycle events."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import Producer

from book_lending.config import KafkaConfig
from book_lending.exceptions import SinkError
from book_lending.models.base import Event
from book_lending.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "library.reservations"


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Send events and record batches to Kafka as JSON.

    Events are keyed by their subject (the reservation id) so every
    event of one reservation lands on the same partition in order.
    """

    # Topic suffix to key field mapping for batch records
    KEY_FIELDS = {
        "reservations": "reservation_id",
        "books": "external_id",
        "users": "user_id",
    }

    def __init__(self, config: KafkaConfig | str, topic: str = DEFAULT_TOPIC) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        topic : str
            Topic that ``publish`` sends lifecycle events to.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.topic = topic
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def _get_key(self, topic: str, record: Any) -> str | None:
        """Extract message key from record based on topic suffix."""
        key_field = self.KEY_FIELDS.get(topic.split(".")[-1])
        if not key_field:
            return None
        value = to_dict(record).get(key_field)
        return str(value) if value is not None else None

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to a Kafka topic."""
        value = json.dumps(to_dict(record), ensure_ascii=False).encode("utf-8")

        if key is None:
            key = self._get_key(topic, record)

        self.producer.produce(
            topic=topic,
            key=key.encode("utf-8") if key else None,
            value=value,
            callback=self._delivery_callback,
        )
        self.stats.sent += 1
        self.producer.poll(0)

    def publish(self, event: Event) -> None:
        """Send one lifecycle event to the configured topic."""
        self.send(self.topic, event, key=event.subject)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Write a batch of records to a Kafka topic."""
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record)

        self.flush()
        logger.info(
            "Batch complete: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )

    def flush(self, timeout: float = 30.0) -> int:
        """Flush pending messages; returns how many are still queued."""
        return self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and report.

        Raises
        ------
        SinkError
            If messages are still queued after the flush or any delivery
            failed.
        """
        remaining = self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
        if remaining > 0 or self.stats.failed > 0:
            raise SinkError(
                f"Kafka delivery incomplete: {remaining} queued, {self.stats.failed} failed"
            )
