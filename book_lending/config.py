"""Configuration management for book-lending."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from book_lending.exceptions import ConfigurationError
from book_lending.fees import LATE_FEE_RATE
from book_lending.logging import LOG_FORMATS


@dataclass
class FeeConfig:
    """Fee policy configuration."""

    late_fee_rate: Decimal = LATE_FEE_RATE


@dataclass
class KafkaConfig:
    """Kafka producer configuration for lifecycle events."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LendingConfig:
    """Main configuration for book-lending."""

    fees: FeeConfig = field(default_factory=FeeConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    events_topic: str = "library.reservations"
    # Undo inventory movement when the reservation save fails
    compensate_on_failure: bool = True
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Check values that dataclass typing cannot express.

        Raises
        ------
        ConfigurationError
            If any value is out of range.
        """
        if self.fees.late_fee_rate < 0:
            raise ConfigurationError(
                f"late_fee_rate must not be negative, got {self.fees.late_fee_rate}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {self.log_format!r}")
        if not self.events_topic.strip():
            raise ConfigurationError("events_topic must not be blank")

    @classmethod
    def from_env(cls) -> "LendingConfig":
        """Create config from environment variables."""
        import os

        try:
            fees = FeeConfig(
                late_fee_rate=Decimal(os.getenv("LATE_FEE_RATE", str(LATE_FEE_RATE))),
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except (InvalidOperation, ValueError) as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        config = cls(
            fees=fees,
            kafka=kafka,
            output=output,
            events_topic=os.getenv("EVENTS_TOPIC", "library.reservations"),
            compensate_on_failure=os.getenv("COMPENSATE_ON_FAILURE", "true").lower() == "true",
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
        config.validate()
        return config
