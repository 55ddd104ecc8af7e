"""JSON file sink for exporting reservations and events to disk."""

import json
import logging
from pathlib import Path
from typing import Any

from book_lending.exceptions import SinkError
from book_lending.models.base import Event
from book_lending.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

EVENTS_FILENAME = "events.jsonl"


class JsonFileSink:
    """Write batches to ``<entity>.json`` and events to a JSON Lines file."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print batch files.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to a JSON file, replacing earlier content."""
        file_path = self.output_dir / f"{entity_type}.json"
        data = [to_dict(record) for record in records]

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2 if self.pretty else None, ensure_ascii=False)
        except OSError as exc:
            raise SinkError(f"Cannot write {file_path}: {exc}") from exc

        self._counts[entity_type] = len(records)
        logger.debug("Wrote %d %s to %s", len(records), entity_type, file_path)

    def publish(self, event: Event) -> None:
        """Append one event as a JSON line."""
        file_path = self.output_dir / EVENTS_FILENAME
        try:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(to_dict(event), ensure_ascii=False) + "\n")
        except OSError as exc:
            raise SinkError(f"Cannot append to {file_path}: {exc}") from exc

        self._counts["events"] = self._counts.get("events", 0) + 1

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
