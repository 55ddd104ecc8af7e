"""Output sinks for exporting reservations and lifecycle events."""

from book_lending.sinks.console import ConsoleSink
from book_lending.sinks.json_file import JsonFileSink
from book_lending.sinks.kafka import KafkaSink
from book_lending.sinks.memory import MemorySink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink", "MemorySink"]
