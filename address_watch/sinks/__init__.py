"""Output sinks for change events."""

from address_watch.sinks.console import ConsoleSink
from address_watch.sinks.json_file import JsonFileSink
from address_watch.sinks.kafka import KafkaSink
from address_watch.sinks.publisher import ChangeEventPublisher

__all__ = ["ChangeEventPublisher", "ConsoleSink", "JsonFileSink", "KafkaSink"]
