"""JSON Lines file sink for recording change events."""

import json
from pathlib import Path
from typing import IO, Any

from address_watch.exceptions import SinkError
from address_watch.sinks.serialization import to_dict


class JsonFileSink:
    """Append records to one JSON Lines file per topic."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write ``.jsonl`` files.
        pretty : bool
            Indent each record. Records still end with a newline.
        """
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"Cannot create output directory {self.output_dir}: {e}") from e
        self.pretty = pretty
        self._files: dict[str, IO[str]] = {}
        self._counts: dict[str, int] = {}

    def path_for(self, topic: str) -> Path:
        """Return the file a topic is written to (dots become underscores)."""
        return self.output_dir / (topic.replace(".", "_") + ".jsonl")

    def send(self, topic: str, record: Any) -> None:
        """Append a single record to the topic's file."""
        data = to_dict(record)
        indent = 2 if self.pretty else None
        try:
            f = self._files.get(topic)
            if f is None:
                f = open(self.path_for(topic), "a", encoding="utf-8")
                self._files[topic] = f
            f.write(json.dumps(data, indent=indent, ensure_ascii=False, default=str) + "\n")
            f.flush()
        except OSError as e:
            raise SinkError(f"Failed to write {topic} record: {e}") from e
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Append a batch of records to the topic's file."""
        for record in records:
            self.send(topic, record)

    def close(self) -> None:
        """Close open files and print summary."""
        for f in self._files.values():
            f.close()
        self._files.clear()
        print(f"JSON Lines files written to: {self.output_dir}")
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} records")
