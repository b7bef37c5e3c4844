"""Console sink for debugging and development."""

import json
from typing import Any

from propscore.sinks.serialization import to_dict


class ConsoleSink:
    """Print records and events to stdout."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Print a batch of records under a topic heading."""
        print(f"\n{'=' * 60}")
        print(f"Topic: {topic} ({len(records)} records)")
        print("=" * 60)

        shown = records[: self.max_records] if self.max_records else records
        indent = 2 if self.pretty else None
        for record in shown:
            print(json.dumps(to_dict(record), indent=indent, ensure_ascii=False, default=str))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[topic] = self._counts.get(topic, 0) + len(records)

    def close(self) -> None:
        """Print per-topic totals."""
        print(f"\n{'=' * 60}")
        print("Console Sink Summary")
        print("=" * 60)
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} records")
