"""JSON file sink for exporting analyses and events."""

import json
import logging
from pathlib import Path
from typing import Any

from propscore.exceptions import SinkError
from propscore.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Write each topic to ``<output_dir>/<topic>.json``.

    Batches for the same topic accumulate; the file is rewritten with
    every record seen so far.
    """

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._records: dict[str, list[dict]] = {}

    def path_for(self, topic: str) -> Path:
        return self.output_dir / f"{topic.replace('.', '_')}.json"

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Append records to a topic and rewrite its file."""
        data = self._records.setdefault(topic, [])
        data.extend(to_dict(record) for record in records)

        file_path = self.path_for(topic)
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2 if self.pretty else None, ensure_ascii=False, default=str)
        except OSError as exc:
            raise SinkError(f"Cannot write {file_path}: {exc}") from exc

    @property
    def counts(self) -> dict[str, int]:
        return {topic: len(data) for topic, data in self._records.items()}

    def close(self) -> None:
        logger.info("JSON files written to: %s", self.output_dir)
        for topic, count in self.counts.items():
            logger.info("  %s: %d records", topic, count)
