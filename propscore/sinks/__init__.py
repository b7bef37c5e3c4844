"""Output sinks for analysis records and events."""

from typing import Any, Protocol

from propscore.sinks.console import ConsoleSink
from propscore.sinks.json_file import JsonFileSink
from propscore.sinks.kafka import KafkaSink, ProducerConfig, ProducerStats


class Sink(Protocol):
    """Anything that accepts batches of records per topic."""

    def write_batch(self, topic: str, records: list[Any]) -> None: ...

    def close(self) -> None: ...


__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink", "ProducerConfig", "ProducerStats", "Sink"]
