"""Tests for output sinks."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from propscore.config import KafkaConfig
from propscore.exceptions import SinkError
from propscore.models import AnalysisRecord, Event
from propscore.sinks import ConsoleSink, JsonFileSink, KafkaSink, ProducerConfig, ProducerStats


@pytest.fixture
def event() -> Event:
    return Event(
        event_id="evt-001",
        event_type="analysis.completed",
        event_time=datetime(2025, 3, 1, 10, 0, tzinfo=timezone.utc),
        source="propscore.service",
        subject="a-001",
        data={"analysisId": "a-001", "status": "Completed", "score": "82.50"},
    )


@pytest.fixture
def record() -> AnalysisRecord:
    return AnalysisRecord(
        analysis_id="a-002",
        address="1 Main St",
        rubric_type="anchor-v1",
        created_at=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
    )


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_init_default(self) -> None:
        sink = ConsoleSink()

        assert sink.pretty is True
        assert sink.max_records is None

    def test_write_batch(self, event: Event, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink(pretty=False)

        sink.write_batch("propscore.analyses", [event])
        captured = capsys.readouterr()

        assert "propscore.analyses (1 records)" in captured.out
        assert '"event_type": "analysis.completed"' in captured.out
        assert "2025-03-01T10:00:00+00:00" in captured.out

    def test_write_record_uses_wire_format(self, record: AnalysisRecord, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink(pretty=False).write_batch("analyses", [record])

        assert '"analysisId": "a-002"' in capsys.readouterr().out

    def test_max_records(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink(max_records=2)

        sink.write_batch("topic", [{"id": i} for i in range(5)])

        assert "and 3 more records" in capsys.readouterr().out

    def test_close_summary(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink(pretty=False)
        sink.write_batch("topic", [{"id": 1}])
        sink.write_batch("topic", [{"id": 2}, {"id": 3}])

        sink.close()

        assert "topic: 3 records" in capsys.readouterr().out


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        out = tmp_path / "nested" / "out"
        JsonFileSink(out)

        assert out.is_dir()

    def test_write_batch(self, tmp_path: Path, event: Event) -> None:
        sink = JsonFileSink(tmp_path, pretty=True)

        sink.write_batch("propscore.analyses", [event])

        data = json.loads((tmp_path / "propscore_analyses.json").read_text(encoding="utf-8"))
        assert data[0]["subject"] == "a-001"
        assert data[0]["data"]["score"] == "82.50"

    def test_batches_accumulate(self, tmp_path: Path, event: Event, record: AnalysisRecord) -> None:
        sink = JsonFileSink(tmp_path)

        sink.write_batch("events", [event])
        sink.write_batch("events", [record])

        data = json.loads(sink.path_for("events").read_text(encoding="utf-8"))
        assert len(data) == 2
        assert data[1]["analysisId"] == "a-002"
        assert sink.counts == {"events": 2}

    def test_write_failure(self, tmp_path: Path, event: Event) -> None:
        sink = JsonFileSink(tmp_path)

        with patch("builtins.open", side_effect=PermissionError("read-only")):
            with pytest.raises(SinkError):
                sink.write_batch("events", [event])


class TestProducerStats:
    """Tests for ProducerStats."""

    def test_success_rate(self) -> None:
        assert ProducerStats(delivered=3, failed=1).success_rate == 0.75
        assert ProducerStats().success_rate == 0.0


class TestKafkaSink:
    """Tests for KafkaSink with a mocked producer."""

    @pytest.fixture
    def producer(self) -> Any:
        with patch("propscore.sinks.kafka.Producer") as producer_cls:
            producer = producer_cls.return_value
            producer.flush.return_value = 0
            yield producer_cls

    def test_config_from_string(self, producer: MagicMock) -> None:
        sink = KafkaSink("kafka:9092")

        assert sink.config.bootstrap_servers == "kafka:9092"
        assert producer.call_args[0][0]["bootstrap.servers"] == "kafka:9092"

    def test_config_from_app_config(self, producer: MagicMock) -> None:
        sink = KafkaSink(KafkaConfig(bootstrap_servers="b:9092", acks="1"))

        assert isinstance(sink.config, ProducerConfig)
        assert sink.config.acks == "1"

    def test_producer_built_from_app_config(self, producer: MagicMock) -> None:
        """Test every KafkaConfig producer setting reaches confluent-kafka."""
        KafkaSink(KafkaConfig(bootstrap_servers="kafka:9092", compression="gzip", linger_ms=20))

        assert producer.call_args[0][0] == {
            "bootstrap.servers": "kafka:9092",
            "acks": "all",
            "retries": 3,
            "linger.ms": 20,
            "compression.type": "gzip",
        }

    def test_send_keys_by_analysis(self, producer: MagicMock, event: Event) -> None:
        sink = KafkaSink("localhost:9092")

        sink.send("propscore.analyses", event)

        kwargs = producer.return_value.produce.call_args.kwargs
        assert kwargs["topic"] == "propscore.analyses"
        assert kwargs["key"] == b"a-001"
        assert json.loads(kwargs["value"])["event_type"] == "analysis.completed"
        assert sink.stats.sent == 1

    def test_record_and_dict_keys(self, producer: MagicMock, record: AnalysisRecord) -> None:
        sink = KafkaSink("localhost:9092")

        sink.send("t", record)
        assert producer.return_value.produce.call_args.kwargs["key"] == b"a-002"

        sink.send("t", {"analysisId": "a-003"})
        assert producer.return_value.produce.call_args.kwargs["key"] == b"a-003"

        sink.send("t", {"other": 1})
        assert producer.return_value.produce.call_args.kwargs["key"] is None

    def test_write_batch_flushes(self, producer: MagicMock, event: Event) -> None:
        sink = KafkaSink("localhost:9092")

        sink.write_batch("t", [event, event])

        assert producer.return_value.produce.call_count == 2
        producer.return_value.flush.assert_called_once()

    def test_queue_full(self, producer: MagicMock, event: Event) -> None:
        producer.return_value.produce.side_effect = BufferError("queue full")
        sink = KafkaSink("localhost:9092")

        with pytest.raises(SinkError):
            sink.send("t", event)
        assert sink.stats.sent == 0

    def test_delivery_callback(self, producer: MagicMock) -> None:
        sink = KafkaSink("localhost:9092")
        msg = MagicMock()
        msg.topic.return_value = "t"
        msg.partition.return_value = 0
        msg.offset.return_value = 7

        sink._delivery_callback(None, msg)
        sink._delivery_callback("timeout", msg)

        assert sink.stats.delivered == 1
        assert sink.stats.failed == 1

    def test_close_flushes(self, producer: MagicMock) -> None:
        KafkaSink("localhost:9092").close()

        producer.return_value.flush.assert_called_once()
