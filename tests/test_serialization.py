"""Tests for shared sink serialization."""

from datetime import date, datetime, timezone
from decimal import Decimal

from propscore.models import AnalysisRecord, AnalysisStatus, Event, Tier
from propscore.sinks.serialization import serialize_value, to_dict


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_scalars(self) -> None:
        assert serialize_value(Decimal("82.50")) == "82.50"
        assert serialize_value(Tier.VERY_GOOD) == "Very Good"
        assert serialize_value(date(2025, 3, 1)) == "2025-03-01"
        assert serialize_value(datetime(2025, 3, 1, 9, 0)) == "2025-03-01T09:00:00"
        assert serialize_value("plain") == "plain"
        assert serialize_value(None) is None

    def test_containers(self) -> None:
        assert serialize_value(("a", Decimal("1.5"))) == ["a", "1.5"]
        assert serialize_value({"k": [AnalysisStatus.FAILED]}) == {"k": ["Failed"]}


class TestToDict:
    """Tests for to_dict."""

    def test_event(self) -> None:
        event = Event(
            event_id="evt-1",
            event_type="analysis.failed",
            event_time=datetime(2025, 3, 1, tzinfo=timezone.utc),
            source="propscore.service",
            subject="a-1",
            data={"score": Decimal("0.00")},
        )

        data = to_dict(event)

        assert data["event_time"] == "2025-03-01T00:00:00+00:00"
        assert data["data"] == {"score": "0.00"}
        assert data["metadata"] == {}

    def test_object_with_own_format(self) -> None:
        record = AnalysisRecord(
            analysis_id="a-1",
            address="1 Main St",
            rubric_type="anchor-v1",
            created_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
        )

        data = to_dict(record)

        assert data["analysisId"] == "a-1"
        assert data["status"] == "Pending"
        assert data["sourceType"] == "Address"
        assert data["score"] is None

    def test_dict_and_other(self) -> None:
        assert to_dict({"d": Decimal("1")}) == {"d": "1"}
        assert to_dict(42) == {"value": "42"}
