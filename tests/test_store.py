"""Tests for analysis record stores."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from psycopg.types.json import Jsonb

from propscore.config import PostgresConfig
from propscore.exceptions import EntityNotFoundError
from propscore.models import AnalysisRecord, AnalysisStatus, PropertyAttributes, SourceType
from propscore.scoring import analyse_property
from propscore.store import InMemoryAnalysisStore, PostgresAnalysisStore
from propscore.store.postgres import CREATE_TABLE_SQL, TABLE_NAME


def make_record(analysis_id: str = "a-001", rubric_type: str = "anchor-v1") -> AnalysisRecord:
    return AnalysisRecord(
        analysis_id=analysis_id,
        address="1 Main St",
        rubric_type=rubric_type,
        created_at=datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def store() -> InMemoryAnalysisStore:
    """Create a fresh store for each test."""
    return InMemoryAnalysisStore()


class TestInMemoryAnalysisStore:
    """Tests for InMemoryAnalysisStore."""

    def test_add_and_get(self, store: InMemoryAnalysisStore) -> None:
        record = make_record()

        assert store.add(record) is record
        assert store.get("a-001") is record
        assert store.get("missing") is None
        assert len(store) == 1

    def test_list_all_in_insertion_order(self, store: InMemoryAnalysisStore) -> None:
        first, second = make_record("a-1"), make_record("a-2")
        store.add(first)
        store.add(second)

        assert store.list_all() == [first, second]

    def test_find_by_type(self, store: InMemoryAnalysisStore) -> None:
        store.add(make_record("a-1", "anchor-v1"))
        store.add(make_record("a-2", "anchor-url-v1"))
        store.add(make_record("a-3", "Anchor-V1"))

        assert [r.analysis_id for r in store.find_by_type("anchor-v1")] == ["a-1", "a-3"]
        assert store.find_by_type("other") == []

    def test_update(self, store: InMemoryAnalysisStore) -> None:
        store.add(make_record())
        replacement = make_record()
        replacement.status = AnalysisStatus.COMPLETED

        store.update(replacement)

        assert store.get("a-001").status is AnalysisStatus.COMPLETED

    def test_update_reindexes_mutated_record(self, store: InMemoryAnalysisStore) -> None:
        record = store.add(make_record())
        record.rubric_type = "anchor-url-v1"

        store.update(record)

        assert store.find_by_type("anchor-v1") == []
        assert store.find_by_type("anchor-url-v1") == [record]

    def test_update_missing(self, store: InMemoryAnalysisStore) -> None:
        with pytest.raises(EntityNotFoundError):
            store.update(make_record("missing"))

    def test_delete(self, store: InMemoryAnalysisStore) -> None:
        store.add(make_record())

        assert store.delete("a-001") is True
        assert store.delete("a-001") is False
        assert store.find_by_type("anchor-v1") == []

    def test_add_replaces(self, store: InMemoryAnalysisStore) -> None:
        store.add(make_record())
        store.add(make_record(rubric_type="anchor-url-v1"))

        assert len(store) == 1
        assert store.find_by_type("anchor-v1") == []


@pytest.fixture
def mock_connect() -> Any:
    """Patch psycopg.connect and expose the cursor."""
    with patch("propscore.store.postgres.psycopg.connect") as connect:
        conn = MagicMock()
        cursor = MagicMock()
        connect.return_value.__enter__.return_value = conn
        conn.cursor.return_value.__enter__.return_value = cursor
        connect.cursor = cursor
        yield connect


class TestPostgresAnalysisStore:
    """Tests for PostgresAnalysisStore with a mocked connection."""

    def test_conninfo_from_config(self) -> None:
        store = PostgresAnalysisStore(PostgresConfig(host="db", database="scores"))

        assert store.conninfo == "postgresql://postgres:postgres@db:5432/scores"

    def test_create_table(self, mock_connect: MagicMock) -> None:
        PostgresAnalysisStore("postgresql://localhost/propscore").create_table()

        mock_connect.cursor.execute.assert_called_once_with(CREATE_TABLE_SQL)
        assert "CREATE TABLE IF NOT EXISTS property_analyses" in CREATE_TABLE_SQL

    def test_add_serializes_result(self, mock_connect: MagicMock, good_attributes: PropertyAttributes) -> None:
        record = make_record()
        record.status = AnalysisStatus.COMPLETED
        record.result = analyse_property(good_attributes)
        record.score = record.result.score

        PostgresAnalysisStore("postgresql://localhost/propscore").add(record)

        sql, params = mock_connect.cursor.execute.call_args[0]
        assert sql.startswith(f"INSERT INTO {TABLE_NAME}")
        assert "ON CONFLICT (analysis_id)" in sql
        assert params[0] == "a-001"
        assert params[3] == "Address"
        assert params[4] == "Completed"
        assert params[5] == Decimal("100.00")
        assert isinstance(params[8], Jsonb)
        assert params[8].obj == record.result.to_dict()

    def test_get_missing(self, mock_connect: MagicMock) -> None:
        mock_connect.cursor.fetchone.return_value = None

        assert PostgresAnalysisStore("postgresql://localhost/propscore").get("missing") is None

    def test_get_rebuilds_record(self, mock_connect: MagicMock, good_attributes: PropertyAttributes) -> None:
        result = analyse_property(good_attributes)
        created = datetime(2025, 3, 1, tzinfo=timezone.utc)
        mock_connect.cursor.fetchone.return_value = {
            "analysis_id": "a-001",
            "address": "https://example.com/p/1",
            "rubric_type": "anchor-v1",
            "source_type": "Url",
            "status": "Completed",
            "score": Decimal("100.00"),
            "result_text": result.verdict,
            "remarks": "done",
            "result": result.to_dict(),
            "created_at": created,
            "updated_at": created,
            "completed_at": created,
        }

        record = PostgresAnalysisStore("postgresql://localhost/propscore").get("a-001")

        assert record.source_type is SourceType.URL
        assert record.status is AnalysisStatus.COMPLETED
        assert record.result == result
        sql, params = mock_connect.cursor.execute.call_args[0]
        assert "WHERE analysis_id = %s" in sql
        assert params == ("a-001",)

    def test_list_all_and_find_by_type(self, mock_connect: MagicMock) -> None:
        row = {
            "analysis_id": "a-001",
            "address": "1 Main St",
            "rubric_type": "anchor-v1",
            "source_type": "Address",
            "status": "Pending",
            "result": None,
            "created_at": datetime(2025, 3, 1, tzinfo=timezone.utc),
        }
        mock_connect.cursor.fetchall.return_value = [row]
        store = PostgresAnalysisStore("postgresql://localhost/propscore")

        assert [r.analysis_id for r in store.list_all()] == ["a-001"]
        assert store.find_by_type("ANCHOR-V1")[0].status is AnalysisStatus.PENDING
        assert mock_connect.cursor.execute.call_args[0][1] == ("ANCHOR-V1",)

    def test_update_missing(self, mock_connect: MagicMock) -> None:
        mock_connect.cursor.rowcount = 0

        with pytest.raises(EntityNotFoundError):
            PostgresAnalysisStore("postgresql://localhost/propscore").update(make_record())

    def test_update(self, mock_connect: MagicMock) -> None:
        mock_connect.cursor.rowcount = 1
        record = make_record()

        assert PostgresAnalysisStore("postgresql://localhost/propscore").update(record) is record
        sql, params = mock_connect.cursor.execute.call_args[0]
        assert sql.startswith(f"UPDATE {TABLE_NAME} SET")
        assert params[-1] == "a-001"

    @pytest.mark.parametrize("rowcount,expected", [(1, True), (0, False)])
    def test_delete(self, mock_connect: MagicMock, rowcount: int, expected: bool) -> None:
        mock_connect.cursor.rowcount = rowcount

        assert PostgresAnalysisStore("postgresql://localhost/propscore").delete("a-001") is expected
