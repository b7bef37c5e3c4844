"""PostgreSQL analysis record store."""

from __future__ import annotations

import logging
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from propscore.config import PostgresConfig
from propscore.exceptions import EntityNotFoundError
from propscore.models.analysis import AnalysisRecord
from propscore.models.enums import AnalysisStatus, SourceType
from propscore.models.result import AnalysisResult

logger = logging.getLogger(__name__)

TABLE_NAME = "property_analyses"

CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    analysis_id   TEXT PRIMARY KEY,
    address       TEXT NOT NULL,
    rubric_type   TEXT NOT NULL,
    source_type   TEXT NOT NULL,
    status        TEXT NOT NULL,
    score         NUMERIC(5, 2),
    result_text   TEXT,
    remarks       TEXT,
    result        JSONB,
    created_at    TIMESTAMPTZ NOT NULL,
    updated_at    TIMESTAMPTZ,
    completed_at  TIMESTAMPTZ
)
"""

COLUMNS = (
    "analysis_id",
    "address",
    "rubric_type",
    "source_type",
    "status",
    "score",
    "result_text",
    "remarks",
    "result",
    "created_at",
    "updated_at",
    "completed_at",
)

_SELECT = f"SELECT {', '.join(COLUMNS)} FROM {TABLE_NAME}"  # noqa: S608


class PostgresAnalysisStore:
    """Analysis store backed by a ``property_analyses`` table.

    Each operation opens a short-lived connection, which commits when the
    ``with`` block exits cleanly.

    Parameters
    ----------
    config : PostgresConfig | str
        Connection settings or a libpq connection string.
    """

    def __init__(self, config: PostgresConfig | str) -> None:
        if isinstance(config, PostgresConfig):
            config = config.connection_string
        self.conninfo = config

    def _connect(self) -> psycopg.Connection:
        return psycopg.connect(self.conninfo, row_factory=dict_row)

    def create_table(self) -> None:
        """Create the analyses table if it does not exist."""
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(CREATE_TABLE_SQL)
        logger.info("Ensured table %s exists", TABLE_NAME)

    def add(self, record: AnalysisRecord) -> AnalysisRecord:
        placeholders = ", ".join(["%s"] * len(COLUMNS))
        updates = ", ".join(f"{col} = EXCLUDED.{col}" for col in COLUMNS[1:])
        sql = (
            f"INSERT INTO {TABLE_NAME} ({', '.join(COLUMNS)}) VALUES ({placeholders}) "  # noqa: S608
            f"ON CONFLICT (analysis_id) DO UPDATE SET {updates}"
        )
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, _to_row(record))
        return record

    def get(self, analysis_id: str) -> AnalysisRecord | None:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(f"{_SELECT} WHERE analysis_id = %s", (analysis_id,))
                row = cur.fetchone()
        return _from_row(row) if row else None

    def list_all(self) -> list[AnalysisRecord]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(f"{_SELECT} ORDER BY created_at")
                rows = cur.fetchall()
        return [_from_row(row) for row in rows]

    def find_by_type(self, rubric_type: str) -> list[AnalysisRecord]:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"{_SELECT} WHERE lower(rubric_type) = lower(%s) ORDER BY created_at",
                    (rubric_type,),
                )
                rows = cur.fetchall()
        return [_from_row(row) for row in rows]

    def update(self, record: AnalysisRecord) -> AnalysisRecord:
        """Replace a stored record.

        Raises
        ------
        EntityNotFoundError
            If no row has the record's ID.
        """
        assignments = ", ".join(f"{col} = %s" for col in COLUMNS[1:])
        sql = f"UPDATE {TABLE_NAME} SET {assignments} WHERE analysis_id = %s"  # noqa: S608
        row = _to_row(record)
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (*row[1:], record.analysis_id))
                if cur.rowcount == 0:
                    raise EntityNotFoundError(f"Analysis {record.analysis_id} not found")
        return record

    def delete(self, analysis_id: str) -> bool:
        with self._connect() as conn:
            with conn.cursor() as cur:
                cur.execute(f"DELETE FROM {TABLE_NAME} WHERE analysis_id = %s", (analysis_id,))  # noqa: S608
                return cur.rowcount > 0


def _to_row(record: AnalysisRecord) -> tuple[Any, ...]:
    return (
        record.analysis_id,
        record.address,
        record.rubric_type,
        record.source_type.value,
        record.status.value,
        record.score,
        record.result_text,
        record.remarks,
        Jsonb(record.result.to_dict()) if record.result is not None else None,
        record.created_at,
        record.updated_at,
        record.completed_at,
    )


def _from_row(row: dict[str, Any]) -> AnalysisRecord:
    result = row.get("result")
    return AnalysisRecord(
        analysis_id=row["analysis_id"],
        address=row["address"],
        rubric_type=row["rubric_type"],
        created_at=row["created_at"],
        source_type=SourceType(row["source_type"]),
        status=AnalysisStatus(row["status"]),
        score=row.get("score"),
        result_text=row.get("result_text"),
        remarks=row.get("remarks"),
        updated_at=row.get("updated_at"),
        completed_at=row.get("completed_at"),
        result=AnalysisResult.from_dict(result) if result else None,
    )
