"""In-memory analysis record store."""

from dataclasses import dataclass, field

from propscore.exceptions import EntityNotFoundError
from propscore.models.analysis import AnalysisRecord


@dataclass
class InMemoryAnalysisStore:
    """Dictionary-backed store keyed by analysis ID.

    Records are kept in insertion order. A rubric-type index supports
    :meth:`find_by_type` without a full scan. Callers may mutate a stored
    record before calling :meth:`update`, so the index is keyed on the ID
    rather than on the record's previous rubric type.
    """

    records: dict[str, AnalysisRecord] = field(default_factory=dict)

    # Relationship indexes
    _by_type: dict[str, list[str]] = field(default_factory=dict)
    _type_of: dict[str, str] = field(default_factory=dict)

    def add(self, record: AnalysisRecord) -> AnalysisRecord:
        """Add a record, replacing any record with the same ID."""
        self.records[record.analysis_id] = record
        self._index(record)
        return record

    def get(self, analysis_id: str) -> AnalysisRecord | None:
        return self.records.get(analysis_id)

    def list_all(self) -> list[AnalysisRecord]:
        return list(self.records.values())

    def find_by_type(self, rubric_type: str) -> list[AnalysisRecord]:
        """Get all records scored (or to be scored) under a rubric type."""
        ids = self._by_type.get(rubric_type.lower(), [])
        return [self.records[analysis_id] for analysis_id in ids]

    def update(self, record: AnalysisRecord) -> AnalysisRecord:
        """Replace a stored record.

        Raises
        ------
        EntityNotFoundError
            If no record has the same ID.
        """
        if record.analysis_id not in self.records:
            raise EntityNotFoundError(f"Analysis {record.analysis_id} not found")
        self.records[record.analysis_id] = record
        self._index(record)
        return record

    def delete(self, analysis_id: str) -> bool:
        """Remove a record; returns False when it did not exist."""
        if self.records.pop(analysis_id, None) is None:
            return False
        self._unindex(analysis_id)
        return True

    def _index(self, record: AnalysisRecord) -> None:
        key = record.rubric_type.lower()
        if self._type_of.get(record.analysis_id) == key:
            return
        self._unindex(record.analysis_id)
        self._by_type.setdefault(key, []).append(record.analysis_id)
        self._type_of[record.analysis_id] = key

    def _unindex(self, analysis_id: str) -> None:
        key = self._type_of.pop(analysis_id, None)
        if key is not None:
            self._by_type[key].remove(analysis_id)

    def __len__(self) -> int:
        return len(self.records)
