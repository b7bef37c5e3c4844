"""Persistence interface for analysis records."""

from typing import Protocol

from propscore.models.analysis import AnalysisRecord


class AnalysisStore(Protocol):
    """CRUD operations the analysis service needs from a store."""

    def add(self, record: AnalysisRecord) -> AnalysisRecord: ...

    def get(self, analysis_id: str) -> AnalysisRecord | None: ...

    def list_all(self) -> list[AnalysisRecord]: ...

    def find_by_type(self, rubric_type: str) -> list[AnalysisRecord]: ...

    def update(self, record: AnalysisRecord) -> AnalysisRecord: ...

    def delete(self, analysis_id: str) -> bool: ...
