"""Analysis record persisted by the analysis store."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from propscore.models.enums import AnalysisStatus, SourceType
from propscore.models.result import AnalysisResult


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class AnalysisRecord:
    """A request to analyse one property and, once run, its outcome."""

    analysis_id: str
    address: str  # street address, or listing URL when source_type is URL
    rubric_type: str  # rubric profile name
    created_at: datetime
    source_type: SourceType = SourceType.ADDRESS
    status: AnalysisStatus = AnalysisStatus.PENDING
    score: Decimal | None = None
    result_text: str | None = None
    remarks: str | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None
    result: AnalysisResult | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (AnalysisStatus.COMPLETED, AnalysisStatus.FAILED)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire format."""
        return {
            "analysisId": self.analysis_id,
            "address": self.address,
            "rubricType": self.rubric_type,
            "sourceType": self.source_type.value,
            "status": self.status.value,
            "score": str(self.score) if self.score is not None else None,
            "resultText": self.result_text,
            "remarks": self.remarks,
            "completedAt": _iso(self.completed_at),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
