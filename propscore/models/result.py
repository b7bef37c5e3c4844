"""Scoring engine output."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from propscore.models.enums import AggregationMode, Tier


@dataclass(frozen=True)
class CriterionScore:
    """One rubric line as evaluated for a record.

    ``sub_score`` is ``None`` when the criterion's inputs were unknown; the
    criterion then contributes neither score nor weight.
    """

    name: str
    weight: Decimal
    sub_score: Decimal | None

    @property
    def is_scored(self) -> bool:
        return self.sub_score is not None

    @property
    def weighted_score(self) -> Decimal:
        if self.sub_score is None:
            return Decimal("0")
        return self.weight * self.sub_score


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable result of scoring one attribute record under one profile."""

    profile: str
    mode: AggregationMode
    score: Decimal  # 0-100, two decimal places
    coverage: Decimal  # sum of weights actually scored
    tier: Tier
    verdict: str
    strengths: tuple[str, ...]
    risks: tuple[str, ...]
    breakdown: tuple[CriterionScore, ...] = ()

    @property
    def scored_criteria(self) -> int:
        return sum(1 for item in self.breakdown if item.is_scored)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "profile": self.profile,
            "mode": self.mode.value,
            "score": str(self.score),
            "coverage": str(self.coverage),
            "tier": self.tier.value,
            "verdict": self.verdict,
            "strengths": list(self.strengths),
            "risks": list(self.risks),
            "breakdown": [
                {
                    "name": item.name,
                    "weight": str(item.weight),
                    "subScore": None if item.sub_score is None else str(item.sub_score),
                }
                for item in self.breakdown
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        """Rebuild a result from :meth:`to_dict` output."""
        return cls(
            profile=data["profile"],
            mode=AggregationMode(data["mode"]),
            score=Decimal(data["score"]),
            coverage=Decimal(data["coverage"]),
            tier=Tier(data["tier"]),
            verdict=data["verdict"],
            strengths=tuple(data.get("strengths", ())),
            risks=tuple(data.get("risks", ())),
            breakdown=tuple(
                CriterionScore(
                    name=item["name"],
                    weight=Decimal(item["weight"]),
                    sub_score=None if item.get("subScore") is None else Decimal(item["subScore"]),
                )
                for item in data.get("breakdown", ())
            ),
        )
