"""Scoring engine: attributes -> score, tier, verdict, strengths and risks."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from propscore.models.attributes import PropertyAttributes
from propscore.models.enums import AggregationMode
from propscore.models.result import AnalysisResult
from propscore.scoring.aggregator import combine, coverage, resolve_mode, score_criteria
from propscore.scoring.insights import InsightExtractor
from propscore.scoring.profiles import RubricProfile, get_profile
from propscore.scoring.tiers import classify

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Score attribute records under one rubric profile.

    The engine holds only immutable configuration, so one instance can be
    shared between threads and requests.

    Parameters
    ----------
    profile : RubricProfile | str
        Profile or registered profile name.
    mode : AggregationMode | str | None
        Missing-attribute policy; ``None`` uses the profile default.
    insights : InsightExtractor | None
        Strength/risk rule set; the default rules when ``None``.

    Raises
    ------
    ConfigurationError
        If the profile name or aggregation mode is unknown.
    """

    def __init__(
        self,
        profile: RubricProfile | str = "anchor-v1",
        mode: AggregationMode | str | None = None,
        insights: InsightExtractor | None = None,
    ) -> None:
        self.profile = get_profile(profile)
        self.mode = resolve_mode(self.profile, mode)
        self.insights = insights or InsightExtractor()

    def analyse(self, attributes: PropertyAttributes | Mapping[str, Any]) -> AnalysisResult:
        """Score one record.

        Parameters
        ----------
        attributes : PropertyAttributes | Mapping[str, Any]
            Typed record, or a wire JSON object parsed with
            :meth:`PropertyAttributes.from_dict`.

        Returns
        -------
        AnalysisResult
            Immutable result.
        """
        if not isinstance(attributes, PropertyAttributes):
            attributes = PropertyAttributes.from_dict(attributes)

        breakdown = score_criteria(attributes, self.profile)
        score = combine(breakdown, self.mode)
        tier, verdict = classify(score, self.profile.tiers)
        strengths, risks = self.insights.extract(attributes)

        result = AnalysisResult(
            profile=self.profile.name,
            mode=self.mode,
            score=score,
            coverage=coverage(breakdown),
            tier=tier,
            verdict=verdict,
            strengths=strengths,
            risks=risks,
            breakdown=breakdown,
        )
        logger.debug(
            "Scored %d/%d criteria under %s (%s): %s %s",
            result.scored_criteria,
            len(breakdown),
            self.profile.name,
            self.mode.value,
            score,
            tier.value,
        )
        return result


def analyse_property(
    attributes: PropertyAttributes | Mapping[str, Any],
    profile: RubricProfile | str = "anchor-v1",
    mode: AggregationMode | str | None = None,
) -> AnalysisResult:
    """Score one record with a throwaway engine."""
    return ScoringEngine(profile, mode).analyse(attributes)
