"""Weighted rubric scoring engine."""

from propscore.scoring.aggregator import aggregate, combine, coverage, score_criteria
from propscore.scoring.engine import ScoringEngine, analyse_property
from propscore.scoring.insights import InsightExtractor, InsightRule, extract_insights
from propscore.scoring.profiles import (
    ANCHOR_URL_V1,
    ANCHOR_V1,
    Criterion,
    RubricProfile,
    TierBand,
    available_profiles,
    get_profile,
    register_profile,
)
from propscore.scoring.tiers import classify

__all__ = [
    "ANCHOR_URL_V1",
    "ANCHOR_V1",
    "Criterion",
    "InsightExtractor",
    "InsightRule",
    "RubricProfile",
    "ScoringEngine",
    "TierBand",
    "aggregate",
    "analyse_property",
    "available_profiles",
    "classify",
    "combine",
    "coverage",
    "extract_insights",
    "get_profile",
    "register_profile",
    "score_criteria",
]
