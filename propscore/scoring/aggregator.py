"""Combine criterion sub-scores into one 0-100 score.

Two policies for missing attributes are supported and must be chosen
explicitly (directly, or through the profile's default):

``STRICT``
    The denominator is fixed at 1.0; unknown criteria contribute zero, so
    incomplete records are penalized.

``RENORMALIZED``
    The weighted sum is divided by the weight actually covered, so the
    score reflects only what is known. Zero coverage scores 0.00.

With complete coverage both policies give the same result.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

from propscore.exceptions import ConfigurationError
from propscore.models.attributes import PropertyAttributes
from propscore.models.enums import AggregationMode
from propscore.models.result import CriterionScore
from propscore.scoring.profiles import RubricProfile, get_profile

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def score_criteria(
    attributes: PropertyAttributes, profile: RubricProfile | str
) -> tuple[CriterionScore, ...]:
    """Evaluate every criterion of a profile, in rubric order."""
    profile = get_profile(profile)
    return tuple(
        CriterionScore(name=c.name, weight=c.weight, sub_score=c.evaluate(attributes))
        for c in profile.criteria
    )


def coverage(breakdown: tuple[CriterionScore, ...]) -> Decimal:
    """Sum of weights of the criteria that were scored."""
    return sum((item.weight for item in breakdown if item.is_scored), ZERO)


def combine(breakdown: tuple[CriterionScore, ...], mode: AggregationMode) -> Decimal:
    """Apply an aggregation policy to an evaluated breakdown."""
    total_score = sum((item.weighted_score for item in breakdown), ZERO)

    if mode is AggregationMode.STRICT:
        return _round(total_score)

    total_weight = coverage(breakdown)
    if total_weight == 0:
        return _round(ZERO)
    return _round(total_score / total_weight)


def aggregate(
    attributes: PropertyAttributes,
    profile: RubricProfile | str,
    mode: AggregationMode | str | None = None,
) -> Decimal:
    """Score a record under a profile.

    Parameters
    ----------
    attributes : PropertyAttributes
        Possibly sparse attribute record.
    profile : RubricProfile | str
        Profile or registered profile name.
    mode : AggregationMode | str | None
        Missing-attribute policy; ``None`` uses the profile default.

    Returns
    -------
    Decimal
        Score rounded half-even to two decimal places.
    """
    profile = get_profile(profile)
    return combine(score_criteria(attributes, profile), resolve_mode(profile, mode))


def resolve_mode(profile: RubricProfile, mode: AggregationMode | str | None) -> AggregationMode:
    if mode is None:
        return profile.default_mode
    if isinstance(mode, str) and not isinstance(mode, AggregationMode):
        mode = mode.strip().lower()
    try:
        return AggregationMode(mode)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown aggregation mode: {mode!r}") from exc


def _round(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_EVEN)
