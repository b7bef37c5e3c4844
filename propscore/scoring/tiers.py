"""Map an aggregate score to a profile's qualitative tier."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from propscore.models.enums import Tier
from propscore.scoring.profiles import RubricProfile, TierBand, get_profile


def classify(
    score: Decimal | float | int,
    profile: RubricProfile | str | Iterable[TierBand],
) -> tuple[Tier, str]:
    """Return ``(tier, verdict)`` for a score.

    Bands are checked from the highest minimum down; the first band whose
    minimum the score reaches wins.
    """
    if isinstance(profile, (RubricProfile, str)):
        bands: Iterable[TierBand] = get_profile(profile).tiers
    else:
        bands = profile

    score = score if isinstance(score, Decimal) else Decimal(str(score))
    last: TierBand | None = None
    for band in bands:
        last = band
        if score >= band.minimum:
            return band.tier, band.verdict

    if last is None:
        raise ValueError("no tier bands given")
    # Below the floor band (negative input): lowest tier
    return last.tier, last.verdict
