"""Rubric profiles: named weight tables, evaluators and tier bands.

A profile fully determines scoring behaviour. Profiles are plain data
assembled from the primitives in :mod:`propscore.scoring.evaluators`, and
are validated when constructed so a malformed rubric fails at import time
rather than producing out-of-range scores.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from propscore.exceptions import ConfigurationError
from propscore.models.attributes import PropertyAttributes
from propscore.models.enums import (
    AggregationMode,
    DemandLevel,
    LandOwnership,
    LocationCategory,
    MaintenanceLevel,
    PropertyType,
    RiskRating,
    SchoolZoneQuality,
    Tier,
    Zoning,
)
from propscore.scoring.evaluators import (
    AtLeastBands,
    AtMostBands,
    CategoryScores,
    Evaluator,
    FlagCount,
    FlagScores,
    GuardedBands,
    TruthTable,
)

logger = logging.getLogger(__name__)

FULL_WEIGHT = Decimal("1.00")


@dataclass(frozen=True)
class Criterion:
    """One weighted rubric line."""

    name: str
    weight: Decimal
    fields: tuple[str, ...]
    evaluator: Evaluator

    def evaluate(self, attributes: PropertyAttributes) -> Decimal | None:
        return self.evaluator(*(getattr(attributes, name) for name in self.fields))


@dataclass(frozen=True)
class TierBand:
    """Scores at or above ``minimum`` fall into ``tier``."""

    minimum: Decimal
    tier: Tier
    verdict: str


@dataclass(frozen=True)
class RubricProfile:
    """Named bundle of criteria, tier bands and default aggregation mode."""

    name: str
    description: str
    criteria: tuple[Criterion, ...]
    tiers: tuple[TierBand, ...]
    default_mode: AggregationMode = AggregationMode.STRICT

    def __post_init__(self) -> None:
        self._validate()

    @property
    def total_weight(self) -> Decimal:
        return sum((c.weight for c in self.criteria), Decimal("0"))

    @property
    def weights(self) -> dict[str, Decimal]:
        """Weight table keyed by criterion name."""
        return {c.name: c.weight for c in self.criteria}

    def criterion(self, name: str) -> Criterion:
        for c in self.criteria:
            if c.name == name:
                return c
        raise KeyError(name)

    def _validate(self) -> None:
        names = [c.name for c in self.criteria]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ConfigurationError(f"Profile {self.name}: duplicate criteria {duplicates}")

        known = set(PropertyAttributes.field_names())
        for c in self.criteria:
            if c.weight <= 0:
                raise ConfigurationError(f"Profile {self.name}: {c.name} has non-positive weight")
            unknown = [f for f in c.fields if f not in known]
            if unknown:
                raise ConfigurationError(f"Profile {self.name}: {c.name} reads unknown fields {unknown}")

        if self.total_weight != FULL_WEIGHT:
            raise ConfigurationError(
                f"Profile {self.name}: weights sum to {self.total_weight}, expected {FULL_WEIGHT}"
            )

        minimums = [band.minimum for band in self.tiers]
        if not minimums or minimums != sorted(set(minimums), reverse=True) or minimums[-1] != 0:
            raise ConfigurationError(
                f"Profile {self.name}: tier bands must strictly descend and end at 0"
            )


def criterion(name: str, weight: str, fields: str | tuple[str, ...], evaluator: Evaluator) -> Criterion:
    """Shorthand used by the built-in tables below."""
    if isinstance(fields, str):
        fields = (fields,)
    return Criterion(name=name, weight=Decimal(weight), fields=fields, evaluator=evaluator)


def tiers(*bands: tuple[Any, Tier, str]) -> tuple[TierBand, ...]:
    return tuple(TierBand(Decimal(str(minimum)), tier, verdict) for minimum, tier, verdict in bands)


ANCHOR_V1 = RubricProfile(
    name="anchor-v1",
    description="Anchor property rubric for properties researched by address",
    default_mode=AggregationMode.STRICT,
    criteria=(
        # Legal/structural identity
        criterion("property_type", "0.04", "property_type", CategoryScores(
            {
                PropertyType.HOUSE: 100,
                PropertyType.TOWNHOUSE: 90,
                PropertyType.DUPLEX: 85,
                PropertyType.UNIT: 80,
                PropertyType.APARTMENT: 80,
            },
            default=50,
        )),
        criterion("land_ownership", "0.04", "land_ownership", CategoryScores(
            {LandOwnership.FREEHOLD: 100, LandOwnership.STRATA: 75, LandOwnership.LEASEHOLD: 50},
            default=40,
        )),
        criterion("title_clarity", "0.08", ("has_clear_title", "has_encumbrances"), TruthTable(
            {(True, False): 100, (True, True): 70, (False, False): 60, (False, True): 30},
        )),
        criterion("zoning", "0.03", "zoning", CategoryScores(
            {Zoning.RESIDENTIAL: 100, Zoning.MIXED: 85, Zoning.COMMERCIAL: 70, Zoning.INDUSTRIAL: 50},
            default=40,
        )),
        # Location
        criterion("location_category", "0.04", "location_category", CategoryScores(
            {LocationCategory.METRO: 100, LocationCategory.REGIONAL: 75, LocationCategory.RURAL: 50},
            default=40,
        )),
        criterion("proximity_to_cbd", "0.03", "distance_to_cbd_km", AtMostBands(
            ((10, 100), (20, 85), (30, 70), (50, 55)), otherwise=40,
        )),
        criterion("school_zone", "0.03", "school_zone_quality", CategoryScores(
            {
                SchoolZoneQuality.TOP_TIER: 100,
                SchoolZoneQuality.GOOD: 85,
                SchoolZoneQuality.AVERAGE: 70,
                SchoolZoneQuality.BELOW_AVERAGE: 50,
            },
            default=40,
        )),
        criterion("public_transport", "0.02", "distance_to_public_transport_meters", AtMostBands(
            ((500, 100), (1000, 85), (2000, 70)), otherwise=50,
        )),
        # Yield and growth
        criterion("rental_yield", "0.07", "rental_yield_percentage", AtLeastBands(
            ((5, 100), (4, 85), (3, 70), (2, 50)), otherwise=30,
        )),
        criterion("capital_growth", "0.06", "capital_growth_percentage", AtLeastBands(
            ((7, 100), (5, 85), (3, 70), (1, 50)), otherwise=30,
        )),
        criterion("vacancy_rate", "0.03", "vacancy_rate_percentage", AtMostBands(
            ((2, 100), (3, 85), (5, 70), (7, 50)), otherwise=30,
        )),
        criterion("local_demand", "0.04", "local_demand", CategoryScores(
            {DemandLevel.HIGH: 100, DemandLevel.MEDIUM: 70, DemandLevel.LOW: 40},
            default=30,
        )),
        # Physical condition
        criterion("structural_soundness", "0.05", ("has_structural_issues", "property_age_years"), GuardedBands(
            guard_score=30,
            bands=AtMostBands(((10, 100), (20, 85), (40, 70)), otherwise=60),
        )),
        criterion("major_defects", "0.04", "has_major_defects", FlagScores(when_true=0, when_false=100)),
        criterion("maintenance", "0.02", "maintenance_level", CategoryScores(
            {MaintenanceLevel.MINIMAL: 100, MaintenanceLevel.MODERATE: 70, MaintenanceLevel.EXTENSIVE: 40},
            default=50,
        )),
        criterion("compliance", "0.03", ("meets_current_building_codes", "has_required_certificates"),
                  FlagCount((20, 60, 100))),
        # Tenancy
        criterion("tenant_quality", "0.02", ("has_long_term_tenants", "has_reliable_payment_history"),
                  FlagCount((40, 70, 100))),
        criterion("lease_status", "0.02", "lease_remaining_months", AtLeastBands(
            ((12, 100), (6, 75), (3, 50)), otherwise=30,
        )),
        criterion("rental_consistency", "0.01", "has_consistent_rental_history",
                  FlagScores(when_true=100, when_false=50)),
        criterion("cash_flow_coverage", "0.04", "cash_flow_coverage_ratio", AtLeastBands(
            (("1.3", 100), ("1.2", 85), ("1.1", 70), ("1.0", 55)), otherwise=30,
        )),
        # Financing
        criterion("loan_serviceability", "0.03", "meets_serviceability_requirements",
                  FlagScores(when_true=100, when_false=30)),
        criterion("equity_buffer", "0.02", "loan_to_value_ratio", AtMostBands(
            ((60, 100), (70, 85), (80, 70), (90, 50)), otherwise=30,
        )),
        criterion("insurance_costs", "0.01", "annual_insurance_cost", AtMostBands(
            ((1500, 100), (2500, 80), (3500, 60)), otherwise=40,
        )),
        criterion("cross_collateral", "0.02", "suitable_for_cross_collateral",
                  FlagScores(when_true=100, when_false=40)),
        criterion("borrowing_capacity", "0.02", "equity_available", AtLeastBands(
            ((200000, 100), (150000, 85), (100000, 70), (50000, 55)), otherwise=40,
        )),
        criterion("refinance_eligibility", "0.01", "eligible_for_refinance",
                  FlagScores(when_true=100, when_false=50)),
        # Market behaviour
        criterion("sale_history", "0.02", ("has_stable_sale_history", "years_since_last_sale"), TruthTable(
            {(True, True): 100, (True, False): 80, (False, True): 60, (False, False): 40},
            thresholds=(None, 2),
        )),
        criterion("market_activity", "0.02", "days_on_market", AtMostBands(
            ((30, 100), (60, 80), (90, 60)), otherwise=40,
        )),
        criterion("comparable_sales", "0.02", "has_strong_comparables",
                  FlagScores(when_true=100, when_false=50)),
        # Standard stock is easier to value and resell than unique stock
        criterion("uniqueness", "0.01", "is_unique_property", FlagScores(when_true=70, when_false=100)),
        # Risk and portfolio fit
        criterion("lender_acceptance", "0.03", "accepted_by_major_lenders",
                  FlagScores(when_true=100, when_false=30)),
        criterion("risk_rating", "0.02", "risk_rating", CategoryScores(
            {RiskRating.LOW: 100, RiskRating.MEDIUM: 70, RiskRating.HIGH: 30},
            default=50,
        )),
        criterion("development_risk", "0.01", "has_development_risk", FlagScores(when_true=30, when_false=100)),
        criterion("portfolio_diversity", "0.01", "fits_portfolio_diversity",
                  FlagScores(when_true=100, when_false=50)),
        criterion("long_term_hold", "0.01", "viable_for_long_term_hold",
                  FlagScores(when_true=100, when_false=40)),
    ),
    tiers=tiers(
        (80, Tier.EXCELLENT, "Excellent - Strong anchor property"),
        (60, Tier.GOOD, "Good - Suitable anchor property"),
        (40, Tier.FAIR, "Fair - Moderate anchor potential"),
        (0, Tier.POOR, "Poor - Low anchor potential"),
    ),
)


ANCHOR_URL_V1 = RubricProfile(
    name="anchor-url-v1",
    description="Anchor property rubric for attributes scraped from a listing URL",
    default_mode=AggregationMode.RENORMALIZED,
    criteria=(
        criterion("property_type", "0.05", "property_type", CategoryScores(
            {
                PropertyType.HOUSE: 100,
                PropertyType.TOWNHOUSE: 85,
                PropertyType.DUPLEX: 80,
                PropertyType.UNIT: 75,
            },
            default=60,
        )),
        criterion("land_ownership", "0.04", "land_ownership", CategoryScores(
            {LandOwnership.FREEHOLD: 100, LandOwnership.STRATA: 70, LandOwnership.LEASEHOLD: 50},
            default=40,
        )),
        criterion("title_clarity", "0.08", ("has_clear_title", "has_encumbrances"), TruthTable(
            {(True, False): 100, (True, True): 60, (False, False): 50, (False, True): 30},
        )),
        criterion("zoning", "0.03", "zoning", CategoryScores(
            {Zoning.RESIDENTIAL: 100, Zoning.MIXED: 75, Zoning.COMMERCIAL: 60, Zoning.INDUSTRIAL: 50},
            default=40,
        )),
        criterion("location_category", "0.04", "location_category", CategoryScores(
            {LocationCategory.METRO: 100, LocationCategory.REGIONAL: 70, LocationCategory.RURAL: 50},
            default=60,
        )),
        criterion("proximity_to_cbd", "0.03", "distance_to_cbd_km", AtMostBands(
            ((5, 100), (10, 90), (20, 75), (30, 60)), otherwise=40,
        )),
        criterion("school_zone", "0.03", "school_zone_quality", CategoryScores(
            {SchoolZoneQuality.TOP_TIER: 100, SchoolZoneQuality.GOOD: 80, SchoolZoneQuality.AVERAGE: 60},
            default=40,
        )),
        criterion("public_transport", "0.02", "distance_to_public_transport_meters", AtMostBands(
            ((400, 100), (800, 85), (1500, 70)), otherwise=50,
        )),
        criterion("rental_yield", "0.05", "rental_yield_percentage", AtLeastBands(
            ((6, 100), (5, 85), (4, 70), (3, 55)), otherwise=40,
        )),
        criterion("capital_growth", "0.06", "capital_growth_percentage", AtLeastBands(
            ((8, 100), (6, 85), (4, 70), (2, 55)), otherwise=40,
        )),
        criterion("vacancy_rate", "0.03", "vacancy_rate_percentage", AtMostBands(
            ((1, 100), (2, 85), (3, 70), (5, 50)), otherwise=30,
        )),
        criterion("local_demand", "0.03", "local_demand", CategoryScores(
            {DemandLevel.HIGH: 100, DemandLevel.MEDIUM: 70, DemandLevel.LOW: 40},
            default=50,
        )),
        criterion("structural_condition", "0.04", "has_structural_issues",
                  FlagScores(when_true=30, when_false=100)),
        criterion("property_age", "0.02", "property_age_years", AtMostBands(
            ((5, 100), (10, 90), (20, 75), (30, 60)), otherwise=40,
        )),
        criterion("major_defects", "0.04", "has_major_defects", FlagScores(when_true=20, when_false=100)),
        criterion("maintenance", "0.02", "maintenance_level", CategoryScores(
            {MaintenanceLevel.MINIMAL: 100, MaintenanceLevel.MODERATE: 70, MaintenanceLevel.EXTENSIVE: 40},
            default=60,
        )),
        criterion("building_codes", "0.03", "meets_current_building_codes",
                  FlagScores(when_true=100, when_false=40)),
        criterion("certificates", "0.02", "has_required_certificates",
                  FlagScores(when_true=100, when_false=50)),
        criterion("tenant_quality", "0.02", "has_long_term_tenants", FlagScores(when_true=100, when_false=60)),
        criterion("payment_history", "0.02", "has_reliable_payment_history",
                  FlagScores(when_true=100, when_false=50)),
        criterion("lease_terms", "0.02", "lease_remaining_months", AtLeastBands(
            ((12, 100), (6, 70), (3, 50)), otherwise=30,
        )),
        criterion("rental_history", "0.01", "has_consistent_rental_history",
                  FlagScores(when_true=100, when_false=60)),
        criterion("cash_flow_coverage", "0.04", "cash_flow_coverage_ratio", AtLeastBands(
            (("1.5", 100), ("1.3", 85), ("1.2", 70), ("1.0", 50)), otherwise=30,
        )),
        criterion("serviceability", "0.03", "meets_serviceability_requirements",
                  FlagScores(when_true=100, when_false=40)),
        criterion("loan_to_value", "0.02", "loan_to_value_ratio", AtMostBands(
            ((60, 100), (70, 85), (80, 70), (90, 50)), otherwise=30,
        )),
        criterion("insurance_costs", "0.01", "annual_insurance_cost", AtMostBands(
            ((1000, 100), (1500, 85), (2000, 70), (2500, 55)), otherwise=40,
        )),
        criterion("cross_collateral", "0.02", "suitable_for_cross_collateral",
                  FlagScores(when_true=100, when_false=50)),
        criterion("available_equity", "0.02", "equity_available", AtLeastBands(
            ((200000, 100), (150000, 85), (100000, 70), (50000, 55)), otherwise=40,
        )),
        criterion("refinance_eligibility", "0.02", "eligible_for_refinance",
                  FlagScores(when_true=100, when_false=50)),
        criterion("sale_history", "0.02", "has_stable_sale_history", FlagScores(when_true=100, when_false=60)),
        criterion("time_since_last_sale", "0.02", "years_since_last_sale", AtLeastBands(
            ((5, 100), (3, 85), (2, 70), (1, 55)), otherwise=40,
        )),
        criterion("days_on_market", "0.02", "days_on_market", AtMostBands(
            ((14, 100), (30, 85), (60, 70), (90, 55)), otherwise=40,
        )),
        criterion("comparables", "0.02", "has_strong_comparables", FlagScores(when_true=100, when_false=60)),
        criterion("uniqueness", "0.01", "is_unique_property", FlagScores(when_true=60, when_false=100)),
        criterion("lender_acceptance", "0.02", "accepted_by_major_lenders",
                  FlagScores(when_true=100, when_false=40)),
    ),
    tiers=tiers(
        (85, Tier.EXCELLENT, "Excellent Anchor Property - Highly recommended for portfolio"),
        (75, Tier.VERY_GOOD, "Very Good Anchor Property - Recommended with minor considerations"),
        (65, Tier.GOOD, "Good Anchor Property - Suitable with some conditions"),
        (50, Tier.FAIR, "Fair Anchor Property - Requires careful evaluation"),
        (0, Tier.BELOW_STANDARD, "Below Standard - Not recommended as anchor property"),
    ),
)


_REGISTRY: dict[str, RubricProfile] = {}


def register_profile(profile: RubricProfile) -> RubricProfile:
    """Make a profile resolvable by name.

    Raises
    ------
    ConfigurationError
        If a profile with the same name is already registered.
    """
    key = profile.name.lower()
    if key in _REGISTRY:
        raise ConfigurationError(f"Rubric profile already registered: {profile.name}")
    _REGISTRY[key] = profile
    logger.debug("Registered rubric profile %s (%d criteria)", profile.name, len(profile.criteria))
    return profile


def get_profile(name: str | RubricProfile) -> RubricProfile:
    """Resolve a profile by name (case-insensitive).

    Raises
    ------
    ConfigurationError
        If no profile with that name exists.
    """
    if isinstance(name, RubricProfile):
        return name
    profile = _REGISTRY.get(str(name).strip().lower())
    if profile is None:
        raise ConfigurationError(
            f"Unknown rubric profile: {name!r} (available: {', '.join(available_profiles())})"
        )
    return profile


def available_profiles() -> list[str]:
    return sorted(profile.name for profile in _REGISTRY.values())


register_profile(ANCHOR_V1)
register_profile(ANCHOR_URL_V1)
