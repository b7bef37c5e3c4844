"""Strengths and risks derived from raw attributes.

This rule set is independent of the rubric: it reads the attribute record
directly, never the sub-scores. Rules fire in declaration order and the
lists are truncated to the first N statements, so rule order is the
presentation order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from propscore.models.attributes import PropertyAttributes
from propscore.models.enums import (
    DemandLevel,
    LandOwnership,
    LocationCategory,
    MaintenanceLevel,
    RiskRating,
    SchoolZoneQuality,
)

MAX_STRENGTHS = 6
MAX_RISKS = 4

NO_STRENGTHS = "Analysis completed - review detailed results"
NO_RISKS = "No significant risks identified"


@dataclass(frozen=True)
class InsightRule:
    """Emit ``template`` formatted with the record when ``condition`` holds."""

    condition: Callable[[PropertyAttributes], bool]
    template: str

    def apply(self, attrs: PropertyAttributes) -> str | None:
        if not self.condition(attrs):
            return None
        return self.template.format(a=attrs)


def _between(value: Decimal | int | None, low: float, high: float) -> bool:
    return value is not None and low <= value <= high


def _at_least(value: Decimal | int | None, bound: float) -> bool:
    return value is not None and value >= bound


def _at_most(value: Decimal | int | None, bound: float) -> bool:
    return value is not None and value <= bound


def _above(value: Decimal | int | None, bound: float) -> bool:
    return value is not None and value > bound


def _below(value: Decimal | int | None, bound: float) -> bool:
    return value is not None and value < bound


STRENGTH_RULES: tuple[InsightRule, ...] = (
    InsightRule(lambda a: a.has_clear_title is True, "Clear property title"),
    InsightRule(lambda a: _at_most(a.distance_to_cbd_km, 10), "Close to CBD ({a.distance_to_cbd_km} km)"),
    InsightRule(lambda a: a.location_category is LocationCategory.METRO, "Located in metro area"),
    InsightRule(lambda a: a.land_ownership is LandOwnership.FREEHOLD, "Freehold ownership - full land control"),
    InsightRule(lambda a: a.has_encumbrances is False, "No encumbrances on property"),
    InsightRule(lambda a: a.local_demand is DemandLevel.HIGH, "High local rental demand"),
    InsightRule(
        lambda a: _at_least(a.rental_yield_percentage, 5),
        "Strong rental yield ({a.rental_yield_percentage:.1f}%)",
    ),
    InsightRule(
        lambda a: _at_least(a.rental_yield_percentage, 4) and _below(a.rental_yield_percentage, 5),
        "Solid rental yield ({a.rental_yield_percentage:.1f}%)",
    ),
    InsightRule(
        lambda a: _at_least(a.capital_growth_percentage, 5),
        "Good capital growth potential ({a.capital_growth_percentage:.1f}%)",
    ),
    InsightRule(lambda a: a.has_structural_issues is False, "No structural issues identified"),
    InsightRule(lambda a: a.has_major_defects is False, "No major defects"),
    InsightRule(lambda a: a.meets_current_building_codes is True, "Meets current building codes"),
    InsightRule(lambda a: a.has_required_certificates is True, "All required certificates in place"),
    InsightRule(lambda a: a.has_long_term_tenants is True, "Has long-term tenants"),
    InsightRule(lambda a: a.has_consistent_rental_history is True, "Consistent rental history"),
    InsightRule(lambda a: a.accepted_by_major_lenders is True, "Accepted by major lenders"),
    InsightRule(lambda a: a.viable_for_long_term_hold is True, "Viable for long-term hold"),
    InsightRule(lambda a: a.school_zone_quality is SchoolZoneQuality.TOP_TIER, "Top-tier school zone"),
    InsightRule(lambda a: a.school_zone_quality is SchoolZoneQuality.GOOD, "Good school zone quality"),
    InsightRule(
        lambda a: _below(a.vacancy_rate_percentage, 2),
        "Low vacancy rate ({a.vacancy_rate_percentage:.1f}%)",
    ),
    InsightRule(lambda a: _at_most(a.distance_to_public_transport_meters, 500), "Close to public transport"),
    InsightRule(lambda a: _at_most(a.property_age_years, 10), "Modern property (10 years old or less)"),
    InsightRule(lambda a: a.maintenance_level is MaintenanceLevel.MINIMAL, "Minimal maintenance required"),
    InsightRule(lambda a: a.risk_rating is RiskRating.LOW, "Low risk rating"),
    InsightRule(lambda a: a.suitable_for_cross_collateral is True, "Suitable for cross-collateralization"),
    InsightRule(lambda a: a.eligible_for_refinance is True, "Eligible for refinancing"),
    InsightRule(lambda a: a.has_strong_comparables is True, "Strong comparable sales in area"),
    InsightRule(lambda a: a.fits_portfolio_diversity is True, "Good portfolio diversification"),
)

RISK_RULES: tuple[InsightRule, ...] = (
    InsightRule(lambda a: a.has_encumbrances is True, "Property has encumbrances"),
    InsightRule(lambda a: a.has_clear_title is False, "Title issues may exist"),
    InsightRule(lambda a: a.land_ownership is LandOwnership.LEASEHOLD, "Leasehold - limited ownership period"),
    InsightRule(lambda a: a.land_ownership is LandOwnership.STRATA, "Strata - body corporate fees apply"),
    InsightRule(lambda a: a.has_structural_issues is True, "Structural issues identified"),
    InsightRule(lambda a: a.has_major_defects is True, "Major defects present"),
    InsightRule(lambda a: a.maintenance_level is MaintenanceLevel.EXTENSIVE, "Extensive maintenance required"),
    InsightRule(lambda a: a.maintenance_level is MaintenanceLevel.MODERATE, "Moderate maintenance needed"),
    InsightRule(lambda a: a.meets_current_building_codes is False, "May not meet current building codes"),
    InsightRule(lambda a: a.risk_rating is RiskRating.HIGH, "High risk rating"),
    InsightRule(lambda a: a.risk_rating is RiskRating.MEDIUM, "Medium risk rating"),
    InsightRule(lambda a: a.has_development_risk is True, "Development risk in area"),
    InsightRule(lambda a: a.location_category is LocationCategory.RURAL, "Rural location may limit growth"),
    InsightRule(lambda a: a.location_category is LocationCategory.REGIONAL, "Regional location - slower growth"),
    InsightRule(lambda a: a.accepted_by_major_lenders is False, "May not be accepted by major lenders"),
    InsightRule(lambda a: a.is_unique_property is True, "Unique property - limited comparables"),
    InsightRule(
        lambda a: _above(a.vacancy_rate_percentage, 5),
        "High vacancy rate ({a.vacancy_rate_percentage:.1f}%)",
    ),
    InsightRule(
        lambda a: _between(a.vacancy_rate_percentage, 3, 5),
        "Moderate vacancy rate ({a.vacancy_rate_percentage:.1f}%)",
    ),
    InsightRule(lambda a: _above(a.property_age_years, 40), "Older property ({a.property_age_years} years)"),
    InsightRule(lambda a: _above(a.distance_to_cbd_km, 30), "Far from CBD ({a.distance_to_cbd_km} km)"),
    InsightRule(lambda a: a.local_demand is DemandLevel.LOW, "Low local rental demand"),
    InsightRule(
        lambda a: _below(a.rental_yield_percentage, 3),
        "Low rental yield ({a.rental_yield_percentage:.1f}%)",
    ),
    InsightRule(
        lambda a: _below(a.capital_growth_percentage, 3),
        "Low capital growth ({a.capital_growth_percentage:.1f}%)",
    ),
    InsightRule(lambda a: a.school_zone_quality is SchoolZoneQuality.AVERAGE, "Average school zone"),
    InsightRule(lambda a: a.viable_for_long_term_hold is False, "Not ideal for long-term hold"),
)


class InsightExtractor:
    """Apply ordered strength and risk rules to an attribute record.

    Parameters
    ----------
    strength_rules : tuple[InsightRule, ...]
        Rules producing strength statements, in presentation order.
    risk_rules : tuple[InsightRule, ...]
        Rules producing risk statements, in presentation order.
    max_strengths : int
        Strengths kept after truncation.
    max_risks : int
        Risks kept after truncation.
    """

    def __init__(
        self,
        strength_rules: tuple[InsightRule, ...] = STRENGTH_RULES,
        risk_rules: tuple[InsightRule, ...] = RISK_RULES,
        max_strengths: int = MAX_STRENGTHS,
        max_risks: int = MAX_RISKS,
    ) -> None:
        if max_strengths < 1 or max_risks < 1:
            raise ValueError("insight caps must be at least 1")
        self.strength_rules = strength_rules
        self.risk_rules = risk_rules
        self.max_strengths = max_strengths
        self.max_risks = max_risks

    def extract(self, attrs: PropertyAttributes) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """Return ``(strengths, risks)``; neither is ever empty."""
        strengths = _fire(self.strength_rules, attrs)[: self.max_strengths] or [NO_STRENGTHS]
        risks = _fire(self.risk_rules, attrs)[: self.max_risks] or [NO_RISKS]
        return tuple(strengths), tuple(risks)


def _fire(rules: tuple[InsightRule, ...], attrs: PropertyAttributes) -> list[str]:
    statements = []
    for rule in rules:
        statement = rule.apply(attrs)
        if statement is not None:
            statements.append(statement)
    return statements


def extract_insights(attrs: PropertyAttributes) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Extract strengths and risks with the default rules and caps."""
    return InsightExtractor().extract(attrs)
