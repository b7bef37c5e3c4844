"""Synthetic property attribute records."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from propscore.generators.base import BaseGenerator
from propscore.models.attributes import PropertyAttributes
from propscore.models.enums import (
    DemandLevel,
    LandOwnership,
    LocationCategory,
    MaintenanceLevel,
    PropertyType,
    RiskRating,
    SchoolZoneQuality,
    Zoning,
)

# (min, max) km from the CBD by location category
CBD_DISTANCE_KM = {
    LocationCategory.METRO: (1, 30),
    LocationCategory.REGIONAL: (25, 150),
    LocationCategory.RURAL: (80, 400),
}

LOCATION_WEIGHTS = {
    LocationCategory.METRO: 0.6,
    LocationCategory.REGIONAL: 0.3,
    LocationCategory.RURAL: 0.1,
}


class PropertyAttributesGenerator(BaseGenerator):
    """Generate plausible, optionally sparse, attribute records.

    Location drives distance, demand and lender acceptance so generated
    records spread across the tier bands instead of clustering.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale used for addresses.
    completeness : float
        Probability that each field is populated (0.0 to 1.0).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_AU",
        completeness: float = 1.0,
    ) -> None:
        if not 0.0 <= completeness <= 1.0:
            raise ValueError(f"completeness must be between 0 and 1, got {completeness}")
        super().__init__(seed, locale)
        self.completeness = completeness

    def generate_address(self) -> str:
        """Generate a single-line street address."""
        return self.fake.address().replace("\n", ", ")

    def generate(self) -> PropertyAttributes:
        """Generate one attribute record.

        Returns
        -------
        PropertyAttributes
            Record with roughly ``completeness`` of its fields populated.
        """
        values = {name: value for name, value in self._full_record().items() if self._keep()}
        return PropertyAttributes(**values)

    def generate_batch(self, count: int) -> list[PropertyAttributes]:
        """Generate ``count`` records."""
        return [self.generate() for _ in range(count)]

    def _keep(self) -> bool:
        return self.completeness >= 1.0 or self.rng.random() < self.completeness

    def _full_record(self) -> dict[str, Any]:
        rng = self.rng
        location = rng.choices(list(LOCATION_WEIGHTS), weights=list(LOCATION_WEIGHTS.values()))[0]
        low, high = CBD_DISTANCE_KM[location]
        metro = location == LocationCategory.METRO
        property_type = rng.choice([t for t in PropertyType if t is not PropertyType.UNKNOWN])
        strata = property_type in (PropertyType.UNIT, PropertyType.APARTMENT, PropertyType.TOWNHOUSE)
        age = rng.randint(0, 80)

        def chance(p: float) -> bool:
            return rng.random() < p

        return {
            "property_type": property_type,
            "land_ownership": LandOwnership.STRATA if strata else rng.choices(
                [LandOwnership.FREEHOLD, LandOwnership.LEASEHOLD], weights=[0.9, 0.1]
            )[0],
            "has_clear_title": chance(0.92),
            "has_encumbrances": chance(0.1),
            "zoning": rng.choices(
                [Zoning.RESIDENTIAL, Zoning.MIXED, Zoning.COMMERCIAL, Zoning.INDUSTRIAL],
                weights=[0.8, 0.12, 0.05, 0.03],
            )[0],
            "location_category": location,
            "distance_to_cbd_km": rng.randint(low, high),
            "school_zone_quality": rng.choice(
                [q for q in SchoolZoneQuality if q is not SchoolZoneQuality.UNKNOWN]
            ),
            "distance_to_public_transport_meters": rng.randint(100, 1500 if metro else 5000),
            "local_demand": rng.choices(
                [DemandLevel.HIGH, DemandLevel.MEDIUM, DemandLevel.LOW],
                weights=[0.5, 0.35, 0.15] if metro else [0.2, 0.45, 0.35],
            )[0],
            "rental_yield_percentage": self._percent(2.0, 7.5),
            "capital_growth_percentage": self._percent(0.5, 9.0),
            "vacancy_rate_percentage": self._percent(0.5, 7.0),
            "cash_flow_coverage_ratio": Decimal(str(round(rng.uniform(0.7, 1.6), 2))),
            "has_structural_issues": chance(0.08 + age / 400),
            "property_age_years": age,
            "has_major_defects": chance(0.05 + age / 500),
            "maintenance_level": self._maintenance_for_age(age),
            "meets_current_building_codes": chance(0.95 if age < 30 else 0.7),
            "has_required_certificates": chance(0.9),
            "has_long_term_tenants": chance(0.55),
            "has_reliable_payment_history": chance(0.85),
            "lease_remaining_months": rng.randint(0, 24),
            "has_consistent_rental_history": chance(0.75),
            "meets_serviceability_requirements": chance(0.8),
            "loan_to_value_ratio": Decimal(rng.randint(50, 95)),
            "annual_insurance_cost": Decimal(rng.randint(8, 60) * 100),
            "suitable_for_cross_collateral": chance(0.6),
            "equity_available": Decimal(rng.randint(0, 60) * 5000),
            "eligible_for_refinance": chance(0.7),
            "has_stable_sale_history": chance(0.7),
            "years_since_last_sale": rng.randint(0, 25),
            "days_on_market": rng.randint(7, 150),
            "has_strong_comparables": chance(0.75 if metro else 0.45),
            "is_unique_property": chance(0.08),
            "accepted_by_major_lenders": chance(0.95 if metro else 0.75),
            "risk_rating": rng.choices(
                [RiskRating.LOW, RiskRating.MEDIUM, RiskRating.HIGH], weights=[0.55, 0.35, 0.1]
            )[0],
            "has_development_risk": chance(0.1),
            "fits_portfolio_diversity": chance(0.7),
            "viable_for_long_term_hold": chance(0.85),
        }

    def _percent(self, low: float, high: float) -> Decimal:
        return Decimal(str(round(self.rng.uniform(low, high), 1)))

    def _maintenance_for_age(self, age: int) -> MaintenanceLevel:
        if age < 15:
            return MaintenanceLevel.MINIMAL
        if age > 50:
            return self.rng.choice([MaintenanceLevel.MODERATE, MaintenanceLevel.EXTENSIVE])
        return self.rng.choice([MaintenanceLevel.MINIMAL, MaintenanceLevel.MODERATE])
