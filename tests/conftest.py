"""Pytest configuration and fixtures."""

from decimal import Decimal
from typing import Any

import pytest

from propscore.models import (
    DemandLevel,
    LandOwnership,
    LocationCategory,
    MaintenanceLevel,
    PropertyAttributes,
    PropertyType,
    RiskRating,
    SchoolZoneQuality,
    Zoning,
)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_address() -> str:
    """Sample street address."""
    return "12 Harbour Street, Sydney NSW 2000"


@pytest.fixture
def sample_url() -> str:
    """Sample listing URL."""
    return "https://listings.example.com.au/property/12-harbour-street-sydney"


@pytest.fixture
def good_attributes() -> PropertyAttributes:
    """A complete record that earns the top sub-score on every anchor-v1 criterion."""
    return PropertyAttributes(
        property_type=PropertyType.HOUSE,
        land_ownership=LandOwnership.FREEHOLD,
        has_clear_title=True,
        has_encumbrances=False,
        zoning=Zoning.RESIDENTIAL,
        location_category=LocationCategory.METRO,
        distance_to_cbd_km=8,
        school_zone_quality=SchoolZoneQuality.TOP_TIER,
        distance_to_public_transport_meters=400,
        local_demand=DemandLevel.HIGH,
        rental_yield_percentage=Decimal("5.5"),
        capital_growth_percentage=Decimal("7.5"),
        vacancy_rate_percentage=Decimal("1.5"),
        cash_flow_coverage_ratio=Decimal("1.4"),
        has_structural_issues=False,
        property_age_years=8,
        has_major_defects=False,
        maintenance_level=MaintenanceLevel.MINIMAL,
        meets_current_building_codes=True,
        has_required_certificates=True,
        has_long_term_tenants=True,
        has_reliable_payment_history=True,
        lease_remaining_months=14,
        has_consistent_rental_history=True,
        meets_serviceability_requirements=True,
        loan_to_value_ratio=Decimal("55"),
        annual_insurance_cost=Decimal("1200"),
        suitable_for_cross_collateral=True,
        equity_available=Decimal("250000"),
        eligible_for_refinance=True,
        has_stable_sale_history=True,
        years_since_last_sale=6,
        days_on_market=21,
        has_strong_comparables=True,
        is_unique_property=False,
        accepted_by_major_lenders=True,
        risk_rating=RiskRating.LOW,
        has_development_risk=False,
        fits_portfolio_diversity=True,
        viable_for_long_term_hold=True,
    )


@pytest.fixture
def poor_attributes() -> PropertyAttributes:
    """A complete record with weak values across the board."""
    return PropertyAttributes(
        property_type=PropertyType.LAND,
        land_ownership=LandOwnership.LEASEHOLD,
        has_clear_title=False,
        has_encumbrances=True,
        zoning=Zoning.INDUSTRIAL,
        location_category=LocationCategory.RURAL,
        distance_to_cbd_km=120,
        school_zone_quality=SchoolZoneQuality.BELOW_AVERAGE,
        distance_to_public_transport_meters=4000,
        local_demand=DemandLevel.LOW,
        rental_yield_percentage=Decimal("1.5"),
        capital_growth_percentage=Decimal("0.5"),
        vacancy_rate_percentage=Decimal("8"),
        cash_flow_coverage_ratio=Decimal("0.8"),
        has_structural_issues=True,
        property_age_years=65,
        has_major_defects=True,
        maintenance_level=MaintenanceLevel.EXTENSIVE,
        meets_current_building_codes=False,
        has_required_certificates=False,
        has_long_term_tenants=False,
        has_reliable_payment_history=False,
        lease_remaining_months=1,
        has_consistent_rental_history=False,
        meets_serviceability_requirements=False,
        loan_to_value_ratio=Decimal("95"),
        annual_insurance_cost=Decimal("4200"),
        suitable_for_cross_collateral=False,
        equity_available=Decimal("10000"),
        eligible_for_refinance=False,
        has_stable_sale_history=False,
        years_since_last_sale=1,
        days_on_market=140,
        has_strong_comparables=False,
        is_unique_property=True,
        accepted_by_major_lenders=False,
        risk_rating=RiskRating.HIGH,
        has_development_risk=True,
        fits_portfolio_diversity=False,
        viable_for_long_term_hold=False,
    )


@pytest.fixture
def wire_attributes() -> dict[str, Any]:
    """Sparse attribute object as it arrives over the wire (camelCase, loose types)."""
    return {
        "propertyType": "house",
        "landOwnership": "FREEHOLD",
        "hasClearTitle": "yes",
        "hasEncumbrances": False,
        "locationCategory": "Metropolitan",
        "distanceToCbdKm": "8",
        "rentalYieldPercentage": 4.6,
        "schoolZoneQuality": "top tier",
        "listingAgent": "ignored",
    }
