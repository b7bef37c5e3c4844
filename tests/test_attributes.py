"""Tests for PropertyAttributes parsing and coercion."""

import logging
from decimal import Decimal
from typing import Any

import pytest

from propscore.models import (
    LandOwnership,
    LocationCategory,
    PropertyAttributes,
    PropertyType,
    SchoolZoneQuality,
)


class TestFromDict:
    """Tests for building records from wire objects."""

    def test_camel_case_keys(self, wire_attributes: dict[str, Any]) -> None:
        """Test camelCase keys map to fields and values are coerced."""
        attrs = PropertyAttributes.from_dict(wire_attributes)

        assert attrs.property_type is PropertyType.HOUSE
        assert attrs.land_ownership is LandOwnership.FREEHOLD
        assert attrs.has_clear_title is True
        assert attrs.has_encumbrances is False
        assert attrs.location_category is LocationCategory.METRO
        assert attrs.distance_to_cbd_km == 8
        assert attrs.rental_yield_percentage == Decimal("4.6")
        assert attrs.school_zone_quality is SchoolZoneQuality.TOP_TIER

    def test_snake_case_keys(self) -> None:
        """Test snake_case keys are accepted as-is."""
        attrs = PropertyAttributes.from_dict({"distance_to_cbd_km": 12, "has_clear_title": True})

        assert attrs.distance_to_cbd_km == 12
        assert attrs.has_clear_title is True

    def test_pascal_case_keys(self) -> None:
        """Test PascalCase keys are accepted."""
        attrs = PropertyAttributes.from_dict({"DistanceToCbdKm": 5, "PropertyType": "Unit"})

        assert attrs.distance_to_cbd_km == 5
        assert attrs.property_type is PropertyType.UNIT

    def test_unknown_keys_ignored(self) -> None:
        """Test keys that are not attributes are dropped."""
        attrs = PropertyAttributes.from_dict({"listingAgent": "Jo", "price": 900000})

        assert attrs.is_empty()

    def test_direct_construction_coerces(self) -> None:
        """Test raw values passed to the constructor are coerced too."""
        attrs = PropertyAttributes(property_type="apartment", rental_yield_percentage="4.25")

        assert attrs.property_type is PropertyType.APARTMENT
        assert attrs.rental_yield_percentage == Decimal("4.25")


class TestCoercion:
    """Tests for boundary coercion of malformed values."""

    @pytest.mark.parametrize(
        "raw,expected",
        [(True, True), ("yes", True), ("Y", True), ("1", True), (1, True),
         (False, False), ("no", False), ("false", False), (0, False)],
    )
    def test_boolean_strings(self, raw: Any, expected: bool) -> None:
        """Test boolean-like values are accepted."""
        assert PropertyAttributes(has_clear_title=raw).has_clear_title is expected

    def test_unparseable_boolean_is_missing(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a malformed boolean is logged and treated as unknown."""
        with caplog.at_level(logging.WARNING, logger="propscore.models.attributes"):
            attrs = PropertyAttributes(has_clear_title="maybe")

        assert attrs.has_clear_title is None
        assert "has_clear_title" in caplog.text

    def test_unparseable_number_is_missing(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a malformed number is logged and treated as unknown."""
        with caplog.at_level(logging.WARNING, logger="propscore.models.attributes"):
            attrs = PropertyAttributes(rental_yield_percentage="about five")

        assert attrs.rental_yield_percentage is None
        assert "rental_yield_percentage" in caplog.text

    @pytest.mark.parametrize("raw", ["NaN", "Infinity", True, "", "  "])
    def test_rejected_numbers(self, raw: Any) -> None:
        """Test non-finite, boolean and blank numbers are unknown."""
        assert PropertyAttributes(capital_growth_percentage=raw).capital_growth_percentage is None

    def test_float_becomes_exact_decimal(self) -> None:
        """Test floats go through their string form."""
        assert PropertyAttributes(rental_yield_percentage=4.1).rental_yield_percentage == Decimal("4.1")

    @pytest.mark.parametrize("raw,expected", [("10.5", 10), ("11.5", 12), (9.0, 9), (7, 7)])
    def test_integer_fields_round_half_even(self, raw: Any, expected: int) -> None:
        """Test counts and distances are rounded half-even."""
        assert PropertyAttributes(distance_to_cbd_km=raw).distance_to_cbd_km == expected

    @pytest.mark.parametrize(
        "key", ["distanceToCbdKm", "daysOnMarket", "propertyAgeYears", "leaseRemainingMonths"]
    )
    def test_huge_exponent_is_missing(self, key: str, caplog: pytest.LogCaptureFixture) -> None:
        """Test a short string with an enormous exponent is rejected, not expanded."""
        with caplog.at_level(logging.WARNING, logger="propscore.models.attributes"):
            attrs = PropertyAttributes.from_dict({key: "1e400000"})

        assert attrs.is_empty()
        assert "out-of-range" in caplog.text

    def test_integer_magnitude_limit(self) -> None:
        """Test values up to 1e18 are kept and larger ones dropped."""
        assert PropertyAttributes(days_on_market="1e18").days_on_market == 10**18
        assert PropertyAttributes(days_on_market="1e19").days_on_market is None

    @pytest.mark.parametrize("raw", [-5, "-5", "-0.6", Decimal("-12")])
    def test_negative_integer_fields_are_missing(self, raw: Any, caplog: pytest.LogCaptureFixture) -> None:
        """Test negative distances, ages and counts are treated as unknown."""
        with caplog.at_level(logging.WARNING, logger="propscore.models.attributes"):
            attrs = PropertyAttributes(distance_to_cbd_km=raw, property_age_years=raw)

        assert attrs.distance_to_cbd_km is None
        assert attrs.property_age_years is None
        assert "negative" in caplog.text

    def test_negative_zero_rounds_to_zero(self) -> None:
        assert PropertyAttributes(years_since_last_sale="-0.4").years_since_last_sale == 0

    def test_negative_growth_is_kept(self) -> None:
        """Test decimal fields such as capital growth may be negative."""
        attrs = PropertyAttributes(capital_growth_percentage="-1.5")

        assert attrs.capital_growth_percentage == Decimal("-1.5")

    def test_unknown_category(self) -> None:
        """Test unrecognized categorical text becomes UNKNOWN, not None."""
        assert PropertyAttributes(property_type="castle").property_type is PropertyType.UNKNOWN


class TestSerialization:
    """Tests for to_dict and field helpers."""

    def test_to_dict_camel_case(self, wire_attributes: dict[str, Any]) -> None:
        """Test wire output uses camelCase keys and plain values."""
        data = PropertyAttributes.from_dict(wire_attributes).to_dict()

        assert data["propertyType"] == "House"
        assert data["distanceToCbdKm"] == 8
        assert data["rentalYieldPercentage"] == "4.6"
        assert data["schoolZoneQuality"] == "Top-tier"
        assert data["annualInsuranceCost"] is None

    def test_to_dict_reparses(self, good_attributes: PropertyAttributes) -> None:
        """Test wire output parses back to an equal record."""
        assert PropertyAttributes.from_dict(good_attributes.to_dict()) == good_attributes

    def test_field_names(self) -> None:
        """Test the record carries the full attribute set."""
        names = PropertyAttributes.field_names()

        assert len(names) == 40
        assert names[0] == "property_type"
        assert names[-1] == "viable_for_long_term_hold"

    def test_present_fields(self) -> None:
        """Test present_fields lists only populated fields."""
        attrs = PropertyAttributes(days_on_market=30, is_unique_property=False)

        assert attrs.present_fields() == ("days_on_market", "is_unique_property")
        assert not attrs.is_empty()

    def test_empty_record(self) -> None:
        """Test a record with no values."""
        assert PropertyAttributes().is_empty()

    def test_frozen(self) -> None:
        """Test records are immutable."""
        attrs = PropertyAttributes()
        with pytest.raises(AttributeError):
            attrs.days_on_market = 5  # type: ignore[misc]
