"""Property attribute record consumed by the scoring engine."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Any, Mapping

from propscore.models.enums import (
    Category,
    DemandLevel,
    LandOwnership,
    LocationCategory,
    MaintenanceLevel,
    PropertyType,
    RiskRating,
    SchoolZoneQuality,
    Zoning,
)

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "yes", "y", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "n", "0"})
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_MAX_INT_EXPONENT = 18


@dataclass(frozen=True)
class PropertyAttributes:
    """Structured, possibly sparse, description of a property.

    Every field is optional: ``None`` means the acquisition pipeline could
    not determine the value. Categorical fields hold closed enums, counts
    and distances are ``int`` and rates, ratios and currency amounts are
    ``Decimal``.
    """

    # Legal/structural identity
    property_type: PropertyType | None = None
    land_ownership: LandOwnership | None = None
    has_clear_title: bool | None = None
    has_encumbrances: bool | None = None
    zoning: Zoning | None = None

    # Location
    location_category: LocationCategory | None = None
    distance_to_cbd_km: int | None = None
    school_zone_quality: SchoolZoneQuality | None = None
    distance_to_public_transport_meters: int | None = None
    local_demand: DemandLevel | None = None

    # Yield and growth
    rental_yield_percentage: Decimal | None = None
    capital_growth_percentage: Decimal | None = None  # 5-year average
    vacancy_rate_percentage: Decimal | None = None
    cash_flow_coverage_ratio: Decimal | None = None  # rental income / loan repayment

    # Physical condition
    has_structural_issues: bool | None = None
    property_age_years: int | None = None
    has_major_defects: bool | None = None
    maintenance_level: MaintenanceLevel | None = None
    meets_current_building_codes: bool | None = None
    has_required_certificates: bool | None = None

    # Tenancy
    has_long_term_tenants: bool | None = None
    has_reliable_payment_history: bool | None = None
    lease_remaining_months: int | None = None
    has_consistent_rental_history: bool | None = None

    # Financing
    meets_serviceability_requirements: bool | None = None
    loan_to_value_ratio: Decimal | None = None  # percent, e.g. 75 for 75%
    annual_insurance_cost: Decimal | None = None
    suitable_for_cross_collateral: bool | None = None
    equity_available: Decimal | None = None
    eligible_for_refinance: bool | None = None

    # Market behaviour
    has_stable_sale_history: bool | None = None
    years_since_last_sale: int | None = None
    days_on_market: int | None = None
    has_strong_comparables: bool | None = None
    is_unique_property: bool | None = None

    # Risk and portfolio fit
    accepted_by_major_lenders: bool | None = None
    risk_rating: RiskRating | None = None
    has_development_risk: bool | None = None
    fits_portfolio_diversity: bool | None = None
    viable_for_long_term_hold: bool | None = None

    def __post_init__(self) -> None:
        # Coerce raw values so direct construction and from_dict agree
        for name in self.field_names():
            raw = getattr(self, name)
            if raw is not None:
                object.__setattr__(self, name, _COERCERS[name](name, raw))

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return attribute field names in declaration order."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PropertyAttributes:
        """Build a record from a wire JSON object.

        Keys may be camelCase (``distanceToCbdKm``) or snake_case. Unknown
        keys are ignored. Values are coerced to each field's type; values
        that cannot be coerced are logged and treated as unknown.

        Parameters
        ----------
        data : Mapping[str, Any]
            Raw attribute mapping, e.g. a decoded JSON object.

        Returns
        -------
        PropertyAttributes
            Typed record.
        """
        known = set(cls.field_names())
        values = {}
        for key, raw in data.items():
            name = _to_snake(key)
            if name in known:
                values[name] = raw
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire format."""
        result: dict[str, Any] = {}
        for name in self.field_names():
            value = getattr(self, name)
            if isinstance(value, Category):
                value = value.value
            elif isinstance(value, Decimal):
                value = str(value)
            result[_to_camel(name)] = value
        return result

    def present_fields(self) -> tuple[str, ...]:
        """Return names of fields that carry a value."""
        return tuple(name for name in self.field_names() if getattr(self, name) is not None)

    def is_empty(self) -> bool:
        return not self.present_fields()


def _to_snake(key: str) -> str:
    if "_" in key or key.islower():
        return key
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _coerce_bool(name: str, raw: Any) -> bool | None:
    if raw is None or isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str):
        text = raw.strip().lower()
        if not text:
            return None
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    logger.warning("Ignoring non-boolean value for %s: %r", name, raw)
    return None


def _coerce_decimal(name: str, raw: Any) -> Decimal | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    if isinstance(raw, bool):
        logger.warning("Ignoring boolean value for numeric field %s", name)
        return None
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        logger.warning("Ignoring non-numeric value for %s: %r", name, raw)
        return None
    if not value.is_finite():
        logger.warning("Ignoring non-finite value for %s: %r", name, raw)
        return None
    return value


def _coerce_int(name: str, raw: Any) -> int | None:
    # Integer fields are counts, ages and distances: never negative
    if isinstance(raw, int) and not isinstance(raw, bool):
        number = raw
    else:
        value = _coerce_decimal(name, raw)
        if value is None:
            return None
        # Checked before int() so "1e400000" is not expanded into a huge integer
        if value.adjusted() > _MAX_INT_EXPONENT:
            logger.warning("Ignoring out-of-range value for %s: %r", name, raw)
            return None
        number = int(value.to_integral_value(rounding=ROUND_HALF_EVEN))
    if number < 0:
        logger.warning("Ignoring negative value for %s: %r", name, raw)
        return None
    return number


def _category_coercer(enum_cls: type[Category]):
    def coerce(name: str, raw: Any) -> Category | None:
        member = enum_cls.parse(raw)
        if member is not None and member.name == "UNKNOWN":
            logger.debug("Unrecognized %s value %r", name, raw)
        return member

    return coerce


def _build_coercers() -> dict[str, Any]:
    coercers: dict[str, Any] = {}
    for f in fields(PropertyAttributes):
        annotation = str(f.type)
        if annotation.startswith("bool"):
            coercers[f.name] = _coerce_bool
        elif annotation.startswith("int"):
            coercers[f.name] = _coerce_int
        elif annotation.startswith("Decimal"):
            coercers[f.name] = _coerce_decimal
        else:
            enum_name = annotation.split(" |")[0]
            coercers[f.name] = _category_coercer(_CATEGORIES[enum_name])
    return coercers


_CATEGORIES: dict[str, type[Category]] = {
    cls.__name__: cls
    for cls in (
        PropertyType,
        LandOwnership,
        Zoning,
        LocationCategory,
        SchoolZoneQuality,
        DemandLevel,
        MaintenanceLevel,
        RiskRating,
    )
}

_COERCERS = _build_coercers()
