"""Enumeration types for property attributes and analysis records."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

_SEPARATORS = re.compile(r"[\s_\-]+")


def _normalize(value: str) -> str:
    return _SEPARATORS.sub(" ", value.strip().lower())


class Category(str, Enum):
    """Closed categorical value parsed case-insensitively at the boundary.

    Every subclass defines an ``UNKNOWN`` member that unrecognized text
    resolves to, so a malformed category is scored at the criterion's
    default rather than rejected.
    """

    @classmethod
    def parse(cls, value: Any) -> Category | None:
        """Parse free text into a member.

        Returns ``None`` for ``None`` or blank text, ``UNKNOWN`` for text
        that matches neither a member value, a member name nor an alias.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        text = _normalize(str(value))
        if not text:
            return None
        for member in cls:
            if text in (_normalize(member.value), _normalize(member.name)):
                return member
        alias = _ALIASES.get(cls.__name__, {}).get(text)
        if alias is not None:
            return cls[alias]
        return cls["UNKNOWN"]


class PropertyType(Category):
    HOUSE = "House"
    UNIT = "Unit"
    APARTMENT = "Apartment"
    TOWNHOUSE = "Townhouse"
    DUPLEX = "Duplex"
    VILLA = "Villa"
    LAND = "Land"
    UNKNOWN = "Unknown"


class LandOwnership(Category):
    FREEHOLD = "Freehold"
    STRATA = "Strata"
    LEASEHOLD = "Leasehold"
    UNKNOWN = "Unknown"


class Zoning(Category):
    RESIDENTIAL = "Residential"
    MIXED = "Mixed"
    COMMERCIAL = "Commercial"
    INDUSTRIAL = "Industrial"
    UNKNOWN = "Unknown"


class LocationCategory(Category):
    METRO = "Metro"
    REGIONAL = "Regional"
    RURAL = "Rural"
    UNKNOWN = "Unknown"


class SchoolZoneQuality(Category):
    TOP_TIER = "Top-tier"
    GOOD = "Good"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below average"
    UNKNOWN = "Unknown"


class DemandLevel(Category):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    UNKNOWN = "Unknown"


class MaintenanceLevel(Category):
    MINIMAL = "Minimal"
    MODERATE = "Moderate"
    EXTENSIVE = "Extensive"
    UNKNOWN = "Unknown"


class RiskRating(Category):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    UNKNOWN = "Unknown"


# Normalized alias text -> member name
_ALIASES: dict[str, dict[str, str]] = {
    "PropertyType": {"flat": "APARTMENT", "town house": "TOWNHOUSE", "vacant land": "LAND"},
    "Zoning": {"mixed use": "MIXED", "mixeduse": "MIXED"},
    "LocationCategory": {"metropolitan": "METRO", "city": "METRO", "country": "RURAL"},
    "SchoolZoneQuality": {"excellent": "TOP_TIER", "toptier": "TOP_TIER", "poor": "BELOW_AVERAGE"},
    "DemandLevel": {"moderate": "MEDIUM"},
    "MaintenanceLevel": {"low": "MINIMAL", "high": "EXTENSIVE"},
    "RiskRating": {"moderate": "MEDIUM"},
}


class AggregationMode(str, Enum):
    """How missing attributes affect the aggregate score."""

    STRICT = "strict"  # missing criteria contribute 0 against a fixed total of 1.0
    RENORMALIZED = "renormalized"  # rescale by the weight actually covered


class Tier(str, Enum):
    EXCELLENT = "Excellent"
    VERY_GOOD = "Very Good"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    BELOW_STANDARD = "Below Standard"


class AnalysisStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    FAILED = "Failed"


class SourceType(str, Enum):
    ADDRESS = "Address"
    URL = "Url"
