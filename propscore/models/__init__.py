"""Domain models for property scoring."""

from propscore.models.analysis import AnalysisRecord
from propscore.models.attributes import PropertyAttributes
from propscore.models.base import Event
from propscore.models.enums import (
    AggregationMode,
    AnalysisStatus,
    Category,
    DemandLevel,
    LandOwnership,
    LocationCategory,
    MaintenanceLevel,
    PropertyType,
    RiskRating,
    SchoolZoneQuality,
    SourceType,
    Tier,
    Zoning,
)
from propscore.models.result import AnalysisResult, CriterionScore

__all__ = [
    "AggregationMode",
    "AnalysisRecord",
    "AnalysisResult",
    "AnalysisStatus",
    "Category",
    "CriterionScore",
    "DemandLevel",
    "Event",
    "LandOwnership",
    "LocationCategory",
    "MaintenanceLevel",
    "PropertyAttributes",
    "PropertyType",
    "RiskRating",
    "SchoolZoneQuality",
    "SourceType",
    "Tier",
    "Zoning",
]
