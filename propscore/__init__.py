"""propscore - weighted rubric scoring for investment properties."""

from propscore.models import AnalysisResult, PropertyAttributes
from propscore.scoring import ScoringEngine, analyse_property

__version__ = "0.1.0"

__all__ = ["AnalysisResult", "PropertyAttributes", "ScoringEngine", "analyse_property", "__version__"]
