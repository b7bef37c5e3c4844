"""Synthetic data generators."""

from propscore.generators.base import BaseGenerator
from propscore.generators.property import PropertyAttributesGenerator

__all__ = ["BaseGenerator", "PropertyAttributesGenerator"]
