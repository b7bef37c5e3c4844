"""Attribute data sources."""

from propscore.sources.base import (
    JsonFileDataSource,
    PropertyDataSource,
    StaticDataSource,
    slugify,
)

__all__ = ["JsonFileDataSource", "PropertyDataSource", "StaticDataSource", "slugify"]
