"""Data sources supplying attribute records to the analysis service.

A data source stands in for the acquisition pipeline: given an address or
listing URL it returns a (possibly sparse) ``PropertyAttributes`` record,
or raises ``DataSourceError``. Sources are injected into the service.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Mapping, Protocol

from propscore.exceptions import DataSourceError
from propscore.models.attributes import PropertyAttributes
from propscore.models.enums import SourceType

logger = logging.getLogger(__name__)

_NON_SLUG = re.compile(r"[^a-z0-9]+")


class PropertyDataSource(Protocol):
    """Anything that can look up attributes for a location."""

    def fetch(self, location: str, source_type: SourceType = SourceType.ADDRESS) -> PropertyAttributes:
        ...


def slugify(location: str) -> str:
    """Turn an address or URL into a filesystem-safe key."""
    return _NON_SLUG.sub("-", location.strip().lower()).strip("-")


class StaticDataSource:
    """Serve records from an in-memory mapping keyed by location."""

    def __init__(self, records: Mapping[str, PropertyAttributes | Mapping[str, Any]] | None = None) -> None:
        self._records: dict[str, PropertyAttributes] = {}
        for location, record in (records or {}).items():
            self.add(location, record)

    def add(self, location: str, record: PropertyAttributes | Mapping[str, Any]) -> None:
        if not isinstance(record, PropertyAttributes):
            record = PropertyAttributes.from_dict(record)
        self._records[slugify(location)] = record

    def fetch(self, location: str, source_type: SourceType = SourceType.ADDRESS) -> PropertyAttributes:
        try:
            return self._records[slugify(location)]
        except KeyError:
            raise DataSourceError(f"No property data found for {location}") from None

    def __len__(self) -> int:
        return len(self._records)


class JsonFileDataSource:
    """Read one JSON object per property from ``<directory>/<slug>.json``.

    Parameters
    ----------
    directory : str | Path
        Directory holding attribute files.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, location: str) -> Path:
        return self.directory / f"{slugify(location)}.json"

    def fetch(self, location: str, source_type: SourceType = SourceType.ADDRESS) -> PropertyAttributes:
        path = self.path_for(location)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise DataSourceError(f"No property data file for {location}: {path}") from None
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"Malformed property data in {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise DataSourceError(f"Expected a JSON object in {path}, got {type(data).__name__}")

        logger.debug("Loaded %d attribute keys for %s from %s", len(data), source_type.value, path)
        return PropertyAttributes.from_dict(data)
