"""Envelope types shared across propscore."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Event:
    """Standard event envelope published to sinks."""

    event_id: str
    event_type: str  # entity.action (e.g., analysis.completed)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Analysis ID affected
    data: dict[str, Any]
    metadata: dict[str, Any] = field(default_factory=dict)
