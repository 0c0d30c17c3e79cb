"""Query point for a nearby-and-open venue search."""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class QueryPoint:
    """Location and instant of a single search request."""
    latitude: float
    longitude: float
    instant: datetime
