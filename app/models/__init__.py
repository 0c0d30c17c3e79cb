"""Data models package."""
from app.models.venue import Venue
from app.models.query import QueryPoint

__all__ = [
    "Venue",
    "QueryPoint",
]
