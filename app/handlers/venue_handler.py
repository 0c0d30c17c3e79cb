"""Venue handler for HTTP requests."""
import logging
import math
from datetime import datetime
from typing import Callable, Optional

import pytz

from app.dao import CatalogStore
from app.errors import QueryValidationError
from app.models import QueryPoint, Venue
from app.services import VenueSearchService

logger = logging.getLogger(__name__)


def parse_coordinate(raw: Optional[str], name: str, limit: float) -> float:
    """Parse a latitude/longitude query parameter.

    Args:
        raw: Raw query string value (None when absent)
        name: Parameter name, for error messages
        limit: Maximum absolute value allowed

    Returns:
        Coordinate in degrees

    Raises:
        QueryValidationError: If missing, not a finite number or out of range
    """
    if raw is None or raw.strip() == "":
        raise QueryValidationError(f"missing {name}")
    try:
        value = float(raw)
    except ValueError:
        raise QueryValidationError(f"{name} is not a number: {raw!r}")
    if not math.isfinite(value) or abs(value) > limit:
        raise QueryValidationError(f"{name} out of range: {raw!r}")
    return value


def wall_clock(timezone_name: str) -> Callable[[], datetime]:
    """Return a clock giving the current time in the named timezone."""
    try:
        tz = pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        logger.error(
            f"[VenueHandler] Unknown timezone {timezone_name!r}. Falling back to UTC."
        )
        tz = pytz.UTC
    return lambda: datetime.now(tz)


class VenueHandler:
    """Handler for venue-related HTTP requests."""

    def __init__(
        self,
        catalog_store: CatalogStore,
        search_service: VenueSearchService,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize venue handler.

        Args:
            catalog_store: Store holding the current catalog
            search_service: Concurrent filter over catalog snapshots
            clock: Source of the query instant (defaults to UTC wall clock)
        """
        self.catalog_store = catalog_store
        self.search_service = search_service
        self.clock = clock or wall_clock("UTC")

    def get_open_venues_nearby(
        self, latitude: Optional[str], longitude: Optional[str]
    ) -> list[Venue]:
        """Venues whose availability radius covers the point and that are open now.

        Args:
            latitude: Raw latitude query parameter
            longitude: Raw longitude query parameter

        Returns:
            Matching venues, in no particular order

        Raises:
            QueryValidationError: If a coordinate is missing or malformed
        """
        lat = parse_coordinate(latitude, "latitude", 90.0)
        lon = parse_coordinate(longitude, "longitude", 180.0)

        query = QueryPoint(latitude=lat, longitude=lon, instant=self.clock())
        snapshot = self.catalog_store.snapshot()

        results = self.search_service.search(query, snapshot)
        logger.info(
            f"[VenueHandler] lat={lat:.6f}, lon={lon:.6f}, "
            f"at={query.instant.strftime('%H:%M:%S')}: "
            f"{len(results)} of {len(snapshot)} venues match"
        )
        return results

    def ping(self) -> dict[str, str]:
        """Health check endpoint.

        Returns:
            {"status": "pong"}
        """
        logger.debug("[VenueHandler] Ping")
        return {"status": "pong"}

    def health(self) -> dict:
        """Catalog status for the /health endpoint."""
        last = self.catalog_store.last_replaced_at
        return {
            "status": "healthy",
            "venues": self.catalog_store.size(),
            "last_refresh": (
                datetime.fromtimestamp(last, pytz.UTC).isoformat() if last else None
            ),
        }
