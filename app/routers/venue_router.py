"""FastAPI routes for venue endpoints."""
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response

from app.errors import QueryValidationError
from app.models import Venue

logger = logging.getLogger(__name__)

# Create router at module level
router = APIRouter()

# Global handler reference - set during startup
_venue_handler = None


def set_venue_handler(handler):
    """Set the venue handler instance (called during startup)."""
    global _venue_handler
    _venue_handler = handler
    logger.info("[VenueRouter] Handler injected successfully")


def get_handler():
    """Get the venue handler, raising error if not initialized."""
    if _venue_handler is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return _venue_handler


async def query_validation_error_handler(request: Request, exc: QueryValidationError) -> Response:
    """Bad coordinates answer 400 with an empty body."""
    logger.info(f"[VenueRouter] Rejected {request.url.path}?{request.url.query}: {exc}")
    return Response(status_code=400)


@router.get(
    "/",
    response_model=list[Venue],
    summary="Get open venues nearby",
    description="Venues whose availability radius covers the point and that are open right now",
)
def get_open_venues_nearby(
    latitude: Optional[str] = Query(None, description="Latitude in degrees"),
    longitude: Optional[str] = Query(None, description="Longitude in degrees"),
) -> list[Venue]:
    """Get venues that are reachable from the given point and currently open."""
    handler = get_handler()
    return handler.get_open_venues_nearby(latitude, longitude)


@router.get(
    "/ping",
    summary="Health check",
    description="Health check endpoint",
)
def ping() -> dict[str, str]:
    """Health check endpoint."""
    handler = get_handler()
    return handler.ping()
