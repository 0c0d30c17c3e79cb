"""Routers package."""
from app.routers.venue_router import (
    router as venue_router,
    set_venue_handler,
    get_handler,
    query_validation_error_handler,
)

__all__ = [
    "venue_router",
    "set_venue_handler",
    "get_handler",
    "query_validation_error_handler",
]
