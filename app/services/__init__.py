"""Services package."""
from app.services.venue_search_service import VenueSearchService
from app.services.catalog_refresher_service import CatalogRefresherService

__all__ = ["VenueSearchService", "CatalogRefresherService"]
