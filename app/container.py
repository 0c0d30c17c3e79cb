"""Dependency injection container for application components."""
import logging

from app.config import Settings
from app.api import CsvSourceClient
from app.dao import CatalogStore
from app.services import VenueSearchService, CatalogRefresherService
from app.handlers import VenueHandler
from app.handlers.venue_handler import wall_clock

logger = logging.getLogger(__name__)


class Container:
    """Dependency injection container.

    Builds and wires the catalog store, the CSV source client, the search
    service, the refresher and the HTTP handler.
    """

    def __init__(self, settings: Settings):
        """Initialize container with all dependencies.

        Args:
            settings: Application settings
        """
        logger.info("[Container] Initializing container")
        self.settings = settings

        self.catalog_store = CatalogStore()

        logger.info(f"[Container] Catalog source: {settings.csv_url}")
        self.csv_source_client = CsvSourceClient(
            url=settings.csv_url,
            timeout=settings.source_timeout_seconds,
        )

        self.venue_search_service = VenueSearchService(
            shard_count=settings.search_shard_count,
        )
        logger.info(
            f"[Container] Search service initialized with {settings.search_shard_count} shards"
        )

        self.catalog_refresher_service = CatalogRefresherService(
            self.catalog_store,
            self.csv_source_client,
        )

        self.venue_handler = VenueHandler(
            self.catalog_store,
            self.venue_search_service,
            clock=wall_clock(settings.venue_timezone),
        )

        logger.info("[Container] Container initialized successfully")

    async def shutdown(self):
        """Release HTTP connections and worker threads."""
        logger.info("[Container] Shutting down")
        await self.csv_source_client.close()
        self.venue_search_service.shutdown()
