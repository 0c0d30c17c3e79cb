"""Catalog refresher: sole writer of the in-memory venue catalog."""
import logging
import time

from app.api import CsvSourceClient
from app.dao import CatalogStore
from app.errors import CatalogError, StartupError
from app.metrics import (
    CATALOG_REFRESH_RUNS_TOTAL,
    CATALOG_REFRESH_DURATION_SECONDS,
    CATALOG_LAST_REFRESH_TIMESTAMP,
)

logger = logging.getLogger(__name__)


class CatalogRefresherService:
    """Loads the catalog from the CSV source into the store.

    Fetching and parsing happen outside the store's lock; only the final swap
    is locked. A failed refresh keeps the previous catalog.
    """

    def __init__(self, catalog_store: CatalogStore, source_client: CsvSourceClient):
        """Initialize refresher service.

        Args:
            catalog_store: Store receiving the new catalog
            source_client: Client for the catalog CSV
        """
        self.catalog_store = catalog_store
        self.source_client = source_client

    async def load_initial_catalog(self) -> None:
        """Load the first catalog.

        Raises:
            StartupError: If the source cannot be fetched or parsed
        """
        logger.info("[CatalogRefresherService] Loading initial catalog")
        try:
            venues = await self.source_client.fetch_catalog()
        except CatalogError as e:
            CATALOG_REFRESH_RUNS_TOTAL.labels(status="error").inc()
            raise StartupError(f"initial catalog load failed: {e}") from e

        if venues is None:
            # Only possible if the client already holds an ETag
            logger.info("[CatalogRefresherService] Initial catalog already current")
            return

        self.catalog_store.replace(venues)
        CATALOG_REFRESH_RUNS_TOTAL.labels(status="replaced").inc()
        CATALOG_LAST_REFRESH_TIMESTAMP.set_to_current_time()

    async def refresh(self) -> bool:
        """Fetch the catalog and replace the store's snapshot on success.

        Fetch and parse errors are logged and swallowed here: queries keep
        being served from the previous snapshot.

        Returns:
            True if the catalog was replaced, False if unchanged or failed
        """
        start_time = time.perf_counter()
        try:
            venues = await self.source_client.fetch_catalog()
        except CatalogError as e:
            CATALOG_REFRESH_RUNS_TOTAL.labels(status="error").inc()
            logger.error(
                f"[CatalogRefresherService] Refresh failed, keeping previous catalog "
                f"({self.catalog_store.size()} venues): {e}"
            )
            return False
        finally:
            duration = time.perf_counter() - start_time
            CATALOG_REFRESH_DURATION_SECONDS.observe(duration)
            logger.info(f"[CatalogRefresherService] Refresh took {duration:.3f}s")

        CATALOG_LAST_REFRESH_TIMESTAMP.set_to_current_time()
        if venues is None:
            CATALOG_REFRESH_RUNS_TOTAL.labels(status="unchanged").inc()
            logger.info("[CatalogRefresherService] Catalog unchanged")
            return False

        self.catalog_store.replace(venues)
        CATALOG_REFRESH_RUNS_TOTAL.labels(status="replaced").inc()
        logger.info(f"[CatalogRefresherService] Catalog updated with {len(venues)} venues")
        return True
