"""In-memory venue catalog guarded by a lock."""
import logging
import threading
import time
from typing import Iterable, Optional

from app.metrics import CATALOG_VENUES_TOTAL
from app.models import Venue

logger = logging.getLogger(__name__)


class CatalogStore:
    """Holds the current catalog snapshot.

    The catalog is an immutable tuple. ``replace`` builds the new tuple before
    taking the lock and only swaps the reference while holding it, so a
    snapshot handed to a reader is never modified afterwards and readers never
    observe a mix of old and new venues.
    """

    def __init__(self, venues: Iterable[Venue] = ()):
        self._lock = threading.Lock()
        self._venues: tuple[Venue, ...] = tuple(venues)
        self._last_replaced_at: Optional[float] = None

    def replace(self, venues: Iterable[Venue]) -> None:
        """Atomically install a new catalog.

        Args:
            venues: Venues of the new catalog
        """
        new_catalog = tuple(venues)
        with self._lock:
            self._venues = new_catalog
            self._last_replaced_at = time.time()

        CATALOG_VENUES_TOTAL.set(len(new_catalog))
        logger.info(f"[CatalogStore] Catalog replaced with {len(new_catalog)} venues")

    def snapshot(self) -> tuple[Venue, ...]:
        """Return the current catalog. Callers must treat it as read-only."""
        with self._lock:
            return self._venues

    def size(self) -> int:
        return len(self.snapshot())

    @property
    def last_replaced_at(self) -> Optional[float]:
        """Unix timestamp of the last replace, or None if never replaced."""
        with self._lock:
            return self._last_replaced_at
