"""Concurrent brute-force search over a catalog snapshot."""
import logging
import time
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from typing import Optional, Sequence

from app.geo import is_open_at, is_within_radius
from app.metrics import VENUE_SEARCH_DURATION_SECONDS, VENUE_SEARCH_MATCHES
from app.models import QueryPoint, Venue

logger = logging.getLogger(__name__)

DEFAULT_SHARD_COUNT = 10


def partition(length: int, shard_count: int) -> list[tuple[int, int]]:
    """Split ``range(length)`` into ``shard_count`` contiguous slices.

    Boundaries are ``(i * length) // shard_count``, so the last boundary is
    always ``length`` and shard sizes differ by at most one. When ``length`` is
    smaller than ``shard_count`` some slices are empty.

    Args:
        length: Number of items to split
        shard_count: Number of slices

    Returns:
        List of (start, end) pairs, one per shard
    """
    if shard_count < 1:
        raise ValueError(f"shard_count must be >= 1, got {shard_count}")
    return [
        ((i * length) // shard_count, ((i + 1) * length) // shard_count)
        for i in range(shard_count)
    ]


def _filter_shard(query: QueryPoint, shard: Sequence[Venue]) -> list[Venue]:
    """Venues of one shard that are in range and open at the query instant."""
    return [
        venue
        for venue in shard
        if is_within_radius(query, venue) and is_open_at(query.instant, venue)
    ]


class VenueSearchService:
    """Fan-out/fan-in filter of a catalog snapshot.

    Each query splits the snapshot into ``shard_count`` contiguous shards and
    evaluates them on a thread pool. The query instant is part of the
    ``QueryPoint`` so every shard judges opening hours against the same time.
    """

    def __init__(self, shard_count: int = DEFAULT_SHARD_COUNT, executor: Optional[Executor] = None):
        """Initialize search service.

        Args:
            shard_count: Number of shards per query
            executor: Executor to run shards on. If None, a thread pool with
                one worker per shard is created and owned by this service.
        """
        if shard_count < 1:
            raise ValueError(f"shard_count must be >= 1, got {shard_count}")
        self.shard_count = shard_count
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=shard_count, thread_name_prefix="venue-search"
        )

    def search(self, query: QueryPoint, snapshot: Sequence[Venue]) -> list[Venue]:
        """Return the venues of ``snapshot`` reachable from and open at ``query``.

        Args:
            query: Location and instant of the request
            snapshot: Catalog snapshot, not modified

        Returns:
            Matching venues in unspecified order (empty list when none match)
        """
        if not snapshot:
            return []

        start_time = time.perf_counter()

        futures = [
            self.executor.submit(_filter_shard, query, snapshot[start:end])
            for start, end in partition(len(snapshot), self.shard_count)
            if end > start
        ]
        wait(futures)

        matches: list[Venue] = []
        for future in futures:
            matches.extend(future.result())

        duration = time.perf_counter() - start_time
        VENUE_SEARCH_DURATION_SECONDS.observe(duration)
        VENUE_SEARCH_MATCHES.observe(len(matches))
        logger.debug(
            f"[VenueSearchService] Scanned {len(snapshot)} venues in {len(futures)} shards, "
            f"{len(matches)} matches in {duration * 1000:.2f}ms"
        )
        return matches

    def shutdown(self) -> None:
        """Stop the thread pool if this service created it."""
        if self._owns_executor:
            self.executor.shutdown(wait=True)
