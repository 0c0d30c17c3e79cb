"""HTTP client for the venue catalog CSV with conditional fetch support."""
import logging
import time
from typing import Optional

import httpx

from app.errors import FetchError, ParseError
from app.metrics import (
    CATALOG_SOURCE_FETCHES_TOTAL,
    CATALOG_SOURCE_FETCH_DURATION_SECONDS,
)
from app.models import Venue
from app.api.catalog_csv import parse_venues_csv

logger = logging.getLogger(__name__)


class CsvSourceClient:
    """Async HTTP client that downloads and parses the catalog CSV.

    Remembers the ETag of the last accepted document and sends it back as
    ``If-None-Match`` so an unchanged file is not downloaded again.
    """

    def __init__(self, url: str, timeout: float = 10.0):
        """Initialize CSV source client.

        Args:
            url: Location of the catalog CSV
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self.last_etag: Optional[str] = None

        self.client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def close(self):
        """Close the HTTP client and clean up resources."""
        await self.client.aclose()

    async def fetch_catalog(self) -> Optional[list[Venue]]:
        """Download and parse the catalog.

        Returns:
            Parsed venues, or None when the server answered 304 Not Modified

        Raises:
            FetchError: On transport errors or a status other than 200/304
            ParseError: If the document contains a malformed row
        """
        headers = {}
        if self.last_etag:
            headers["If-None-Match"] = self.last_etag

        logger.debug(f"[CsvSourceClient] GET {self.url} etag={self.last_etag}")

        start_time = time.perf_counter()
        try:
            response = await self.client.get(self.url, headers=headers)
        except httpx.TimeoutException as e:
            CATALOG_SOURCE_FETCHES_TOTAL.labels(status="connection_error").inc()
            logger.error(f"[CsvSourceClient] Timeout fetching {self.url}: {e}")
            raise FetchError(f"timeout fetching {self.url}: {e}") from e
        except httpx.RequestError as e:
            CATALOG_SOURCE_FETCHES_TOTAL.labels(status="connection_error").inc()
            logger.error(f"[CsvSourceClient] Request error fetching {self.url}: {e}")
            raise FetchError(f"request error fetching {self.url}: {e}") from e
        finally:
            CATALOG_SOURCE_FETCH_DURATION_SECONDS.observe(time.perf_counter() - start_time)

        if response.status_code == httpx.codes.NOT_MODIFIED:
            CATALOG_SOURCE_FETCHES_TOTAL.labels(status="not_modified").inc()
            logger.info("[CsvSourceClient] Catalog not modified since last fetch")
            return None

        if response.status_code != httpx.codes.OK:
            CATALOG_SOURCE_FETCHES_TOTAL.labels(status="http_error").inc()
            logger.error(
                f"[CsvSourceClient] Unexpected status {response.status_code} from {self.url}"
            )
            raise FetchError(
                f"unexpected response from server: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            venues = parse_venues_csv(response.text)
        except ParseError:
            CATALOG_SOURCE_FETCHES_TOTAL.labels(status="parse_error").inc()
            raise

        # Only remember the ETag of a document that was accepted
        self.last_etag = response.headers.get("ETag")
        CATALOG_SOURCE_FETCHES_TOTAL.labels(status="updated").inc()
        logger.info(f"[CsvSourceClient] Fetched {len(venues)} venues (etag={self.last_etag})")
        return venues
