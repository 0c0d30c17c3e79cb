"""Unit tests for the catalog refresher service."""
import pytest
from unittest.mock import Mock, AsyncMock

from app.dao import CatalogStore
from app.errors import FetchError, ParseError, StartupError
from app.models import Venue
from app.services import CatalogRefresherService


def make_venue(venue_id: int) -> Venue:
    return Venue(
        id=venue_id,
        latitude=0.0,
        longitude=0.0,
        availability_radius=5,
        open_hour="09:00:00",
        close_hour="18:00:00",
        rating=4.0,
    )


@pytest.fixture
def catalog_store():
    """Store pre-loaded with the previous catalog."""
    return CatalogStore([make_venue(1), make_venue(2)])


@pytest.fixture
def mock_source_client():
    """Create mock CSV source client."""
    mock = Mock()
    mock.fetch_catalog = AsyncMock()
    return mock


@pytest.fixture
def refresher_service(catalog_store, mock_source_client):
    """Create CatalogRefresherService with mocked source."""
    return CatalogRefresherService(catalog_store, mock_source_client)


class TestCatalogRefresherService:
    """Test refresh outcomes and stale-but-available behavior."""

    @pytest.mark.asyncio
    async def test_refresh_replaces_catalog(self, refresher_service, catalog_store, mock_source_client):
        mock_source_client.fetch_catalog.return_value = [make_venue(10), make_venue(11), make_venue(12)]

        replaced = await refresher_service.refresh()

        assert replaced is True
        assert [v.id for v in catalog_store.snapshot()] == [10, 11, 12]

    @pytest.mark.asyncio
    async def test_refresh_not_modified_keeps_catalog(self, refresher_service, catalog_store, mock_source_client):
        mock_source_client.fetch_catalog.return_value = None
        before = catalog_store.snapshot()

        replaced = await refresher_service.refresh()

        assert replaced is False
        assert catalog_store.snapshot() is before

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [FetchError("unexpected response from server: 500", status_code=500), ParseError("bad row", 7)],
    )
    async def test_refresh_failure_keeps_previous_catalog(
        self, refresher_service, catalog_store, mock_source_client, error
    ):
        mock_source_client.fetch_catalog.side_effect = error
        before = catalog_store.snapshot()

        replaced = await refresher_service.refresh()

        assert replaced is False
        assert catalog_store.snapshot() is before
        assert [v.id for v in catalog_store.snapshot()] == [1, 2]

    @pytest.mark.asyncio
    async def test_refresh_recovers_after_failure(self, refresher_service, catalog_store, mock_source_client):
        mock_source_client.fetch_catalog.side_effect = [
            FetchError("connection refused"),
            [make_venue(99)],
        ]

        assert await refresher_service.refresh() is False
        assert await refresher_service.refresh() is True
        assert [v.id for v in catalog_store.snapshot()] == [99]

    @pytest.mark.asyncio
    async def test_refresh_propagates_unexpected_errors(self, refresher_service, mock_source_client):
        """Only catalog errors are absorbed at the refresh boundary."""
        mock_source_client.fetch_catalog.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await refresher_service.refresh()

    @pytest.mark.asyncio
    async def test_load_initial_catalog(self, mock_source_client):
        store = CatalogStore()
        service = CatalogRefresherService(store, mock_source_client)
        mock_source_client.fetch_catalog.return_value = [make_venue(5)]

        await service.load_initial_catalog()

        assert [v.id for v in store.snapshot()] == [5]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [FetchError("down"), ParseError("bad row", 2)])
    async def test_load_initial_catalog_failure_is_startup_error(self, mock_source_client, error):
        store = CatalogStore()
        service = CatalogRefresherService(store, mock_source_client)
        mock_source_client.fetch_catalog.side_effect = error

        with pytest.raises(StartupError):
            await service.load_initial_catalog()

        assert store.snapshot() == ()
