"""End-to-end tests for the HTTP endpoints (no lifespan, no network)."""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.dao import CatalogStore
from app.handlers import VenueHandler
from app.models import Venue
from app.routers import set_venue_handler
from app.services import VenueSearchService
from main import app

CATALOG = [
    Venue(
        id=1,
        latitude=0.0,
        longitude=0.0,
        availability_radius=5,
        open_hour="09:00:00",
        close_hour="18:00:00",
        rating=4.5,
    )
]


@pytest.fixture
def clock_time():
    """Mutable holder for the instant the handler sees."""
    return {"now": datetime(2024, 5, 1, 12, 0, 0)}


@pytest.fixture
def client(clock_time):
    store = CatalogStore(CATALOG)
    search_service = VenueSearchService(shard_count=10)
    set_venue_handler(VenueHandler(store, search_service, clock=lambda: clock_time["now"]))
    yield TestClient(app)
    set_venue_handler(None)
    search_service.shutdown()


class TestVenuesEndpoint:
    def test_open_venue_in_range(self, client):
        response = client.get("/", params={"latitude": "0.01", "longitude": "0"})

        assert response.status_code == 200
        assert response.json() == [
            {
                "id": 1,
                "latitude": 0.0,
                "longitude": 0.0,
                "availability_radius": 5.0,
                "open_hour": "09:00:00",
                "close_hour": "18:00:00",
                "rating": 4.5,
            }
        ]

    def test_closed_venue_gives_empty_list(self, client, clock_time):
        clock_time["now"] = datetime(2024, 5, 1, 8, 0, 0)

        response = client.get("/", params={"latitude": "0.01", "longitude": "0"})

        assert response.status_code == 200
        assert response.json() == []

    def test_out_of_range_gives_empty_list(self, client):
        response = client.get("/", params={"latitude": "1", "longitude": "1"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        "params",
        [
            {"latitude": "0.01"},
            {"longitude": "0"},
            {},
            {"latitude": "abc", "longitude": "0"},
            {"latitude": "0", "longitude": ""},
        ],
    )
    def test_bad_coordinates_give_400_with_empty_body(self, client, params):
        response = client.get("/", params=params)

        assert response.status_code == 400
        assert response.content == b""

    def test_ping(self, client):
        response = client.get("/ping")
        assert response.status_code == 200
        assert response.json() == {"status": "pong"}

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["venues"] == 1

    def test_metrics(self, client):
        client.get("/", params={"latitude": "0", "longitude": "0"})
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "venue_search_duration_seconds" in response.text


def test_not_ready_without_handler():
    set_venue_handler(None)
    response = TestClient(app).get("/", params={"latitude": "0", "longitude": "0"})
    assert response.status_code == 503
