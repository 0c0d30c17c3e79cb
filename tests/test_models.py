"""Unit tests for Pydantic data models."""
from datetime import datetime, time

import pytest
from pydantic import ValidationError

from app.models import QueryPoint, Venue


class TestVenueModel:
    """Test Venue model."""

    def test_venue_basic_serialization(self):
        """Test basic Venue creation and JSON serialization."""
        venue = Venue(
            id=42,
            latitude=-8.07834,
            longitude=-34.90938,
            availability_radius=5,
            open_hour="09:00:00",
            close_hour="18:30:00",
            rating=4.5,
        )

        assert venue.open_hour == time(9, 0, 0)
        assert venue.close_hour == time(18, 30, 0)

        json_data = venue.model_dump(mode="json")
        assert json_data == {
            "id": 42,
            "latitude": -8.07834,
            "longitude": -34.90938,
            "availability_radius": 5.0,
            "open_hour": "09:00:00",
            "close_hour": "18:30:00",
            "rating": 4.5,
        }

    def test_venue_is_immutable(self):
        venue = Venue(
            id=1, latitude=0, longitude=0, availability_radius=1,
            open_hour="09:00:00", close_hour="18:00:00",
        )
        with pytest.raises(ValidationError):
            venue.latitude = 10.0

    @pytest.mark.parametrize(
        "field,value",
        [("latitude", 90.5), ("latitude", -91), ("longitude", 180.1), ("availability_radius", -1)],
    )
    def test_venue_rejects_out_of_range(self, field, value):
        data = dict(
            id=1, latitude=0, longitude=0, availability_radius=1,
            open_hour="09:00:00", close_hour="18:00:00",
        )
        data[field] = value
        with pytest.raises(ValidationError):
            Venue(**data)

    def test_venue_to_string(self):
        venue = Venue(
            id=7, latitude=1.5, longitude=2.5, availability_radius=3,
            open_hour="08:00:00", close_hour="20:00:00",
        )
        str_repr = str(venue)
        assert "id=7" in str_repr
        assert "08:00:00-20:00:00" in str_repr


class TestQueryPoint:
    def test_query_point_is_frozen(self):
        query = QueryPoint(latitude=1.0, longitude=2.0, instant=datetime(2024, 1, 1, 12))
        with pytest.raises(AttributeError):
            query.latitude = 3.0
