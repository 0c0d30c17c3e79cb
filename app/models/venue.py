"""Venue data model using Pydantic."""
from datetime import time

from pydantic import BaseModel, ConfigDict, Field


class Venue(BaseModel):
    """A physical venue as listed in the catalog CSV.

    Instances are frozen: a catalog is only ever changed by replacing it as a
    whole, never by editing a venue in place.
    """

    id: int
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    availability_radius: float = Field(ge=0)  # Kilometers
    open_hour: time
    close_hour: time
    rating: float = 0.0

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return (
            f"Venue(id={self.id}, lat={self.latitude}, lon={self.longitude}, "
            f"radius={self.availability_radius}km, "
            f"hours={self.open_hour.isoformat()}-{self.close_hour.isoformat()})"
        )
