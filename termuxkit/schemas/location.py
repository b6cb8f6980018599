from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


def mps_to_kmh(speed: float) -> int:
    """Convert meters/second to whole kilometers/hour, truncating toward zero."""
    return int(speed * 3.6)


class Location(BaseModel):
    """Raw fix printed by termux-location."""

    latitude: float
    longitude: float
    altitude: float = 0.0
    accuracy: float = 0.0
    vertical_accuracy: float = 0.0
    bearing: float = 0.0
    speed: float = 0.0
    elapsed_ms: int = Field(default=0, alias="elapsedMs")
    provider: str = ""


class Place(BaseModel):
    latitude: float
    longitude: float
    speed: float = Field(default=0.0, description="Meters per second")

    @computed_field
    @property
    def speed_kmh(self) -> int:
        return mps_to_kmh(self.speed)

    @classmethod
    def from_location(cls, location: Location) -> "Place":
        return cls(latitude=location.latitude, longitude=location.longitude, speed=location.speed)
