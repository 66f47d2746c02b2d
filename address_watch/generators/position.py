"""Simulated position fixes for driving mock providers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterator

from address_watch.generators.base import BaseGenerator
from address_watch.models.position import Coordinates, GeoPosition

# Praça da Sé, São Paulo
DEFAULT_CENTER = (-23.5503, -46.6339)


class PositionFactory(BaseGenerator):
    """Generate ``GeoPosition`` values around a center point.

    Parameters
    ----------
    center : tuple[float, float]
        Latitude and longitude the positions scatter around.
    radius : float
        Maximum offset in degrees for ``generate()``.
    """

    def __init__(
        self,
        seed: int | None = None,
        center: tuple[float, float] = DEFAULT_CENTER,
        radius: float = 0.01,
    ) -> None:
        super().__init__(seed=seed)
        self.center = center
        self.radius = radius

    def generate(self, timestamp: datetime | None = None) -> GeoPosition:
        lat = float(self.fake.coordinate(center=self.center[0], radius=self.radius))
        lon = float(self.fake.coordinate(center=self.center[1], radius=self.radius))
        return self._position(lat, lon, timestamp or datetime.now(timezone.utc))

    def walk(
        self,
        steps: int,
        step_degrees: float = 0.0005,
        interval_seconds: float = 5.0,
    ) -> Iterator[GeoPosition]:
        """Yield positions drifting away from the center, one fix per interval."""
        lat, lon = self.center
        timestamp = datetime.now(timezone.utc)
        for _ in range(steps):
            yield self._position(lat, lon, timestamp)
            lat += self.rng.uniform(-step_degrees, step_degrees)
            lon += self.rng.uniform(-step_degrees, step_degrees)
            timestamp += timedelta(seconds=interval_seconds)

    def _position(self, lat: float, lon: float, timestamp: datetime) -> GeoPosition:
        coords = Coordinates(
            latitude=round(lat, 7),
            longitude=round(lon, 7),
            accuracy=round(self.rng.uniform(3.0, 30.0), 1),
        )
        return GeoPosition(coords=coords, timestamp=timestamp)
