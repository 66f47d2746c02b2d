"""Position payloads exchanged with geolocation providers."""

from dataclasses import dataclass
from datetime import datetime

UNSUPPORTED = 0
PERMISSION_DENIED = 1
POSITION_UNAVAILABLE = 2
TIMEOUT = 3


@dataclass(frozen=True)
class Coordinates:
    """Geographic coordinates as reported by a location sensor."""

    latitude: float
    longitude: float
    accuracy: float | None = None
    altitude: float | None = None
    heading: float | None = None
    speed: float | None = None


@dataclass(frozen=True)
class GeoPosition:
    """A timestamped position fix."""

    coords: Coordinates
    timestamp: datetime


@dataclass(frozen=True)
class PositionError:
    """Error delivered to a provider's error callback.

    ``code`` follows the platform convention: 0 unsupported,
    1 permission denied, 2 position unavailable, 3 timeout.
    """

    code: int
    message: str

    @classmethod
    def not_supported(cls) -> "PositionError":
        return cls(code=UNSUPPORTED, message="Geolocation is not supported")

    @classmethod
    def unavailable(cls) -> "PositionError":
        return cls(code=POSITION_UNAVAILABLE, message="Position unavailable")
