"""Domain models for address tracking."""

from address_watch.models.address import (
    AddressUpdate,
    CacheEntry,
    CacheInsertResult,
    ChangeDetails,
    RawAddressPayload,
    ReferencePlace,
    StandardizedAddress,
)
from address_watch.models.base import Event
from address_watch.models.position import Coordinates, GeoPosition, PositionError

__all__ = [
    "AddressUpdate",
    "CacheEntry",
    "CacheInsertResult",
    "ChangeDetails",
    "Coordinates",
    "Event",
    "GeoPosition",
    "PositionError",
    "RawAddressPayload",
    "ReferencePlace",
    "StandardizedAddress",
]
