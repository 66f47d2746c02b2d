"""Geolocation providers feeding positions to the tracker."""

from address_watch.providers.base import GeolocationProvider
from address_watch.providers.mock import MockGeolocationProvider
from address_watch.providers.platform import PlatformGeolocationProvider

__all__ = ["GeolocationProvider", "MockGeolocationProvider", "PlatformGeolocationProvider"]
