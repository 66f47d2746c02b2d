"""Provider backed by a platform location API."""

from __future__ import annotations

from typing import Any

from address_watch.models.position import PositionError
from address_watch.providers.base import ErrorCallback, GeolocationProvider, SuccessCallback


class PlatformGeolocationProvider(GeolocationProvider):
    """Delegate to a platform object exposing a ``geolocation`` API.

    ``platform`` is any object with a ``geolocation`` attribute offering
    ``get_current_position``, ``watch_position`` and ``clear_watch``, and
    optionally a ``permissions`` attribute. A ``None`` platform, or one
    without ``geolocation``, makes the provider unsupported.
    """

    def __init__(self, platform: Any = None) -> None:
        self.platform = platform

    def get_current_position(
        self,
        success: SuccessCallback,
        error: ErrorCallback | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        if not self.is_supported():
            if error is not None:
                error(PositionError.not_supported())
            return
        self.platform.geolocation.get_current_position(success, error, options)

    def watch_position(
        self,
        success: SuccessCallback,
        error: ErrorCallback | None = None,
        options: dict[str, Any] | None = None,
    ) -> int | None:
        if not self.is_supported():
            if error is not None:
                error(PositionError.not_supported())
            return None
        return self.platform.geolocation.watch_position(success, error, options)

    def clear_watch(self, watch_id: int | None) -> None:
        if watch_id is not None and self.is_supported():
            self.platform.geolocation.clear_watch(watch_id)

    def is_supported(self) -> bool:
        return getattr(self.platform, "geolocation", None) is not None

    def is_permissions_api_supported(self) -> bool:
        return getattr(self.platform, "permissions", None) is not None
