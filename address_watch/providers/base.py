"""Geolocation provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from address_watch.models.position import GeoPosition, PositionError

SuccessCallback = Callable[[GeoPosition], None]
ErrorCallback = Callable[[PositionError], None]


class GeolocationProvider(ABC):
    """Capability set every position source offers.

    Providers never raise for a missing capability: positioning calls on an
    unsupported provider deliver ``PositionError.not_supported()`` to the
    error callback instead.
    """

    @abstractmethod
    def get_current_position(
        self,
        success: SuccessCallback,
        error: ErrorCallback | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        """Request a single position fix."""

    @abstractmethod
    def watch_position(
        self,
        success: SuccessCallback,
        error: ErrorCallback | None = None,
        options: dict[str, Any] | None = None,
    ) -> int | None:
        """Subscribe to position updates. Returns a watch id, or ``None``."""

    @abstractmethod
    def clear_watch(self, watch_id: int | None) -> None:
        """Cancel a subscription created by ``watch_position``."""

    @abstractmethod
    def is_supported(self) -> bool:
        """Whether positioning is available at all."""

    def is_permissions_api_supported(self) -> bool:
        return False
