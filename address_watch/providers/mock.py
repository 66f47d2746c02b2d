"""Configurable provider for tests and simulations."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from address_watch.models.position import GeoPosition, PositionError
from address_watch.providers.base import ErrorCallback, GeolocationProvider, SuccessCallback

logger = logging.getLogger(__name__)


@dataclass
class _Watch:
    success: SuccessCallback
    error: ErrorCallback | None
    options: dict[str, Any] | None


class MockGeolocationProvider(GeolocationProvider):
    """Test double with injectable positions, errors and latency.

    Callbacks run on the calling thread. ``delay`` (seconds) blocks before
    each initial delivery to simulate a slow sensor.

    Parameters
    ----------
    supported : bool
        Whether the provider reports positioning as available.
    default_position : GeoPosition | None
        Position delivered on success.
    default_error : PositionError | None
        Error delivered instead of a position when set.
    delay : float
        Seconds to wait before delivering the initial result.
    """

    def __init__(
        self,
        supported: bool = True,
        default_position: GeoPosition | None = None,
        default_error: PositionError | None = None,
        delay: float = 0.0,
    ) -> None:
        self.supported = supported
        self.default_position = default_position
        self.default_error = default_error
        self.delay = delay
        self._watch_id_counter = 0
        self._watches: dict[int, _Watch] = {}

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

        self._wait()
        if self.default_error is not None:
            if error is not None:
                error(self.default_error)
        elif self.default_position is not None:
            success(self.default_position)
        elif error is not None:
            error(PositionError.unavailable())

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

        self._watch_id_counter += 1
        watch_id = self._watch_id_counter
        self._watches[watch_id] = _Watch(success=success, error=error, options=options)
        logger.debug("Registered watch %d", watch_id)

        self._wait()
        if self.default_error is not None:
            if error is not None:
                error(self.default_error)
        elif self.default_position is not None:
            success(self.default_position)
        return watch_id

    def clear_watch(self, watch_id: int | None) -> None:
        if watch_id is not None:
            self._watches.pop(watch_id, None)

    def is_supported(self) -> bool:
        return self.supported

    def set_position(self, position: GeoPosition) -> None:
        """Make ``position`` the default result and clear any default error."""
        self.default_position = position
        self.default_error = None

    def set_error(self, error: PositionError) -> None:
        """Make ``error`` the default result and clear any default position."""
        self.default_error = error
        self.default_position = None

    def trigger_watch_update(self, position: GeoPosition | None = None) -> None:
        """Deliver ``position`` (or the default position) to every active watch."""
        to_send = position or self.default_position
        if to_send is None:
            return
        for watch in list(self._watches.values()):
            watch.success(to_send)

    def trigger_watch_error(self, error: PositionError | None = None) -> None:
        """Deliver ``error`` (or the default error) to every active watch."""
        to_send = error or self.default_error or PositionError.unavailable()
        for watch in list(self._watches.values()):
            if watch.error is not None:
                watch.error(to_send)

    def active_watch_ids(self) -> list[int]:
        return list(self._watches)

    def _wait(self) -> None:
        if self.delay > 0:
            time.sleep(self.delay)
