"""Callback registry for change notifications."""

from __future__ import annotations

import logging
from typing import Callable

from address_watch.models.address import ChangeDetails

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[ChangeDetails], None]


class CallbackRegistry:
    """Holds at most one callback per detector kind.

    Callbacks run synchronously on the caller's thread. Exceptions raised
    by a callback propagate to whoever triggered the dispatch.
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, ChangeCallback] = {}

    def register(self, kind: str, callback: ChangeCallback | None) -> None:
        """Set the callback for ``kind``; ``None`` removes it."""
        if callback is None:
            self._callbacks.pop(kind, None)
            return
        if not callable(callback):
            raise TypeError(
                f"Callback for {kind!r} must be callable or None, got {type(callback).__name__}"
            )
        self._callbacks[kind] = callback

    def get(self, kind: str) -> ChangeCallback | None:
        return self._callbacks.get(kind)

    def has(self, kind: str) -> bool:
        return kind in self._callbacks

    def unregister(self, kind: str) -> bool:
        """Remove the callback for ``kind``. Returns whether one existed."""
        return self._callbacks.pop(kind, None) is not None

    def clear(self) -> None:
        self._callbacks.clear()

    def registered_kinds(self) -> list[str]:
        return list(self._callbacks)

    def dispatch(self, kind: str, details: ChangeDetails) -> bool:
        """Invoke the callback for ``kind``.

        Returns ``False`` without doing anything when no callback is
        registered.
        """
        callback = self._callbacks.get(kind)
        if callback is None:
            return False
        logger.debug("Dispatching %s change to %r", kind, callback)
        callback(details)
        return True

    def __len__(self) -> int:
        return len(self._callbacks)
