"""Edge-triggered change detection for a single address field."""

from __future__ import annotations

import logging
from typing import Callable, Hashable

from address_watch.detection.dispatcher import CallbackRegistry, ChangeCallback
from address_watch.models.address import ChangeDetails, StandardizedAddress
from address_watch.store.cache import AddressCache

logger = logging.getLogger(__name__)

FieldAccessor = Callable[[StandardizedAddress], Hashable]
ChangeSignature = tuple[Hashable, Hashable]


class FieldChangeDetector:
    """Detects transitions of one field between the two latest cache entries.

    ``has_changed()`` is a read-and-acknowledge operation: the first call
    after a real transition records the ``(previous, current)`` signature,
    notifies the registered callback and returns ``True``. Later calls for
    the same transition return ``False`` until a different transition
    appears in the cache.

    Parameters
    ----------
    kind : str
        Detector name, also the callback kind (``"bairro"``).
    cache : AddressCache
        History shared with the other detectors.
    field : FieldAccessor
        Extracts the compared value.
    dispatcher : CallbackRegistry
        Registry holding this detector's callback.
    display : FieldAccessor | None
        Extracts a richer display value reported alongside the compared one.
    display_key : str | None
        Key for the display value in change details. Defaults to
        ``f"{kind}_completo"``.
    """

    def __init__(
        self,
        kind: str,
        cache: AddressCache,
        field: FieldAccessor,
        dispatcher: CallbackRegistry,
        display: FieldAccessor | None = None,
        display_key: str | None = None,
    ) -> None:
        self.kind = kind
        self.cache = cache
        self.field = field
        self.dispatcher = dispatcher
        self.display = display
        self.display_key = display_key or f"{kind}_completo"
        self._last_notified_signature: ChangeSignature | None = None

    @property
    def last_notified_signature(self) -> ChangeSignature | None:
        return self._last_notified_signature

    def has_changed(self) -> bool:
        """Report an unacknowledged transition of the tracked field once."""
        previous, current = self.cache.last_two()
        if previous is None or current is None:
            return False

        prev_value = self.field(previous.address)
        curr_value = self.field(current.address)
        if prev_value == curr_value:
            return False

        signature = (prev_value, curr_value)
        if signature == self._last_notified_signature:
            logger.debug(
                "%s change %r already notified",
                self.kind,
                signature,
                extra={"kind": self.kind, "previous": prev_value, "current": curr_value},
            )
            return False

        self._last_notified_signature = signature
        logger.info(
            "%s changed: %r -> %r",
            self.kind,
            prev_value,
            curr_value,
            extra={"kind": self.kind, "previous": prev_value, "current": curr_value},
        )

        details = self.get_change_details()
        if details is not None:
            self.dispatcher.dispatch(self.kind, details)
        return True

    def get_change_details(self) -> ChangeDetails | None:
        """Describe the latest transition without acknowledging it.

        Returns ``None`` while fewer than two addresses are cached.
        """
        previous, current = self.cache.last_two()
        if previous is None or current is None:
            return None

        prev_value = self.field(previous.address)
        curr_value = self.field(current.address)
        return ChangeDetails(
            field=self.kind,
            has_changed=prev_value != curr_value,
            previous=self._snapshot(previous.address),
            current=self._snapshot(current.address),
        )

    def set_change_callback(self, callback: ChangeCallback | None) -> None:
        """Replace the callback. The acknowledged signature is kept."""
        self.dispatcher.register(self.kind, callback)

    def get_change_callback(self) -> ChangeCallback | None:
        return self.dispatcher.get(self.kind)

    def reset(self) -> None:
        """Forget the acknowledged transition."""
        self._last_notified_signature = None

    def _snapshot(self, address: StandardizedAddress) -> dict:
        values = {self.kind: self.field(address)}
        if self.display is not None:
            values[self.display_key] = self.display(address)
        return values

    def __repr__(self) -> str:
        return (
            f"FieldChangeDetector(kind={self.kind!r}, "
            f"last_notified_signature={self._last_notified_signature!r})"
        )
