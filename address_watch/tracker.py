"""Address tracking facade.

``AddressTracker`` owns the session state: one address cache, one callback
registry and one detector per tracked field. Detectors evaluated at insert
time and detectors polled later through ``has_*_changed()`` are the same
objects, so an edge acknowledged during an insert is not reported again by
a later poll.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Iterable

from address_watch.config import TrackerConfig
from address_watch.detection.detector import FieldChangeDetector
from address_watch.detection.dispatcher import CallbackRegistry, ChangeCallback
from address_watch.models.address import (
    AddressUpdate,
    ChangeDetails,
    RawAddressPayload,
    StandardizedAddress,
)
from address_watch.standardizer import standardize
from address_watch.store.cache import AddressCache

logger = logging.getLogger(__name__)

LOGRADOURO = "logradouro"
BAIRRO = "bairro"
CIDADE = "cidade"

# Insert-time evaluation order
DETECTOR_KINDS = (LOGRADOURO, BAIRRO, CIDADE)

AddressSubscriber = Callable[[AddressUpdate], None]


class AddressTracker:
    """Standardizes reverse-geocoding results and tracks field changes.

    Parameters
    ----------
    config : TrackerConfig | None
        Cache retention and insert-time evaluation settings.
    """

    def __init__(self, config: TrackerConfig | None = None) -> None:
        self.config = config or TrackerConfig()
        self.cache = AddressCache(max_entries=self.config.max_history)
        self.dispatcher = CallbackRegistry()
        self._subscribers: list[AddressSubscriber] = []
        self._detectors: dict[str, FieldChangeDetector] = {
            LOGRADOURO: FieldChangeDetector(
                LOGRADOURO,
                self.cache,
                field=lambda address: address.logradouro,
                dispatcher=self.dispatcher,
            ),
            BAIRRO: FieldChangeDetector(
                BAIRRO,
                self.cache,
                field=lambda address: address.bairro,
                dispatcher=self.dispatcher,
                display=lambda address: address.bairro_completo,
            ),
            CIDADE: FieldChangeDetector(
                CIDADE,
                self.cache,
                field=lambda address: address.cidade,
                dispatcher=self.dispatcher,
                display=lambda address: address.cidade_completa() or None,
                display_key="cidade_completa",
            ),
        }

    def detector(self, kind: str) -> FieldChangeDetector:
        """Return the detector for ``kind`` (``KeyError`` if unknown)."""
        return self._detectors[kind]

    @property
    def current_address(self) -> StandardizedAddress | None:
        entry = self.cache.latest()
        return entry.address if entry else None

    @property
    def previous_address(self) -> StandardizedAddress | None:
        previous, _ = self.cache.last_two()
        return previous.address if previous else None

    def get_brazilian_standard_address(self, raw: RawAddressPayload | None) -> StandardizedAddress:
        """Standardize ``raw``, cache it and notify subscribers and detectors.

        Subscribers receive an ``AddressUpdate`` for every insert. Then each
        detector with a registered callback is evaluated, so callbacks for
        changed fields run before this method returns.

        Every subscriber and every detector runs even when one of them
        raises; the first exception is re-raised afterwards.
        """
        address = standardize(raw)
        self.cache.insert(address, raw)
        latest = self.cache.latest()
        logger.debug(
            "Tracking %d addresses, latest: %s",
            self.cache.size(),
            address,
            extra={"cache_size": self.cache.size(), "index": latest.index},
        )

        update = AddressUpdate(address=address, index=latest.index, cache_size=self.cache.size())
        steps = [partial(subscriber, update) for subscriber in list(self._subscribers)]
        if self.config.auto_evaluate_on_insert:
            steps.extend(
                self._detectors[kind].has_changed
                for kind in DETECTOR_KINDS
                if self.dispatcher.has(kind)
            )
        _run_all(steps)

        return address

    def subscribe(self, subscriber: AddressSubscriber) -> None:
        """Call ``subscriber`` with an ``AddressUpdate`` after every insert."""
        if not callable(subscriber):
            raise TypeError(f"Subscriber must be callable, got {type(subscriber).__name__}")
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: AddressSubscriber) -> bool:
        """Stop notifying ``subscriber``. Returns whether it was subscribed."""
        try:
            self._subscribers.remove(subscriber)
        except ValueError:
            return False
        return True

    def clear_cache(self) -> None:
        """Drop the address history. Detector signatures are kept."""
        self.cache.clear()

    def reset_change_detection(self) -> None:
        """Forget every acknowledged transition."""
        for detector in self._detectors.values():
            detector.reset()

    def has_logradouro_changed(self) -> bool:
        return self._detectors[LOGRADOURO].has_changed()

    def has_bairro_changed(self) -> bool:
        return self._detectors[BAIRRO].has_changed()

    def has_cidade_changed(self) -> bool:
        return self._detectors[CIDADE].has_changed()

    def get_logradouro_change_details(self) -> ChangeDetails | None:
        return self._detectors[LOGRADOURO].get_change_details()

    def get_bairro_change_details(self) -> ChangeDetails | None:
        return self._detectors[BAIRRO].get_change_details()

    def get_cidade_change_details(self) -> ChangeDetails | None:
        return self._detectors[CIDADE].get_change_details()

    def set_logradouro_change_callback(self, callback: ChangeCallback | None) -> None:
        self._detectors[LOGRADOURO].set_change_callback(callback)

    def set_bairro_change_callback(self, callback: ChangeCallback | None) -> None:
        self._detectors[BAIRRO].set_change_callback(callback)

    def set_cidade_change_callback(self, callback: ChangeCallback | None) -> None:
        self._detectors[CIDADE].set_change_callback(callback)

    def get_logradouro_change_callback(self) -> ChangeCallback | None:
        return self._detectors[LOGRADOURO].get_change_callback()

    def get_bairro_change_callback(self) -> ChangeCallback | None:
        return self._detectors[BAIRRO].get_change_callback()

    def get_cidade_change_callback(self) -> ChangeCallback | None:
        return self._detectors[CIDADE].get_change_callback()

    def __repr__(self) -> str:
        return (
            f"AddressTracker(cache={self.cache!r}, "
            f"callbacks={self.dispatcher.registered_kinds()!r})"
        )


def _run_all(steps: Iterable[Callable[[], object]]) -> None:
    """Run every step, then re-raise the first exception any of them raised."""
    first_error: BaseException | None = None
    for step in steps:
        try:
            step()
        except Exception as e:
            if first_error is None:
                first_error = e
            else:
                logger.error("Insert notification failed after an earlier failure", exc_info=True)
    if first_error is not None:
        raise first_error
