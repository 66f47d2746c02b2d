"""In-memory history of standardized addresses."""

from __future__ import annotations

import copy
import logging
from collections import deque

from address_watch.exceptions import ConfigurationError
from address_watch.models.address import (
    CacheEntry,
    CacheInsertResult,
    RawAddressPayload,
    StandardizedAddress,
)

logger = logging.getLogger(__name__)


class AddressCache:
    """Append-only, ordered history of standardized addresses.

    Detectors only compare the two most recent entries; older entries are
    kept so several detectors can evaluate the same history without
    re-inserting. ``clear()`` is the only way to drop history and it never
    touches detector state.

    Parameters
    ----------
    max_entries : int | None
        Keep only the most recent ``max_entries`` addresses. ``None`` keeps
        everything. Must be at least 2 when set.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 2:
            raise ConfigurationError(f"max_entries must be None or >= 2, got {max_entries}")
        self.max_entries = max_entries
        self._entries: deque[CacheEntry] = deque(maxlen=max_entries)
        self._next_index = 0

    def insert(
        self,
        address: StandardizedAddress,
        raw: RawAddressPayload | None = None,
    ) -> CacheInsertResult:
        """Append an address and return it with the entry it follows.

        ``raw`` is deep-copied; later changes to the caller's payload do not
        reach the cache.
        """
        previous = self._entries[-1].address if self._entries else None
        entry = CacheEntry(index=self._next_index, address=address, raw=copy.deepcopy(raw))
        self._entries.append(entry)
        self._next_index += 1
        logger.debug("Cached address #%d: %s", entry.index, address)
        return CacheInsertResult(previous=previous, current=address)

    def clear(self) -> None:
        """Drop the whole history."""
        self._entries.clear()
        self._next_index = 0

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def entries(self) -> tuple[CacheEntry, ...]:
        """Snapshot of the retained entries, oldest first."""
        return tuple(self._entries)

    def latest(self) -> CacheEntry | None:
        return self._entries[-1] if self._entries else None

    def last_two(self) -> tuple[CacheEntry | None, CacheEntry | None]:
        """Return ``(previous, current)``; either is ``None`` when missing."""
        if not self._entries:
            return None, None
        if len(self._entries) == 1:
            return None, self._entries[-1]
        return self._entries[-2], self._entries[-1]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AddressCache(size={self.size()}, max_entries={self.max_entries})"
