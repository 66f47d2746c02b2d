"""In-memory stores for address history."""

from address_watch.store.cache import AddressCache

__all__ = ["AddressCache"]
