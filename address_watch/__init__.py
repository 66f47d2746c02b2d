"""Track a visitor's address and detect street, neighborhood and city changes."""

from address_watch.config import AddressWatchConfig, TrackerConfig
from address_watch.models.address import ChangeDetails, StandardizedAddress
from address_watch.standardizer import standardize
from address_watch.tracker import AddressTracker

__all__ = [
    "AddressTracker",
    "AddressWatchConfig",
    "ChangeDetails",
    "StandardizedAddress",
    "TrackerConfig",
    "standardize",
]

__version__ = "0.1.0"
