"""Custom exception hierarchy for address-watch."""


class AddressWatchError(Exception):
    """Base exception for all address-watch errors."""


class ConfigurationError(AddressWatchError):
    """Raised when configuration is invalid or missing."""


class SinkError(AddressWatchError):
    """Raised when a sink operation fails."""
