"""Pytest configuration and fixtures."""

from typing import Any, Callable

import pytest

from address_watch.tracker import AddressTracker

PayloadBuilder = Callable[..., dict[str, Any]]


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def make_payload() -> PayloadBuilder:
    """Build a reverse-geocoding payload for São Paulo.

    Keyword arguments override keys of the ``address`` bag; ``None``
    removes the key.
    """

    def _make(**overrides: Any) -> dict[str, Any]:
        address: dict[str, Any] = {
            "street": "Rua das Flores",
            "house_number": "123",
            "neighbourhood": "Centro",
            "city": "São Paulo",
            "state": "SP",
            "postcode": "01000-000",
            "country": "Brasil",
            "country_code": "BR",
        }
        for key, value in overrides.items():
            if value is None:
                address.pop(key, None)
            else:
                address[key] = value
        return {"address": address}

    return _make


@pytest.fixture
def tracker() -> AddressTracker:
    """Fresh tracker with default configuration."""
    return AddressTracker()
