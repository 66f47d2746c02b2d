"""Faker-backed generators for simulated payloads and positions."""

from address_watch.generators.payload import RawPayloadFactory
from address_watch.generators.position import PositionFactory

__all__ = ["PositionFactory", "RawPayloadFactory"]
