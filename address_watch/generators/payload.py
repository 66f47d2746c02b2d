"""Reverse-geocoding payload generation for simulations and tests.

Payloads follow the Nominatim reverse response shape the tracker consumes::

    factory = RawPayloadFactory(seed=42)
    payload = factory.generate(neighbourhood="Centro")
    for payload in factory.route(steps=10, street_every=2, bairro_every=5):
        tracker.get_brazilian_standard_address(payload)
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

from address_watch.generators.base import BaseGenerator

_MAX_REDRAWS = 20


class RawPayloadFactory(BaseGenerator):
    """Generate Brazilian reverse-geocoding payloads with Faker ``pt_BR``."""

    def generate(self, **overrides: Any) -> dict[str, Any]:
        """Generate one payload.

        Keyword arguments override keys of the nested ``address`` bag; a
        ``None`` override removes the key, simulating a missing component.
        """
        sigla = self.fake.estado_sigla()
        address: dict[str, Any] = {
            "street": self.fake.street_name(),
            "house_number": str(self.rng.randint(1, 9999)),
            "neighbourhood": self.fake.bairro(),
            "city": self.fake.city(),
            "state": self.fake.estado_nome(),
            "ISO3166-2-lvl4": f"BR-{sigla}",
            "postcode": self.fake.postcode(),
            "country": "Brasil",
            "country_code": "br",
        }
        for key, value in overrides.items():
            if value is None:
                address.pop(key, None)
            else:
                address[key] = value

        return self._wrap(address)

    def route(
        self,
        steps: int,
        street_every: int = 2,
        bairro_every: int = 4,
    ) -> Iterator[dict[str, Any]]:
        """Yield payloads for a visitor walking through one city.

        The street changes every ``street_every`` steps and the
        neighbourhood every ``bairro_every`` steps; house numbers grow in
        between. City and state stay fixed.
        """
        first = self.generate()["address"]
        street = first["street"]
        bairro = first["neighbourhood"]
        number = int(first["house_number"])

        for step in range(steps):
            if step and street_every and step % street_every == 0:
                street = self._redraw(street, self.fake.street_name)
                number = self.rng.randint(1, 200)
            if step and bairro_every and step % bairro_every == 0:
                bairro = self._redraw(bairro, self.fake.bairro)

            address = dict(first, street=street, neighbourhood=bairro, house_number=str(number))
            number += self.rng.randint(2, 40)
            yield self._wrap(address)

    def _wrap(self, address: dict[str, Any]) -> dict[str, Any]:
        lat, lon = self.fake.latitude(), self.fake.longitude()
        parts = [address.get(key) for key in ("street", "house_number", "neighbourhood", "city", "state")]
        return {
            "place_id": self.rng.randint(10_000_000, 99_999_999),
            "lat": str(lat),
            "lon": str(lon),
            "display_name": ", ".join(str(part) for part in parts if part),
            "address": address,
        }

    @staticmethod
    def _redraw(current: str, draw: Callable[[], str]) -> str:
        for _ in range(_MAX_REDRAWS):
            value = draw()
            if value != current:
                return value
        return f"{current} II"
