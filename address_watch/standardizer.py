"""Reverse-geocoding payload to standardized Brazilian address.

``standardize`` is total: missing, empty or malformed fields map to
``None`` and nothing is ever raised. Downstream detectors only see the
standardized values, so two payloads that standardize identically are
indistinguishable to them.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from address_watch.models.address import RawAddressPayload, ReferencePlace, StandardizedAddress

# Payload keys tried in order for each standardized field; OSM addr:* tags win
FIELD_SOURCES: dict[str, tuple[str, ...]] = {
    "logradouro": ("addr:street", "street", "road", "pedestrian"),
    "numero": ("addr:housenumber", "house_number"),
    "bairro": ("addr:neighbourhood", "neighbourhood"),
    "cidade": ("addr:city", "city", "town", "municipality", "village"),
    "estado": ("addr:state", "state"),
    "cep": ("addr:postcode", "postcode"),
    "pais": ("country",),
    "pais_codigo": ("country_code",),
    "regiao_metropolitana": ("county",),
}

_ISO_3166_2_BR = re.compile(r"^BR-([A-Z]{2})$")
_UF = re.compile(r"^[A-Z]{2}$")


def standardize(raw: RawAddressPayload | None) -> StandardizedAddress:
    """Convert a raw reverse-geocoding payload into a ``StandardizedAddress``.

    Parameters
    ----------
    raw : RawAddressPayload | None
        Payload with a nested ``address`` bag, as emitted by Nominatim.

    Returns
    -------
    StandardizedAddress
        Canonical address. Absent components are ``None``.
    """
    bag = _address_bag(raw)
    values = {name: _first(bag, keys) for name, keys in FIELD_SOURCES.items()}

    suburb = _first(bag, ("suburb",))
    values["bairro_completo"] = compose_bairro_completo(values["bairro"], suburb)
    values["sigla_uf"] = (
        _first(bag, ("state_code",))
        or extract_sigla_uf(bag.get("ISO3166-2-lvl4"))
        or (values["estado"] if values["estado"] and _UF.match(values["estado"]) else None)
    )

    values["lugar_referencia"] = extract_reference_place(raw)

    return StandardizedAddress(**values)


def compose_bairro_completo(bairro: str | None, suburb: str | None) -> str | None:
    """Join neighbourhood and suburb for display.

    >>> compose_bairro_completo("Bela Vista", "Região Central")
    'Bela Vista, Região Central'
    >>> compose_bairro_completo(None, "Região Central")
    'Região Central'
    """
    if bairro and suburb and bairro != suburb:
        return f"{bairro}, {suburb}"
    return bairro or suburb or None


def extract_sigla_uf(iso_code: Any) -> str | None:
    """Extract the state code from an ISO 3166-2 value such as ``"BR-SP"``."""
    if not isinstance(iso_code, str):
        return None
    match = _ISO_3166_2_BR.match(iso_code)
    return match.group(1) if match else None


def extract_reference_place(raw: Any) -> ReferencePlace | None:
    """Read the top-level OSM ``class``, ``type`` and ``name`` of a payload.

    Returns ``None`` when the payload carries none of them.
    """
    if not isinstance(raw, Mapping):
        return None
    place = ReferencePlace(
        class_name=_first(raw, ("class",)),
        type_name=_first(raw, ("type",)),
        name=_first(raw, ("name",)),
    )
    if place == ReferencePlace():
        return None
    return place


def _address_bag(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        return {}
    bag = raw.get("address")
    return bag if isinstance(bag, Mapping) else {}


def _first(bag: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = bag.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None
