"""Standardized Brazilian address records and change-tracking models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

# Reverse-geocoding payload (Nominatim shape): {"address": {...}}
RawAddressPayload = Mapping[str, Any]

NO_REFERENCE_PLACE = "Não classificado"

# OSM class -> type -> Portuguese description
REFERENCE_PLACE_TYPES: dict[str, dict[str, str]] = {
    "place": {"house": "Residencial"},
    "shop": {"mall": "Shopping Center", "car_repair": "Oficina Mecânica"},
    "amenity": {"cafe": "Café"},
    "railway": {"subway": "Estação do Metrô", "station": "Estação do Metrô"},
}


@dataclass(frozen=True)
class ReferencePlace:
    """Point of interest the payload was resolved to (mall, station, cafe).

    ``class_name`` and ``type_name`` are the OSM ``class`` and ``type`` of
    the reverse-geocoding result; ``name`` is its ``name``.
    """

    class_name: str | None = None
    type_name: str | None = None
    name: str | None = None

    @property
    def description(self) -> str:
        """Portuguese description, e.g. ``"Shopping Center Shopping Morumbi"``.

        Unknown classes and incomplete class/type pairs are ``"Não classificado"``;
        known classes with an unmapped type fall back to ``"class: type"``.
        """
        if not self.class_name or not self.type_name:
            return NO_REFERENCE_PLACE
        types = REFERENCE_PLACE_TYPES.get(self.class_name)
        if types is None:
            return NO_REFERENCE_PLACE
        label = types.get(self.type_name)
        if label is None:
            return f"{self.class_name}: {self.type_name}"
        return f"{label} {self.name}" if self.name else label

    def as_dict(self) -> dict[str, str | None]:
        return {
            "class_name": self.class_name,
            "type_name": self.type_name,
            "name": self.name,
            "description": self.description,
        }

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class StandardizedAddress:
    """Canonical Brazilian address derived from a reverse-geocoding payload.

    Fields use the Brazilian terms:
    - logradouro/numero: street name and house number
    - bairro: primary neighborhood name
    - bairro_completo: bairro plus suburb for display ("Bela Vista, Região Central")
    - cidade/estado/sigla_uf: city, state name and two-letter state code
    - regiao_metropolitana: metropolitan region ("Região Metropolitana do Recife")
    - cep: postal code
    - pais/pais_codigo: country name and ISO 3166-1 code

    Absent components are ``None``.
    """

    logradouro: str | None = None
    numero: str | None = None
    bairro: str | None = None
    bairro_completo: str | None = None
    cidade: str | None = None
    estado: str | None = None
    sigla_uf: str | None = None
    cep: str | None = None
    pais: str | None = None
    pais_codigo: str | None = None
    regiao_metropolitana: str | None = None
    lugar_referencia: ReferencePlace | None = None

    def logradouro_completo(self) -> str:
        """Street with house number, e.g. ``"Avenida Paulista, 1578"``."""
        if not self.logradouro:
            return ""
        if self.numero:
            return f"{self.logradouro}, {self.numero}"
        return self.logradouro

    def cidade_completa(self) -> str:
        """City with state code, e.g. ``"São Paulo, SP"``."""
        if not self.cidade:
            return ""
        if self.sigla_uf:
            return f"{self.cidade}, {self.sigla_uf}"
        return self.cidade

    def endereco_completo(self) -> str:
        """Full single-line address, skipping absent parts."""
        parts = [
            self.logradouro_completo(),
            self.bairro_completo,
            self.cidade_completa(),
            self.cep,
        ]
        return ", ".join(part for part in parts if part)

    def as_dict(self) -> dict[str, Any]:
        return {
            "logradouro": self.logradouro,
            "numero": self.numero,
            "bairro": self.bairro,
            "bairro_completo": self.bairro_completo,
            "cidade": self.cidade,
            "estado": self.estado,
            "sigla_uf": self.sigla_uf,
            "cep": self.cep,
            "pais": self.pais,
            "pais_codigo": self.pais_codigo,
            "regiao_metropolitana": self.regiao_metropolitana,
            "lugar_referencia": self.lugar_referencia.as_dict() if self.lugar_referencia else None,
        }

    def __str__(self) -> str:
        return self.endereco_completo() or "Empty address"


@dataclass(frozen=True)
class CacheEntry:
    """A standardized address with its insertion order index.

    ``raw`` is a private deep copy of the payload the address came from.
    """

    index: int
    address: StandardizedAddress
    raw: RawAddressPayload | None = None


@dataclass(frozen=True)
class CacheInsertResult:
    """The pair produced by an insert, ready for comparison."""

    previous: StandardizedAddress | None
    current: StandardizedAddress


@dataclass(frozen=True)
class AddressUpdate:
    """Notification sent to tracker subscribers after every insert."""

    address: StandardizedAddress
    index: int
    cache_size: int


@dataclass(frozen=True)
class ChangeDetails:
    """Payload describing a tracked field's latest transition.

    ``previous`` and ``current`` hold the compared value under the field
    name and, for fields with a display form, the display value under its
    own key (``bairro_completo``, ``cidade_completa``). Both are read-only
    copies of the values passed in.
    """

    field: str
    has_changed: bool
    previous: Mapping[str, str | None]
    current: Mapping[str, str | None]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "previous", MappingProxyType(dict(self.previous)))
        object.__setattr__(self, "current", MappingProxyType(dict(self.current)))

    def as_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "has_changed": self.has_changed,
            "previous": dict(self.previous),
            "current": dict(self.current),
            "timestamp": self.timestamp,
        }
