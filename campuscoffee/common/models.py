"""Data models shared by the import pipeline and the POS store."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any


class PosCategory(str, Enum):
    CAFE = "CAFE"
    BAKERY = "BAKERY"
    VENDING_MACHINE = "VENDING_MACHINE"
    CAFETERIA = "CAFETERIA"


class CampusZone(str, Enum):
    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"


@dataclass(frozen=True)
class ExternalNode:
    """A single OSM node reduced to the tags a POS import cares about.

    Every attribute except ``node_id`` may be ``None``; absence only becomes an
    error once the node is converted into a :class:`PosRecord`.
    """

    node_id: int
    latitude: float | None = None
    longitude: float | None = None
    name: str | None = None
    amenity: str | None = None
    street: str | None = None
    house_number: str | None = None
    postal_code: str | None = None
    city: str | None = None
    website: str | None = None
    phone: str | None = None
    opening_hours: str | None = None


@dataclass(frozen=True)
class PosRecord:
    name: str
    category: PosCategory
    campus: CampusZone | None
    description: str
    street: str
    house_number: str
    postal_code: int
    city: str
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def with_identity(self, record_id: int, created_at: str, updated_at: str) -> "PosRecord":
        return replace(self, id=record_id, created_at=created_at, updated_at=updated_at)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["category"] = self.category.value
        payload["campus"] = self.campus.value if self.campus is not None else None
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "PosRecord":
        campus = payload.get("campus")
        return cls(
            name=payload["name"],
            category=PosCategory(payload["category"]),
            campus=CampusZone(campus) if campus else None,
            description=payload["description"],
            street=payload["street"],
            house_number=payload["house_number"],
            postal_code=int(payload["postal_code"]),
            city=payload["city"],
            id=payload.get("id"),
            created_at=payload.get("created_at"),
            updated_at=payload.get("updated_at"),
        )
