"""Validate an OSM node and map it onto a POS record."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType

from campuscoffee.common.constants import OSM_SOURCE_NAME
from campuscoffee.common.errors import MissingRequiredFields
from campuscoffee.common.models import CampusZone, ExternalNode, PosCategory, PosRecord

logger = logging.getLogger(__name__)

# Reported field name -> ExternalNode attribute, in reporting order.
REQUIRED_FIELDS = (
    ("name", "name"),
    ("amenity", "amenity"),
    ("addr:street", "street"),
    ("addr:housenumber", "house_number"),
    ("addr:postcode", "postal_code"),
    ("addr:city", "city"),
)
INVALID_POSTCODE_FIELD = "addr:postcode (invalid format)"

CATEGORY_BY_AMENITY = MappingProxyType(
    {
        "cafe": PosCategory.CAFE,
        "bakery": PosCategory.BAKERY,
        "vending_machine": PosCategory.VENDING_MACHINE,
        "cafeteria": PosCategory.CAFETERIA,
        "restaurant": PosCategory.CAFETERIA,
        "fast_food": PosCategory.CAFETERIA,
    }
)
DEFAULT_CATEGORY = PosCategory.CAFE

CAMPUS_BY_POSTAL_CODE = MappingProxyType(
    {
        69115: CampusZone.BERGHEIM,
        69117: CampusZone.ALTSTADT,
        69120: CampusZone.INF,
    }
)

SUMMARY_SEPARATOR = " - "
_POSTAL_CODE_RE = re.compile(r"[+-]?[0-9]+")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def find_missing_fields(node: ExternalNode) -> list[str]:
    return [field for field, attr in REQUIRED_FIELDS if _is_blank(getattr(node, attr))]


def map_amenity_to_category(amenity: str) -> PosCategory:
    category = CATEGORY_BY_AMENITY.get(amenity.lower())
    if category is None:
        logger.warning("Unknown amenity type '%s', defaulting to %s", amenity, DEFAULT_CATEGORY.value)
        return DEFAULT_CATEGORY
    return category


def map_postal_code_to_campus(postal_code: int) -> CampusZone | None:
    campus = CAMPUS_BY_POSTAL_CODE.get(postal_code)
    if campus is None:
        logger.warning("Postal code %s does not map to any known campus, leaving campus unset", postal_code)
    return campus


def parse_postal_code(value: str) -> int | None:
    cleaned = value.strip()
    if not _POSTAL_CODE_RE.fullmatch(cleaned):
        logger.warning("Invalid postal code format: '%s'", value)
        return None
    return int(cleaned)


def capitalize_first(value: str) -> str:
    if not value:
        return value
    return value[0].upper() + value[1:]


def build_description(node: ExternalNode) -> str:
    """Summarise a node as ``<Amenity> - Hours: <opening_hours> - <website>``.

    Absent parts are skipped. A node contributing nothing gets a placeholder
    naming the source and the node id.
    """
    parts: list[str] = []
    if node.amenity is not None:
        parts.append(capitalize_first(node.amenity))
    if not _is_blank(node.opening_hours):
        parts.append(f"Hours: {node.opening_hours}")
    if not _is_blank(node.website):
        parts.append(node.website)

    description = SUMMARY_SEPARATOR.join(part for part in parts if part)
    if not description:
        return f"Imported from {OSM_SOURCE_NAME} (node {node.node_id})"
    return description


def convert_node_to_record(node: ExternalNode) -> PosRecord:
    missing_fields = find_missing_fields(node)

    postal_code = None
    if not _is_blank(node.postal_code):
        postal_code = parse_postal_code(node.postal_code)
        if postal_code is None:
            missing_fields.append(INVALID_POSTCODE_FIELD)

    if missing_fields:
        logger.warning(
            "OSM node %s is missing required fields: %s",
            node.node_id,
            missing_fields,
            extra={"stage": "convert", "node_id": node.node_id, "error_code": MissingRequiredFields.error_code},
        )
        raise MissingRequiredFields(node.node_id, missing_fields)

    category = map_amenity_to_category(node.amenity)
    campus = map_postal_code_to_campus(postal_code)
    description = build_description(node)

    logger.debug(
        "Converting OSM node %s to POS: name='%s', category=%s, campus=%s",
        node.node_id,
        node.name,
        category.value,
        campus.value if campus is not None else None,
    )
    return PosRecord(
        name=node.name,
        category=category,
        campus=campus,
        description=description,
        street=node.street,
        house_number=node.house_number,
        postal_code=postal_code,
        city=node.city,
    )
