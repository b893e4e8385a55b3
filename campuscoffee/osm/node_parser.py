"""Parse OSM API 0.6 node XML into :class:`ExternalNode` records."""

from __future__ import annotations

import logging
from xml.etree import ElementTree as ET

from campuscoffee.common.errors import ExternalNodeNotFound
from campuscoffee.common.models import ExternalNode

logger = logging.getLogger(__name__)

# OSM tag key -> ExternalNode attribute
NODE_TAG_FIELDS = {
    "name": "name",
    "amenity": "amenity",
    "addr:street": "street",
    "addr:housenumber": "house_number",
    "addr:postcode": "postal_code",
    "addr:city": "city",
    "website": "website",
    "phone": "phone",
    "opening_hours": "opening_hours",
}


def _parse_coordinate(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def extract_tags(node_element: ET.Element) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag_element in node_element.iter("tag"):
        key = tag_element.get("k")
        if key is None:
            continue
        # Duplicate keys: last occurrence wins.
        tags[key] = tag_element.get("v", "")
    logger.debug("Extracted %d tags from OSM node", len(tags))
    return tags


def parse_node_xml(node_id: int, payload: bytes) -> ExternalNode:
    try:
        root = ET.fromstring(payload)
    except (ET.ParseError, LookupError, ValueError) as exc:
        logger.error("Unparseable payload for OSM node %s: %s", node_id, exc)
        raise ExternalNodeNotFound(node_id) from exc

    node_element = root if root.tag == "node" else root.find(".//node")
    if node_element is None:
        raise ExternalNodeNotFound(node_id)

    tags = extract_tags(node_element)
    fields = {attr: tags.get(key) for key, attr in NODE_TAG_FIELDS.items()}
    return ExternalNode(
        node_id=node_id,
        latitude=_parse_coordinate(node_element.get("lat")),
        longitude=_parse_coordinate(node_element.get("lon")),
        **fields,
    )
