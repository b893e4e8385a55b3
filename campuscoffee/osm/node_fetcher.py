"""Single-node lookup against the OpenStreetMap API."""

from __future__ import annotations

import logging

from campuscoffee.common.config_loader import OsmConfig
from campuscoffee.common.constants import OSM_API_BASE_URL, USER_AGENT
from campuscoffee.common.errors import ExternalNodeNotFound
from campuscoffee.common.http import HttpClient, HttpNotFoundError, HttpRequestError, RetryConfig
from campuscoffee.common.models import ExternalNode
from campuscoffee.osm.node_parser import parse_node_xml

logger = logging.getLogger(__name__)


class OsmNodeFetcher:
    """Fetch one node per call from ``GET <base_url>/node/<id>``.

    Upstream 404s, transport failures, timeouts and unparseable payloads all
    surface as :class:`ExternalNodeNotFound`. No retry, caching or throttling.
    """

    def __init__(self, http_client: HttpClient | None = None) -> None:
        self.http_client = http_client or HttpClient(
            base_url=OSM_API_BASE_URL,
            user_agent=USER_AGENT,
            retry=RetryConfig(max_attempts=1),
        )

    @classmethod
    def from_config(cls, osm_config: OsmConfig) -> "OsmNodeFetcher":
        return cls(
            HttpClient(
                base_url=osm_config.base_url,
                user_agent=osm_config.user_agent,
                timeout=osm_config.timeout,
                retry=RetryConfig(max_attempts=1),
            )
        )

    def close(self) -> None:
        self.http_client.close()

    def fetch(self, node_id: int) -> ExternalNode:
        logger.info("Fetching OSM node %s from OpenStreetMap API", node_id, extra={"stage": "fetch", "node_id": node_id})
        try:
            payload = self.http_client.get_bytes(f"node/{node_id}")
        except HttpNotFoundError as exc:
            logger.warning("OSM node %s not found", node_id, extra={"stage": "fetch", "node_id": node_id})
            raise ExternalNodeNotFound(node_id) from exc
        except HttpRequestError as exc:
            logger.error(
                "Error fetching OSM node %s: %s",
                node_id,
                exc,
                extra={"stage": "fetch", "node_id": node_id, "error_code": exc.error_code},
            )
            raise ExternalNodeNotFound(node_id) from exc

        if not payload:
            raise ExternalNodeNotFound(node_id)

        node = parse_node_xml(node_id, payload)
        logger.info(
            "Successfully fetched OSM node %s: %s",
            node_id,
            node.name,
            extra={"stage": "fetch", "node_id": node_id, "status": "ok"},
        )
        return node
