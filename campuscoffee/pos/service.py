"""POS operations, including the OSM node import."""

from __future__ import annotations

import logging

from campuscoffee.common.errors import DuplicateName
from campuscoffee.common.models import PosRecord
from campuscoffee.osm.node_fetcher import OsmNodeFetcher
from campuscoffee.pos.converter import convert_node_to_record
from campuscoffee.pos.store import PosStore

logger = logging.getLogger(__name__)


class PosService:
    def __init__(self, store: PosStore, fetcher: OsmNodeFetcher) -> None:
        self.store = store
        self.fetcher = fetcher

    def close(self) -> None:
        self.fetcher.close()

    def clear(self) -> None:
        logger.warning("Clearing all POS data")
        self.store.clear()

    def get_all(self) -> list[PosRecord]:
        logger.debug("Retrieving all POS")
        return self.store.get_all()

    def get_by_id(self, record_id: int) -> PosRecord:
        logger.debug("Retrieving POS with ID: %s", record_id)
        return self.store.get_by_id(record_id)

    def upsert(self, record: PosRecord) -> PosRecord:
        if record.id is None:
            logger.info("Creating new POS: %s", record.name)
        else:
            logger.info("Updating POS with ID: %s", record.id)
            # Raises RecordNotFound before anything is written.
            self.store.get_by_id(record.id)
        return self._perform_upsert(record)

    def import_from_osm_node(self, node_id: int) -> PosRecord:
        """Fetch, validate and persist one OSM node as a POS.

        Raises ExternalNodeNotFound, MissingRequiredFields or DuplicateName,
        unchanged from the stage that failed. Nothing is stored unless every
        earlier stage succeeded.
        """
        logger.info("Importing POS from OpenStreetMap node %s...", node_id, extra={"node_id": node_id})
        node = self.fetcher.fetch(node_id)
        saved = self.upsert(convert_node_to_record(node))
        logger.info(
            "Successfully imported POS '%s' from OSM node %s",
            saved.name,
            node_id,
            extra={"stage": "upsert", "node_id": node_id, "record_id": saved.id, "status": "ok"},
        )
        return saved

    def _perform_upsert(self, record: PosRecord) -> PosRecord:
        try:
            saved = self.store.upsert(record)
        except DuplicateName as exc:
            logger.error(
                "Error upserting POS '%s': %s",
                record.name,
                exc,
                extra={"stage": "upsert", "error_code": exc.error_code},
            )
            raise
        logger.info("Successfully upserted POS with ID: %s", saved.id, extra={"stage": "upsert", "record_id": saved.id})
        return saved
