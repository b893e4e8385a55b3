"""JSON-backed POS store enforcing unique record names."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from campuscoffee.common.errors import DuplicateName, RecordNotFound
from campuscoffee.common.fs import read_json, write_json
from campuscoffee.common.models import PosRecord
from campuscoffee.common.time_utils import utc_timestamp_iso

logger = logging.getLogger(__name__)


class PosStore:
    """Save-or-update gateway for POS records.

    Records without an id are created and receive the next free id; records
    with an id replace the stored record of that id. In both cases the name
    must not belong to another record. With ``path=None`` nothing is written
    to disk.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self.lock = threading.Lock()
        self.records: dict[int, PosRecord] = {}
        self.next_id = 1
        if path is not None and path.exists():
            self._load()

    def _load(self) -> None:
        payload = read_json(self.path)
        for row in payload.get("records", []):
            record = PosRecord.from_dict(row)
            self.records[record.id] = record
        self.next_id = max(int(payload.get("next_id", 1)), max(self.records, default=0) + 1)
        logger.debug("Loaded %d POS records from %s", len(self.records), self.path)

    def _flush(self, records: dict[int, PosRecord], next_id: int) -> None:
        if self.path is None:
            return
        write_json(
            self.path,
            {
                "next_id": next_id,
                "records": [records[key].to_dict() for key in sorted(records)],
            },
        )

    def _commit(self, records: dict[int, PosRecord], next_id: int) -> None:
        # Memory only changes once the write has succeeded.
        self._flush(records, next_id)
        self.records = records
        self.next_id = next_id

    def _owner_of_name(self, name: str) -> int | None:
        for record_id, record in self.records.items():
            if record.name == name:
                return record_id
        return None

    def upsert(self, record: PosRecord) -> PosRecord:
        with self.lock:
            owner = self._owner_of_name(record.name)
            if owner is not None and owner != record.id:
                raise DuplicateName(record.name)

            now = utc_timestamp_iso()
            next_id = self.next_id
            if record.id is None:
                saved = record.with_identity(next_id, created_at=now, updated_at=now)
                next_id += 1
            else:
                existing = self.records.get(record.id)
                if existing is None:
                    raise RecordNotFound(record.id)
                saved = record.with_identity(record.id, created_at=existing.created_at, updated_at=now)

            records = dict(self.records)
            records[saved.id] = saved
            self._commit(records, next_id)
            return saved

    def get_by_id(self, record_id: int) -> PosRecord:
        with self.lock:
            record = self.records.get(record_id)
        if record is None:
            raise RecordNotFound(record_id)
        return record

    def get_all(self) -> list[PosRecord]:
        with self.lock:
            return [self.records[key] for key in sorted(self.records)]

    def clear(self) -> None:
        with self.lock:
            self._commit({}, 1)
