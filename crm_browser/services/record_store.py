from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, Iterable, List

from crm_browser.core.exceptions import RecordNotFoundError
from crm_browser.core.records import COLLECTIONS, Record, record_id, require_collection, today_iso
from crm_browser.services.storage import StorageBackend
from crm_browser.validation.record_validation import validate_create, validate_record, validate_update

logger = logging.getLogger(__name__)


def next_id(records: Iterable[Record]) -> int:
    """max(existing ids) + 1, or 1 for an empty collection."""
    ids = [i for i in (record_id(r) for r in records) if i is not None]
    return max(ids) + 1 if ids else 1


class JsonRecordStore:
    """
    Flat JSON-file persistence: one document per collection,
    `<collection>.json` holding {"<collection>": [ ...records ]}.

    Records are validated on the way in (create/update) and on the way out
    (list/get). A missing file is an empty collection.
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage
        self._locks: Dict[str, threading.Lock] = {k: threading.Lock() for k in COLLECTIONS}

    def _path(self, kind: str) -> str:
        return f"{kind}.json"

    def _read(self, kind: str) -> List[Dict[str, Any]]:
        path = self._path(kind)
        if not self.storage.exists(path):
            return []
        data = json.loads(self.storage.read_bytes(path))
        records = data.get(kind) if isinstance(data, dict) else None
        if not isinstance(records, list):
            raise ValueError(f"{path} must hold an object with a '{kind}' array")
        return records

    def _write(self, kind: str, records: List[Dict[str, Any]]) -> None:
        payload = json.dumps({kind: records}, indent=2).encode("utf-8")
        self.storage.write_bytes(self._path(kind), payload)

    def list(self, kind: str) -> List[Record]:
        require_collection(kind)
        return [validate_record(kind, r) for r in self._read(kind)]

    def get(self, kind: str, rid: int) -> Record:
        require_collection(kind)
        for r in self._read(kind):
            if record_id(r) == rid:
                return validate_record(kind, r)
        raise RecordNotFoundError(kind, rid)

    def create(self, kind: str, payload: Any) -> Record:
        require_collection(kind)
        fields = validate_create(kind, payload)
        with self._locks[kind]:
            records = self._read(kind)
            record = validate_record(
                kind,
                {**fields, "id": next_id(records), "createdAt": today_iso()},
            )
            records.append(record)
            self._write(kind, records)

        logger.info("Record created", extra={"collection": kind, "record_id": record["id"]})
        return record

    def update(self, kind: str, rid: int, changes: Any) -> Record:
        require_collection(kind)
        with self._locks[kind]:
            records = self._read(kind)
            index = next((i for i, r in enumerate(records) if record_id(r) == rid), None)
            if index is None:
                raise RecordNotFoundError(kind, rid)
            updated = validate_update(kind, records[index], changes)
            records[index] = updated
            self._write(kind, records)

        logger.info("Record updated", extra={"collection": kind, "record_id": rid})
        return updated

    def delete(self, kind: str, rid: int) -> None:
        require_collection(kind)
        with self._locks[kind]:
            records = self._read(kind)
            remaining = [r for r in records if record_id(r) != rid]
            if len(remaining) == len(records):
                raise RecordNotFoundError(kind, rid)
            self._write(kind, remaining)

        logger.info("Record deleted", extra={"collection": kind, "record_id": rid})
