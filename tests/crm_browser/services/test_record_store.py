import json

import pytest

from crm_browser.core.exceptions import RecordNotFoundError
from crm_browser.core.records import today_iso
from crm_browser.services.record_store import JsonRecordStore, next_id
from crm_browser.services.storage import LocalFileSystemStorage
from crm_browser.validation.errors import ValidationError

CUSTOMER = {
    "name": "Grace Hopper",
    "email": "grace@navy.example",
    "phone": "+1 (555) 222-3333",
    "company": "Compilers Inc",
    "status": "Active",
}


def _store(tmp_path, customers=None):
    if customers is not None:
        (tmp_path / "customers.json").write_text(json.dumps({"customers": customers}))
    return JsonRecordStore(LocalFileSystemStorage(tmp_path))


def _stored(record_id, **overrides):
    return {**CUSTOMER, "id": record_id, "createdAt": "2024-05-01", **overrides}


def test_next_id():
    assert next_id([]) == 1
    assert next_id([{"id": 1}, {"id": 2}, {"id": 5}]) == 6
    assert next_id([{"id": "3"}, {"id": None}]) == 4


def test_missing_file_is_an_empty_collection(tmp_path):
    assert _store(tmp_path).list("customers") == []


def test_create_assigns_next_id_and_today(tmp_path):
    store = _store(tmp_path, [_stored(1), _stored(2), _stored(5)])
    record = store.create("customers", {**CUSTOMER, "id": 1})

    assert record["id"] == 6
    assert record["createdAt"] == today_iso()
    assert [r["id"] for r in store.list("customers")] == [1, 2, 5, 6]

    on_disk = json.loads((tmp_path / "customers.json").read_text())
    assert on_disk["customers"][-1]["name"] == "Grace Hopper"


def test_create_rejects_invalid_payload_without_writing(tmp_path):
    store = _store(tmp_path)
    with pytest.raises(ValidationError):
        store.create("customers", {**CUSTOMER, "email": "nope"})
    assert not (tmp_path / "customers.json").exists()


def test_update_merges_and_preserves_created_at(tmp_path):
    store = _store(tmp_path, [_stored(1)])
    updated = store.update("customers", 1, {"company": "Navy", "createdAt": "2030-01-01"})

    assert updated["company"] == "Navy"
    assert updated["createdAt"] == "2024-05-01"
    assert store.get("customers", 1) == updated


def test_missing_ids_raise_not_found(tmp_path):
    store = _store(tmp_path, [_stored(1)])
    with pytest.raises(RecordNotFoundError):
        store.get("customers", 2)
    with pytest.raises(RecordNotFoundError):
        store.update("customers", 2, {"status": "Inactive"})
    with pytest.raises(RecordNotFoundError):
        store.delete("customers", 2)


def test_delete_removes_record(tmp_path):
    store = _store(tmp_path, [_stored(1), _stored(2)])
    store.delete("customers", 1)
    assert [r["id"] for r in store.list("customers")] == [2]


def test_bad_document_shape(tmp_path):
    (tmp_path / "customers.json").write_text(json.dumps(["not", "wrapped"]))
    with pytest.raises(ValueError):
        _store(tmp_path).list("customers")


def test_invalid_stored_record_fails_validation(tmp_path):
    store = _store(tmp_path, [_stored(1, status="Unknown")])
    with pytest.raises(ValidationError):
        store.list("customers")
