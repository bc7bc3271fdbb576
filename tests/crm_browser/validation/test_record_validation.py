import pytest

from crm_browser.core.exceptions import UnknownCollectionError
from crm_browser.validation.errors import ValidationError
from crm_browser.validation.record_validation import validate_create, validate_record, validate_update


def _customer_form(**overrides):
    body = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "+1 (555) 000-1111",
        "company": "Analytical Engines",
        "status": "Active",
    }
    body.update(overrides)
    return body


def _fields(exc: ValidationError):
    return {i.field for i in exc.issues}


def test_validate_create_returns_clean_form_fields():
    fields = validate_create("customers", _customer_form(name="  Ada Lovelace  ", id=99, createdAt="2020-01-01"))
    assert fields["name"] == "Ada Lovelace"
    assert "id" not in fields
    assert "createdAt" not in fields


def test_validate_create_reports_every_bad_field():
    with pytest.raises(ValidationError) as err:
        validate_create("customers", _customer_form(name="A", email="not-an-email", status="Gone"))
    assert _fields(err.value) == {"name", "email", "status"}


def test_validate_create_missing_fields_use_camel_case_names():
    with pytest.raises(ValidationError) as err:
        validate_create("tasks", {"title": "Call back"})
    assert {"description", "assignedTo", "status", "priority", "dueDate"} <= _fields(err.value)


def test_validate_create_rejects_non_object_payload():
    with pytest.raises(ValidationError) as err:
        validate_create("sales", ["not", "an", "object"])
    assert err.value.issues[0].code == "PAYLOAD_TYPE"


def test_sale_amount_must_be_a_non_negative_number():
    base = {
        "customer": "John Smith",
        "product": "Widget",
        "status": "Completed",
        "category": "Hardware",
        "date": "2024-05-20",
    }
    assert validate_create("sales", {**base, "amount": 12})["amount"] == 12.0
    for bad in ("12", True, -1):
        with pytest.raises(ValidationError) as err:
            validate_create("sales", {**base, "amount": bad})
        assert _fields(err.value) == {"amount"}


def test_validate_record_requires_id_and_created_at():
    with pytest.raises(ValidationError) as err:
        validate_record("customers", _customer_form())
    assert _fields(err.value) == {"id", "createdAt"}

    record = validate_record("customers", {**_customer_form(), "id": 3, "createdAt": "2024-05-01"})
    assert record["id"] == 3
    assert record["createdAt"] == "2024-05-01"


def test_validate_update_keeps_id_and_created_at():
    existing = {**_customer_form(), "id": 7, "createdAt": "2024-05-01"}
    updated = validate_update("customers", existing, {"status": "Inactive", "id": 1, "createdAt": "1999-01-01"})
    assert updated["status"] == "Inactive"
    assert updated["id"] == 7
    assert updated["createdAt"] == "2024-05-01"
    assert updated["name"] == existing["name"]


def test_unknown_collection():
    with pytest.raises(UnknownCollectionError):
        validate_create("invoices", {})
