from datetime import date

import pytest

from crm_browser.core.exceptions import UnknownCollectionError
from crm_browser.services.generator import FALLBACK_RECORDS, RecordGenerator, fallback_records


def _generator(seed=123):
    return RecordGenerator(seed=seed, today=lambda: date(2024, 6, 15))


@pytest.mark.parametrize("kind", ["customers", "tasks", "sales"])
def test_same_seed_same_records(kind):
    assert _generator().generate(kind, 3) == _generator().generate(kind, 3)


def test_different_seed_different_records():
    assert _generator(1).generate("customers", 5) != _generator(2).generate("customers", 5)


def test_ids_are_sequential_and_count_respected():
    records = _generator().generate("tasks", 4)
    assert [r["id"] for r in records] == [1, 2, 3, 4]
    assert _generator().generate("sales", 0) == []


def test_dates_are_relative_to_today():
    for task in _generator().generate("tasks", 20):
        assert task["dueDate"] > "2024-06-15"
        assert task["createdAt"] <= "2024-06-15"
    for sale in _generator().generate("sales", 20):
        assert "2024-04-16" <= sale["date"] <= "2024-06-15"
        assert sale["createdAt"] == sale["date"]


def test_unknown_kind():
    with pytest.raises(UnknownCollectionError):
        _generator().generate("invoices", 1)


def test_fallback_records_are_copies():
    records = fallback_records("customers")
    records[0]["name"] = "Changed"
    assert FALLBACK_RECORDS["customers"][0]["name"] == "John Smith"
