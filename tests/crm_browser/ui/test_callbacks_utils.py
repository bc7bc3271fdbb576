from crm_browser.core.view_state import ViewState
from crm_browser.services.data_source import DataResult
from crm_browser.ui.callbacks.callbacks_utils import (
    find_record,
    remove_record,
    safe_view_state,
    try_parse_view_state,
    upsert_record,
)


def test_safe_view_state_falls_back_to_fresh_state():
    assert safe_view_state(None, "tasks") == ViewState("tasks")
    assert safe_view_state({"no_kind": True}, "tasks") == ViewState("tasks")
    assert safe_view_state(ViewState("sales").to_dict(), "tasks") == ViewState("tasks")

    stored = ViewState("tasks", sort_column="title").to_dict()
    assert safe_view_state(stored, "tasks").sort_column == "title"


def test_try_parse_view_state_rejects_non_dicts():
    assert try_parse_view_state("tasks") is None
    assert try_parse_view_state({}) is None


def test_upsert_replaces_or_prepends():
    data = DataResult(data=[{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]).to_dict()

    replaced = upsert_record(data, {"id": 2, "name": "B"})
    assert replaced["data"] == [{"id": 1, "name": "a"}, {"id": 2, "name": "B"}]

    added = upsert_record(data, {"id": 7, "name": "new"})
    assert [r["id"] for r in added["data"]] == [7, 1, 2]
    assert added["error"] is None


def test_remove_record_and_find():
    data = DataResult(data=[{"id": 1}, {"id": 2}]).to_dict()
    assert remove_record(data, 1)["data"] == [{"id": 2}]
    assert find_record([{"id": 1}, {"id": 2}], 2) == {"id": 2}
    assert find_record([], 2) is None
