from crm_browser.core.view_state import ASC, DESC, ViewState


def test_toggle_sort_same_column_flips_direction():
    state = ViewState("customers").toggle_sort("name")
    assert (state.sort_column, state.sort_direction) == ("name", ASC)

    state = state.toggle_sort("name")
    assert (state.sort_column, state.sort_direction) == ("name", DESC)

    state = state.toggle_sort("name")
    assert state.sort_direction == ASC


def test_toggle_sort_new_column_starts_ascending():
    state = ViewState("customers", sort_column="name", sort_direction=DESC)
    state = state.toggle_sort("status")
    assert (state.sort_column, state.sort_direction) == ("status", ASC)


def test_with_filter_and_clear():
    state = ViewState("tasks").with_filter("status", ["To Do", "Blocked"])
    assert state.filters == {"status": ["To Do", "Blocked"]}

    state = state.with_filter("status", [])
    assert state.filters == {}

    state = state.with_filter("priority", ["High"]).clear_filters()
    assert state.active_filters == {}


def test_view_state_is_immutable():
    original = ViewState("tasks")
    original.with_filter("status", ["To Do"])
    original.toggle_sort("title")
    assert original == ViewState("tasks")


def test_dict_round_trip_and_bad_direction():
    state = ViewState("sales", sort_column="amount", sort_direction=DESC, filters={"amount": ["0-1000"]})
    assert ViewState.from_dict(state.to_dict()) == state

    repaired = ViewState.from_dict({"kind": "sales", "sort_direction": "sideways", "filters": {"status": []}})
    assert repaired.sort_direction == ASC
    assert repaired.filters == {}


def test_with_search_trims_and_survives_round_trip():
    state = ViewState("customers").with_search("  acme ")
    assert state.search == "acme"
    assert ViewState.from_dict(state.to_dict()) == state
    assert state.with_search(None).search == ""
    assert ViewState.from_dict({"kind": "customers"}).search == ""
