from crm_browser.core.columns import (
    DATE,
    EXACT,
    NUMBER,
    RANGE,
    RELATIVE_DATE,
    column_spec,
    columns_for,
    filter_options,
    filterable_columns,
    searchable_columns,
    table_columns,
)


def test_every_kind_has_an_id_column_hidden_from_the_table():
    for kind in ("customers", "tasks", "sales"):
        assert column_spec(kind, "id").value_type == NUMBER
        assert "id" not in [c.field for c in table_columns(kind)]
        assert [c.field for c in columns_for(kind)].count("id") == 1


def test_match_policies():
    assert column_spec("sales", "amount").match_policy == RANGE
    assert column_spec("sales", "date").match_policy == RELATIVE_DATE
    assert column_spec("sales", "date").value_type == DATE
    assert column_spec("tasks", "priority").match_policy == EXACT
    assert column_spec("customers", "name").filterable is False
    assert column_spec("customers", "nope") is None


def test_filterable_columns_for_tasks():
    fields = [c.field for c in filterable_columns("tasks")]
    assert fields == ["assignedTo", "status", "priority", "dueDate", "createdAt"]


def test_fixed_options_win_over_observed_values():
    spec = column_spec("customers", "status")
    values = [o.value for o in filter_options(spec, [{"status": "Weird"}])]
    assert values == ["Active", "Inactive", "Pending"]


def test_observed_options_are_distinct_and_sorted():
    spec = column_spec("tasks", "assignedTo")
    records = [
        {"assignedTo": "bob"},
        {"assignedTo": "Alice"},
        {"assignedTo": "bob"},
        {"assignedTo": None},
        {},
    ]
    options = filter_options(spec, records)
    assert [o.value for o in options] == ["Alice", "bob"]
    assert options[0].to_dropdown() == {"label": "Alice", "value": "Alice"}


def test_searchable_columns():
    assert [c.field for c in searchable_columns("customers")] == ["name", "email", "company"]
    assert [c.field for c in searchable_columns("tasks")] == ["title", "description", "assignedTo"]
    assert [c.field for c in searchable_columns("sales")] == ["customer", "product"]
