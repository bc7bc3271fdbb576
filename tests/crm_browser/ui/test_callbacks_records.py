from dash import html

from crm_browser.core.columns import columns_for, table_columns
from crm_browser.core.view_state import ViewState
from crm_browser.ui.callbacks.callbacks_records import _detail_body, _detail_title, _sort_labels, _table_rows
from crm_browser.ui.ids import ROW_DELETE, ROW_EDIT, ROW_VIEW, row_action_id

CUSTOMER = {
    "id": 5,
    "name": "John Smith",
    "email": "john@acme.com",
    "phone": "555-010-0100",
    "company": "Acme Corp",
    "status": "Active",
    "createdAt": "2024-06-01",
}


def test_table_rows_render_cells_and_row_actions():
    rows = _table_rows("customers", [CUSTOMER, {**CUSTOMER, "id": 6, "name": "Jane Doe"}])
    assert len(rows) == 2

    cells = rows[0].children
    assert len(cells) == len(table_columns("customers")) + 1
    assert cells[0].children == "John Smith"

    buttons = cells[-1].children.children
    assert [b.id for b in buttons] == [
        row_action_id("customers", ROW_VIEW, 5),
        row_action_id("customers", ROW_EDIT, 5),
        row_action_id("customers", ROW_DELETE, 5),
    ]


def test_table_rows_for_every_kind():
    sale = {"id": 1, "customer": "Acme", "product": "Widget", "category": "Hardware",
            "amount": 1200.5, "date": "2024-06-01", "status": "Completed"}
    task = {"id": 2, "title": "Call back", "assignedTo": "Jane", "status": "To Do",
            "priority": "High", "dueDate": "2024-06-20"}
    assert len(_table_rows("sales", [sale])[0].children) == len(table_columns("sales")) + 1
    assert len(_table_rows("tasks", [task])[0].children) == len(table_columns("tasks")) + 1


def test_record_without_id_gets_no_actions():
    row = _table_rows("customers", [{"name": "Ghost"}])[0]
    actions = row.children[-1]
    assert isinstance(actions, html.Td)
    assert actions.to_plotly_json()["props"].get("children") is None


def test_empty_table_shows_message():
    rows = _table_rows("tasks", [])
    assert len(rows) == 1
    assert rows[0].children.children == "No tasks to show."
    assert rows[0].children.colSpan == len(table_columns("tasks")) + 1


def test_sort_labels_mark_the_sorted_column():
    labels = _sort_labels("customers", ViewState("customers", sort_column="name"))
    assert labels[0] == "Name ▲"
    assert "Email" in labels

    desc = _sort_labels("customers", ViewState("customers", sort_column="name", sort_direction="desc"))
    assert desc[0] == "Name ▼"


def test_detail_body_lists_every_field():
    body = _detail_body("customers", CUSTOMER)
    assert len(body.children) == 2 * len(columns_for("customers"))
    labels = [item.children for item in body.children[::2]]
    assert labels[:2] == ["ID", "Name"]


def test_detail_title_prefers_name_then_falls_back_to_id():
    assert _detail_title("customers", CUSTOMER) == "John Smith"
    assert _detail_title("tasks", {"id": 3, "title": "Call back"}) == "Call back"
    assert _detail_title("sales", {"id": 4, "product": "Widget"}) == "Widget"
    assert _detail_title("customers", {"id": 9}) == "Customer 9"
