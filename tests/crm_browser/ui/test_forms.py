from crm_browser.ui.forms import blank_values, form_fields, payload_from_values, values_from_record


def test_blank_values_preselect_first_choice():
    assert blank_values("tasks") == [None, None, None, "To Do", "Low", None]


def test_values_from_record_trims_dates():
    record = {
        "customer": "John Smith",
        "product": "Widget",
        "amount": 12.5,
        "category": "Hardware",
        "status": "Pending",
        "date": "2024-05-20T10:00:00",
    }
    assert values_from_record("sales", record) == ["John Smith", "Widget", 12.5, "Hardware", "Pending", "2024-05-20"]
    assert values_from_record("sales", None) == blank_values("sales")


def test_payload_skips_empty_inputs_and_parses_numbers():
    names = [f.name for f in form_fields("sales")]
    values = ["John Smith", "  ", "42.5", None, "Completed", "2024-05-20"]
    payload = payload_from_values("sales", values)
    assert payload == {"customer": "John Smith", "amount": 42.5, "status": "Completed", "date": "2024-05-20"}
    assert set(payload) <= set(names)
