import json

from dash.development.base_component import Component

from crm_browser.ui.dash_app import create_dash_app


def _config(tmp_path):
    root = tmp_path / "config"
    root.mkdir()
    (root / "global.json").write_text(
        json.dumps({"ui_title": "Test CRM", "data_root": str(tmp_path / "data")})
    )
    return root


def test_create_dash_app_wires_layout_callbacks_and_api(tmp_path):
    app = create_dash_app(_config(tmp_path), api_base_url="http://127.0.0.1:9999/api")

    assert app.title == "Test CRM"
    assert app.layout is not None
    assert len(app.callback_map) > 0

    client = app.server.test_client()
    resp = client.get("/api/customers")
    assert resp.status_code == 200
    assert resp.get_json() == []


def _layout_ids(component):
    found = []
    stack = [component]
    while stack:
        node = stack.pop()
        if isinstance(node, (list, tuple)):
            stack.extend(node)
            continue
        if not isinstance(node, Component):
            continue
        props = node.to_plotly_json()["props"]
        if props.get("id") is not None:
            cid = props["id"]
            found.append(cid if isinstance(cid, str) else json.dumps(cid, sort_keys=True))
        stack.append(props.get("children"))
    return found


def test_layout_ids_are_unique(tmp_path):
    app = create_dash_app(_config(tmp_path), api_base_url="http://127.0.0.1:9999/api")

    ids = _layout_ids(app.layout)
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    assert duplicates == []
    # form inputs and dialog controls share a kind prefix
    assert "tasks-form-title" in ids
    assert "tasks-field-title" in ids
    assert "customers-search" in ids


def test_first_request_serves_layout(tmp_path):
    app = create_dash_app(_config(tmp_path), api_base_url="http://127.0.0.1:9999/api")
    client = app.server.test_client()
    assert client.get("/_dash-layout").status_code == 200
    assert client.get("/api/tasks").status_code == 200
