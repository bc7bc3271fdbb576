from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import ALL, Input, Output, State
from dash.exceptions import PreventUpdate

from crm_browser.core.records import COLLECTIONS, singular
from crm_browser.services.data_source import DataResult
from crm_browser.ui.callbacks.callbacks_utils import find_record, remove_record, triggered_value, upsert_record
from crm_browser.ui.forms import blank_values, form_fields, payload_from_values, values_from_record
from crm_browser.ui.helpers import issue_list
from crm_browser.ui.ids import IDs, ROW_DELETE, ROW_EDIT, form_field_id, record_ids

if TYPE_CHECKING:
    from crm_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

MODE_ADD = "add"
MODE_EDIT = "edit"


def register_form_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    for kind in COLLECTIONS:
        _register_kind_form_callbacks(app, ctx, kind)


def _register_kind_form_callbacks(app: dash.Dash, ctx: AppConfig, kind: str) -> None:
    ids = record_ids(kind)
    fields = form_fields(kind)
    label = singular(kind).capitalize()
    keep = [dash.no_update] * len(fields)

    # ---------------------------------------------------------
    # Add / edit dialog: open, cancel, submit
    # ---------------------------------------------------------
    @app.callback(
        output=[
            Output(ids.form_modal, "is_open"),
            Output(ids.form_title, "children"),
            Output(ids.form_mode, "data"),
            Output(ids.form_error, "children"),
            Output(ids.records, "data", allow_duplicate=True),
            *[Output(form_field_id(kind, f.name), "value") for f in fields],
        ],
        inputs=[
            Input(ids.add_btn, "n_clicks"),
            Input({"type": IDs.Pattern.ROW_ACTION, "kind": kind, "action": ROW_EDIT, "index": ALL}, "n_clicks"),
            Input(ids.submit_btn, "n_clicks"),
            Input(ids.cancel_btn, "n_clicks"),
        ],
        state=[
            State(ids.form_mode, "data"),
            State(ids.records, "data"),
            State(IDs.Store.DATA_SOURCE, "data"),
            *[State(form_field_id(kind, f.name), "value") for f in fields],
        ],
        prevent_initial_call=True,
    )
    def handle_form(_add, _edits, _submit, _cancel, mode, records_data, source, *values):
        trigger = dash.ctx.triggered_id
        if trigger is None or not triggered_value():
            raise PreventUpdate

        if trigger == ids.add_btn:
            return [True, f"Add {label}", {"mode": MODE_ADD}, None, dash.no_update, *blank_values(kind)]

        if trigger == ids.cancel_btn:
            return [False, dash.no_update, None, None, dash.no_update, *keep]

        if trigger == ids.submit_btn:
            return _submit_form(ctx, kind, mode, records_data, source, list(values), keep)

        # row "Edit" button
        rid = trigger.get("index")
        record = find_record(DataResult.from_dict(records_data).data, rid)
        if record is None:
            raise PreventUpdate
        return [
            True,
            f"Edit {label}",
            {"mode": MODE_EDIT, "id": rid},
            None,
            dash.no_update,
            *values_from_record(kind, record),
        ]

    # ---------------------------------------------------------
    # Row delete
    # ---------------------------------------------------------
    @app.callback(
        output=[
            Output(ids.records, "data", allow_duplicate=True),
            Output(ids.action_error, "children"),
        ],
        inputs=[
            Input({"type": IDs.Pattern.ROW_ACTION, "kind": kind, "action": ROW_DELETE, "index": ALL}, "n_clicks"),
        ],
        state=[
            State(ids.records, "data"),
            State(IDs.Store.DATA_SOURCE, "data"),
        ],
        prevent_initial_call=True,
    )
    def delete_record(_deletes, records_data, source):
        trigger = dash.ctx.triggered_id
        if trigger is None or not triggered_value():
            raise PreventUpdate

        rid = trigger.get("index")
        result = ctx.data_sources.provider(source).delete(kind, rid)
        if not result.ok:
            return [dash.no_update, issue_list(result.error, result.issues)]

        logger.info("record_deleted", extra={"collection": kind, "record_id": rid})
        return [remove_record(records_data, rid), None]


def _submit_form(
    ctx: AppConfig,
    kind: str,
    mode: Optional[dict],
    records_data: Optional[dict],
    source: Optional[str],
    values: list[Any],
    keep: list,
) -> list:
    """
    Send the form to the selected provider. On failure the dialog stays open with
    the error shown and the list is left as it was.
    """
    provider = ctx.data_sources.provider(source)
    payload = payload_from_values(kind, values)

    editing = isinstance(mode, dict) and mode.get("mode") == MODE_EDIT
    if editing:
        result = provider.update(kind, mode.get("id"), payload)
    else:
        result = provider.create(kind, payload)

    if not result.ok or result.first is None:
        logger.info(
            "record_save_rejected",
            extra={"collection": kind, "data_source": provider.name, "error": result.error},
        )
        return [
            dash.no_update,
            dash.no_update,
            dash.no_update,
            issue_list(result.error or "Save failed", result.issues),
            dash.no_update,
            *keep,
        ]

    logger.info(
        "record_saved",
        extra={"collection": kind, "data_source": provider.name, "editing": editing},
    )
    return [False, dash.no_update, None, None, upsert_record(records_data, result.first), *keep]
