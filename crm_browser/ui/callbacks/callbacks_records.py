from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Optional

import dash
import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, State, html
from dash.exceptions import PreventUpdate

from crm_browser.core.columns import column_spec, columns_for, filter_options, filterable_columns, table_columns
from crm_browser.core.records import COLLECTIONS, Record, record_id, singular
from crm_browser.core.view_engine import NEXT, PREVIOUS, apply_view_state, navigate_adjacent
from crm_browser.core.view_state import ASC, ViewState
from crm_browser.services.data_source import DataResult
from crm_browser.services.fetch_cycle import FetchCycle, stamped_cycle, stamped_payload
from crm_browser.ui.callbacks.callbacks_utils import find_record, safe_view_state, triggered_value
from crm_browser.ui.helpers import format_cell
from crm_browser.ui.ids import (
    IDs,
    ROW_DELETE,
    ROW_EDIT,
    ROW_VIEW,
    filter_select_id,
    record_ids,
    row_action_id,
    sort_button_id,
)

if TYPE_CHECKING:
    from crm_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Rendering helpers
# -----------------------------------------------------------------------------
def _row_actions(kind: str, rid: Optional[int]):
    if rid is None:
        return html.Td()
    return html.Td(
        dbc.ButtonGroup(
            [
                dbc.Button("View", id=row_action_id(kind, ROW_VIEW, rid), color="secondary", outline=True),
                dbc.Button("Edit", id=row_action_id(kind, ROW_EDIT, rid), color="primary", outline=True),
                dbc.Button("Delete", id=row_action_id(kind, ROW_DELETE, rid), color="danger", outline=True),
            ],
            size="sm",
        ),
        className="text-end",
    )


def _table_rows(kind: str, records: List[Record]) -> list:
    specs = table_columns(kind)
    if not records:
        return [
            html.Tr(
                html.Td(
                    f"No {kind} to show.",
                    colSpan=len(specs) + 1,
                    className="text-center text-muted py-3",
                )
            )
        ]
    return [
        html.Tr(
            [html.Td(format_cell(spec, r.get(spec.field))) for spec in specs]
            + [_row_actions(kind, record_id(r))]
        )
        for r in records
    ]


def _sort_labels(kind: str, state: ViewState) -> List[str]:
    labels = []
    for spec in table_columns(kind):
        if spec.field == state.sort_column:
            arrow = "▲" if state.sort_direction == ASC else "▼"
            labels.append(f"{spec.label} {arrow}")
        else:
            labels.append(spec.label)
    return labels


def _detail_body(kind: str, record: Record):
    items = []
    for spec in columns_for(kind):
        items.append(html.Dt(spec.label, className="col-sm-4"))
        items.append(html.Dd(format_cell(spec, record.get(spec.field)), className="col-sm-8"))
    return html.Dl(items, className="row mb-0")


def _detail_title(kind: str, record: Record) -> str:
    for name in ("name", "title", "product"):
        if column_spec(kind, name) is not None and record.get(name):
            return str(record[name])
    return f"{singular(kind).capitalize()} {record_id(record)}"


# -----------------------------------------------------------------------------
# Registration
# -----------------------------------------------------------------------------
def register_record_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    for kind in COLLECTIONS:
        _register_kind_callbacks(app, ctx, kind)


def _register_kind_callbacks(app: dash.Dash, ctx: AppConfig, kind: str) -> None:
    ids = record_ids(kind)
    sort_specs = table_columns(kind)
    filter_specs = filterable_columns(kind)
    observed_specs = [s for s in filter_specs if not s.options]

    # ---------------------------------------------------------
    # Fetch cycle: tab shown / refresh / retry start a cycle,
    # leaving the tab releases it
    # ---------------------------------------------------------
    @app.callback(
        Output(ids.fetch_cycle, "data"),
        Input(IDs.Control.PAGE_TABS, "value"),
        Input(ids.refresh_btn, "n_clicks"),
        Input(ids.retry_btn, "n_clicks"),
        State(ids.fetch_cycle, "data"),
    )
    def track_fetch_cycle(tab: str, _refresh: int, _retry: int, cycle_data: Optional[dict]):
        current = FetchCycle.from_dict(cycle_data)
        if tab != kind:
            if not current.live:
                raise PreventUpdate
            return current.release().to_dict()
        return current.begin().to_dict()

    # ---------------------------------------------------------
    # Fetch: new cycle -> stamped result
    # ---------------------------------------------------------
    @app.callback(
        Output(ids.fetched, "data"),
        Input(ids.fetch_cycle, "data"),
        State(IDs.Store.DATA_SOURCE, "data"),
        prevent_initial_call=True,
    )
    def load_records(cycle_data: Optional[dict], source: Optional[str]):
        current = FetchCycle.from_dict(cycle_data)
        if not current.live:
            raise PreventUpdate

        provider = ctx.data_sources.provider(source)
        logger.info(
            "records_load_start",
            extra={"collection": kind, "data_source": provider.name, "cycle": current.cycle},
        )
        return current.stamp(provider.list(kind).to_dict())

    # ---------------------------------------------------------
    # Stamped result -> records store, if its cycle is still live
    # ---------------------------------------------------------
    @app.callback(
        Output(ids.records, "data"),
        Input(ids.fetched, "data"),
        State(ids.fetch_cycle, "data"),
        prevent_initial_call=True,
    )
    def accept_records(fetched: Optional[dict], cycle_data: Optional[dict]):
        cycle = stamped_cycle(fetched)
        if not FetchCycle.from_dict(cycle_data).accepts(cycle):
            logger.info("records_load_discarded", extra={"collection": kind, "cycle": cycle})
            raise PreventUpdate
        return stamped_payload(fetched)

    # ---------------------------------------------------------
    # Filter options observed in the data
    # ---------------------------------------------------------
    if observed_specs:
        @app.callback(
            output=[Output(filter_select_id(kind, s.field), "options") for s in observed_specs],
            inputs=[Input(ids.records, "data")],
            prevent_initial_call=True,
        )
        def update_observed_options(records_data: Optional[dict]):
            records = DataResult.from_dict(records_data).data
            return [[o.to_dropdown() for o in filter_options(s, records)] for s in observed_specs]

    # ---------------------------------------------------------
    # Clear filters (and the search box)
    # ---------------------------------------------------------
    @app.callback(
        output=[
            Output(ids.search_input, "value"),
            *[Output(filter_select_id(kind, s.field), "value") for s in filter_specs],
        ],
        inputs=[Input(ids.clear_filters_btn, "n_clicks")],
        prevent_initial_call=True,
    )
    def clear_filters(n_clicks: int):
        if not n_clicks:
            raise PreventUpdate
        return ["", *[[] for _ in filter_specs]]

    # ---------------------------------------------------------
    # Sort headers + search + filter dropdowns -> view state
    # ---------------------------------------------------------
    @app.callback(
        output=Output(ids.view_state, "data"),
        inputs=dict(
            sort_clicks=[Input(sort_button_id(kind, s.field), "n_clicks") for s in sort_specs],
            search=Input(ids.search_input, "value"),
            filter_values=[Input(filter_select_id(kind, s.field), "value") for s in filter_specs],
        ),
        state=dict(current=State(ids.view_state, "data")),
        prevent_initial_call=True,
    )
    def update_view_state(
        sort_clicks: List[Any],
        search: Optional[str],
        filter_values: List[Any],
        current: Optional[dict],
    ):
        state = safe_view_state(current, kind).with_search(search)
        for spec, values in zip(filter_specs, filter_values):
            state = state.with_filter(spec.field, values)

        trigger = dash.ctx.triggered_id
        for spec in sort_specs:
            if trigger == sort_button_id(kind, spec.field):
                if not triggered_value():
                    raise PreventUpdate
                state = state.toggle_sort(spec.field)
                break

        logger.debug(
            "view_state_updated",
            extra={
                "collection": kind,
                "sort_column": state.sort_column,
                "sort_direction": state.sort_direction,
                "filters": state.active_filters,
                "search": state.search,
            },
        )
        return state.to_dict()

    # ---------------------------------------------------------
    # Records + view state -> table
    # ---------------------------------------------------------
    @app.callback(
        output=[
            Output(ids.table_body, "children"),
            Output(ids.count_text, "children"),
            Output(ids.load_error, "is_open"),
            Output(ids.load_error_text, "children"),
            *[Output(sort_button_id(kind, s.field), "children") for s in sort_specs],
        ],
        inputs=[Input(ids.records, "data"), Input(ids.view_state, "data")],
    )
    def render_table(records_data: Optional[dict], vs_data: Optional[dict]):
        state = safe_view_state(vs_data, kind)
        labels = _sort_labels(kind, state)

        if records_data is None:
            return [[], "Loading...", False, None, *labels]

        result = DataResult.from_dict(records_data)
        if not result.ok:
            return [[], "", True, result.error, *labels]

        visible = apply_view_state(result.data, state)
        count = f"Showing {len(visible)} of {len(result.data)} {kind}"
        return [_table_rows(kind, visible), count, False, None, *labels]

    # ---------------------------------------------------------
    # Detail dialog: view row / previous / next / close
    # ---------------------------------------------------------
    @app.callback(
        output=[
            Output(ids.detail_modal, "is_open"),
            Output(ids.detail_title, "children"),
            Output(ids.detail_body, "children"),
            Output(ids.selected, "data"),
            Output(ids.prev_btn, "disabled"),
            Output(ids.next_btn, "disabled"),
        ],
        inputs=[
            Input({"type": IDs.Pattern.ROW_ACTION, "kind": kind, "action": ROW_VIEW, "index": ALL}, "n_clicks"),
            Input(ids.prev_btn, "n_clicks"),
            Input(ids.next_btn, "n_clicks"),
            Input(ids.close_btn, "n_clicks"),
        ],
        state=[
            State(ids.records, "data"),
            State(ids.view_state, "data"),
            State(ids.selected, "data"),
        ],
        prevent_initial_call=True,
    )
    def show_detail(_views, _prev, _next, _close, records_data, vs_data, selected):
        trigger = dash.ctx.triggered_id
        if trigger is None or not triggered_value():
            raise PreventUpdate

        if trigger == ids.close_btn:
            return [False, dash.no_update, dash.no_update, None, dash.no_update, dash.no_update]

        records = DataResult.from_dict(records_data).data
        ordered = apply_view_state(records, safe_view_state(vs_data, kind))

        if trigger == ids.prev_btn:
            record = navigate_adjacent(ordered, selected, PREVIOUS)
        elif trigger == ids.next_btn:
            record = navigate_adjacent(ordered, selected, NEXT)
        else:
            record = find_record(ordered, trigger.get("index")) or find_record(records, trigger.get("index"))

        if record is None:
            raise PreventUpdate

        rid = record_id(record)
        return [
            True,
            _detail_title(kind, record),
            _detail_body(kind, record),
            rid,
            navigate_adjacent(ordered, rid, PREVIOUS) is None,
            navigate_adjacent(ordered, rid, NEXT) is None,
        ]
