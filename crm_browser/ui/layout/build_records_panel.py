from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html, dcc

from crm_browser.core.columns import filterable_columns, searchable_columns, table_columns
from crm_browser.core.records import singular
from crm_browser.ui.forms import SELECT, TEXTAREA, FormField, form_fields
from crm_browser.ui.ids import filter_select_id, form_field_id, record_ids, sort_button_id


def _filter_card(kind: str) -> dbc.Card:
    ids = record_ids(kind)
    cols = []
    searched = ", ".join(s.label.lower() for s in searchable_columns(kind))
    cols.append(
        dbc.Col(
            [
                html.Label("Search", className="form-label"),
                dbc.Input(
                    id=ids.search_input,
                    type="search",
                    placeholder=f"Search {searched}",
                    debounce=True,
                    className="mb-2",
                ),
            ],
            md=3,
        )
    )
    for spec in filterable_columns(kind):
        cols.append(
            dbc.Col(
                [
                    html.Label(spec.label, className="form-label"),
                    dcc.Dropdown(
                        id=filter_select_id(kind, spec.field),
                        options=[o.to_dropdown() for o in spec.options],
                        multi=True,
                        placeholder=f"All {spec.label.lower()}",
                        className="mb-2",
                    ),
                ],
                md=3,
            )
        )
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Span("Filters", className="fw-semibold"),
                        dbc.Button(
                            "Clear filters",
                            id=ids.clear_filters_btn,
                            color="link",
                            size="sm",
                            className="ms-auto p-0",
                        ),
                    ],
                    className="d-flex align-items-center",
                )
            ),
            dbc.CardBody(dbc.Row(cols, className="gx-3")),
        ],
        className="mt-3",
    )


def _table(kind: str) -> dbc.Table:
    ids = record_ids(kind)
    header_cells = [
        html.Th(
            dbc.Button(
                spec.label,
                id=sort_button_id(kind, spec.field),
                color="link",
                size="sm",
                className="p-0 fw-semibold text-decoration-none",
            )
        )
        for spec in table_columns(kind)
    ]
    header_cells.append(html.Th("Actions", className="text-end"))
    return dbc.Table(
        [
            html.Thead(html.Tr(header_cells)),
            html.Tbody(id=ids.table_body),
        ],
        hover=True,
        responsive=True,
        size="sm",
        className="mb-0",
    )


def _form_input(kind: str, f: FormField):
    input_id = form_field_id(kind, f.name)
    if f.input_type == SELECT:
        return dbc.Select(
            id=input_id,
            options=[{"label": c, "value": c} for c in f.choices],
            value=f.default,
        )
    if f.input_type == TEXTAREA:
        return dbc.Textarea(id=input_id, rows=3)
    return dbc.Input(id=input_id, type=f.input_type)


def _detail_modal(kind: str) -> dbc.Modal:
    ids = record_ids(kind)
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(id=ids.detail_title), close_button=False),
            dbc.ModalBody(id=ids.detail_body),
            dbc.ModalFooter(
                [
                    dbc.Button("Previous", id=ids.prev_btn, color="secondary", outline=True, size="sm"),
                    dbc.Button("Next", id=ids.next_btn, color="secondary", outline=True, size="sm"),
                    dbc.Button("Close", id=ids.close_btn, color="primary", size="sm", className="ms-auto"),
                ]
            ),
        ],
        id=ids.detail_modal,
        is_open=False,
        size="lg",
    )


def _form_modal(kind: str) -> dbc.Modal:
    ids = record_ids(kind)
    rows = [
        html.Div(
            [
                dbc.Label(f.label, html_for=form_field_id(kind, f.name)),
                _form_input(kind, f),
            ],
            className="mb-2",
        )
        for f in form_fields(kind)
    ]
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(id=ids.form_title)),
            dbc.ModalBody([html.Div(id=ids.form_error, className="mb-2"), *rows]),
            dbc.ModalFooter(
                [
                    dbc.Button("Cancel", id=ids.cancel_btn, color="secondary", outline=True, size="sm"),
                    dbc.Button("Save", id=ids.submit_btn, color="primary", size="sm"),
                ]
            ),
        ],
        id=ids.form_modal,
        is_open=False,
    )


def build_records_panel(kind: str) -> dbc.Container:
    """
    List page for one record kind:

    - toolbar (add / refresh) and record count
    - free-text search and a filter dropdown for each filterable column
    - sortable table with per-row view / edit / delete
    - detail dialog with previous / next navigation, and the add/edit form
    """
    ids = record_ids(kind)
    label = kind.capitalize()

    toolbar = html.Div(
        [
            html.H4(label, className="mb-0 me-3"),
            html.Span(id=ids.count_text, className="text-muted small"),
            html.Div(
                [
                    dbc.Button("Refresh", id=ids.refresh_btn, color="secondary", outline=True, size="sm", className="me-2"),
                    dbc.Button(f"Add {singular(kind).capitalize()}", id=ids.add_btn, color="primary", size="sm"),
                ],
                className="ms-auto",
            ),
        ],
        className="d-flex align-items-center mt-3",
    )

    load_error = dbc.Alert(
        [
            html.Span(id=ids.load_error_text, className="me-3"),
            dbc.Button("Try again", id=ids.retry_btn, color="danger", size="sm"),
        ],
        id=ids.load_error,
        color="danger",
        is_open=False,
        className="mt-3",
    )

    return dbc.Container(
        fluid=True,
        children=[
            toolbar,
            load_error,
            html.Div(id=ids.action_error, className="mt-2"),
            _filter_card(kind),
            dbc.Card(dbc.CardBody(dcc.Loading(_table(kind)), className="p-2"), className="mt-3"),
            _detail_modal(kind),
            _form_modal(kind),
        ],
    )
