from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from crm_browser.ui.ids import IDs


def _stat_card(title: str, value_id: str) -> dbc.Card:
    return dbc.Card(
        dbc.CardBody(
            [
                html.Div(title, className="text-muted small"),
                html.H3("-", id=value_id, className="mb-0"),
            ]
        ),
        className="h-100",
    )


def build_dashboard_panel() -> dbc.Container:
    """
    Dashboard page:

    - headline counts (active customers, completed tasks, total sales)
    - monthly sales bar chart
    - load error with a retry button
    """
    return dbc.Container(
        fluid=True,
        children=[
            dbc.Alert(
                [
                    html.Span(id=IDs.Control.DASHBOARD_ERROR_TEXT, className="me-3"),
                    dbc.Button("Try again", id=IDs.Control.DASHBOARD_RETRY_BTN, color="danger", size="sm"),
                ],
                id=IDs.Control.DASHBOARD_ERROR,
                color="danger",
                is_open=False,
                className="mt-3",
            ),
            dbc.Row(
                [
                    dbc.Col(_stat_card("Active Customers", IDs.Control.DASHBOARD_ACTIVE_CUSTOMERS), md=4),
                    dbc.Col(_stat_card("Completed Tasks", IDs.Control.DASHBOARD_COMPLETED_TASKS), md=4),
                    dbc.Col(_stat_card("Total Sales", IDs.Control.DASHBOARD_TOTAL_SALES), md=4),
                ],
                className="gx-3 mt-3",
            ),
            dbc.Card(
                [
                    dbc.CardHeader("Monthly Sales", className="fw-semibold"),
                    dbc.CardBody(
                        dcc.Loading(
                            dcc.Graph(
                                id=IDs.Control.DASHBOARD_GRAPH,
                                config={"displaylogo": False},
                                style={"height": "420px"},
                            )
                        )
                    ),
                ],
                className="mt-3",
            ),
        ],
    )
