from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from crm_browser.ui.ids import IDs


def build_settings_panel() -> dbc.Container:
    card = dbc.Card(
        [
            dbc.CardHeader("Data Source", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.P(
                        "Demo data is generated on every load and changes are not kept. "
                        "Real data is read from and written to the CRM API.",
                        className="text-muted small",
                    ),
                    html.Div(id=IDs.Control.SETTINGS_SOURCE_TEXT, className="mb-3 fw-semibold"),
                    dbc.Button(id=IDs.Control.SETTINGS_SWITCH_BTN, color="primary", size="sm"),
                ]
            ),
        ],
        className="mt-3",
    )
    return dbc.Container(fluid=True, children=[dbc.Row(dbc.Col(card, md=6))])
