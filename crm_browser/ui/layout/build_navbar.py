from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from crm_browser.ui.ids import IDs


def build_navbar(global_config) -> dbc.Navbar:
    title = getattr(global_config, "ui_title", "CRM Dashboard")
    subtitle = getattr(global_config, "subtitle", "Customers, tasks and sales at a glance")

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(title, className="mb-0"),
                        html.Small(subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    dbc.Badge(id=IDs.Control.NAVBAR_SOURCE_BADGE, color="info", className="fs-6"),
                    className="ms-auto",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm crm-navbar",
    )
