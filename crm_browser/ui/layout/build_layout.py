from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from crm_browser.core.records import COLLECTIONS
from crm_browser.core.view_state import ViewState
from crm_browser.ui.ids import IDs, record_ids
from crm_browser.ui.layout.build_dashboard_panel import build_dashboard_panel
from crm_browser.ui.layout.build_navbar import build_navbar
from crm_browser.ui.layout.build_records_panel import build_records_panel
from crm_browser.ui.layout.build_settings_panel import build_settings_panel

if TYPE_CHECKING:
    from crm_browser.ui.config import AppConfig

DASHBOARD_TAB = "dashboard"
SETTINGS_TAB = "settings"


def _record_stores(kind: str) -> list:
    ids = record_ids(kind)
    return [
        dcc.Store(id=ids.records, storage_type="memory"),
        dcc.Store(id=ids.view_state, storage_type="memory", data=ViewState(kind).to_dict()),
        dcc.Store(id=ids.selected, storage_type="memory"),
        dcc.Store(id=ids.form_mode, storage_type="memory"),
        # per-tab load cycle and the last result stamped with its cycle
        dcc.Store(id=ids.fetch_cycle, storage_type="memory"),
        dcc.Store(id=ids.fetched, storage_type="memory"),
    ]


def build_layout(ctx: AppConfig):
    navbar = build_navbar(ctx.global_config)

    stores = [
        # Selected data source survives reloads; read as State so switching
        # does not refetch views that are already showing.
        dcc.Store(
            id=IDs.Store.DATA_SOURCE,
            storage_type="local",
            data=ctx.data_sources.default,
        ),
        dcc.Store(id=IDs.Store.DASHBOARD_FETCH_CYCLE, storage_type="memory"),
        dcc.Store(id=IDs.Store.DASHBOARD_FETCHED, storage_type="memory"),
    ]
    for kind in COLLECTIONS:
        stores.extend(_record_stores(kind))

    tabs = [dcc.Tab(label="Dashboard", value=DASHBOARD_TAB, children=[build_dashboard_panel()])]
    tabs.extend(
        dcc.Tab(label=kind.capitalize(), value=kind, children=[build_records_panel(kind)])
        for kind in COLLECTIONS
    )
    tabs.append(dcc.Tab(label="Settings", value=SETTINGS_TAB, children=[build_settings_panel()]))

    return dbc.Container(
        fluid=True,
        className="crm-root",
        children=[
            navbar,
            *stores,
            dcc.Tabs(id=IDs.Control.PAGE_TABS, value=DASHBOARD_TAB, children=tabs, className="mt-2"),
        ],
    )
