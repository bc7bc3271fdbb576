from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import dash
import plotly.graph_objs as go
from dash import Input, Output, State
from dash.exceptions import PreventUpdate

from crm_browser.services.dashboard_service import DashboardData, load_dashboard
from crm_browser.services.fetch_cycle import FetchCycle, stamped_cycle, stamped_payload
from crm_browser.ui.ids import IDs
from crm_browser.ui.layout.build_layout import DASHBOARD_TAB

if TYPE_CHECKING:
    from crm_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helper: Empty/Error Figures
# -----------------------------------------------------------------------------
def _message_figure(title: str, details: Optional[str] = None) -> go.Figure:
    fig = go.Figure()
    text = title if details is None else f"{title}<br><br>{details}"
    fig.add_annotation(
        text=text,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def sales_figure(dashboard: DashboardData) -> go.Figure:
    monthly = dashboard.monthly
    if monthly is None or monthly.empty:
        return _message_figure("No sales to chart yet.")

    fig = go.Figure(
        go.Bar(
            x=monthly["month"],
            y=monthly["sales"],
            marker_color="#2c3e50",
            hovertemplate="%{x}<br>$%{y:,.2f}<extra></extra>",
        )
    )
    fig.update_layout(
        margin=dict(l=40, r=20, t=20, b=40),
        yaxis_title="Sales ($)",
        yaxis_tickprefix="$",
        plot_bgcolor="white",
    )
    return fig


def dashboard_outputs(dashboard: DashboardData) -> list:
    """Stat texts, chart, error flag and error text for a loaded dashboard."""
    if dashboard.error:
        return ["-", "-", "-", _message_figure("Sales data unavailable."), True, dashboard.error]

    stats = dashboard.stats
    return [
        f"{stats.active_customers:,}",
        f"{stats.completed_tasks:,}",
        f"${stats.total_sales:,.2f}",
        sales_figure(dashboard),
        False,
        None,
    ]


def register_dashboard_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    @app.callback(
        Output(IDs.Store.DASHBOARD_FETCH_CYCLE, "data"),
        Input(IDs.Control.PAGE_TABS, "value"),
        Input(IDs.Control.DASHBOARD_RETRY_BTN, "n_clicks"),
        State(IDs.Store.DASHBOARD_FETCH_CYCLE, "data"),
    )
    def track_dashboard_cycle(tab: str, _retry: int, cycle_data: Optional[dict]):
        current = FetchCycle.from_dict(cycle_data)
        if tab != DASHBOARD_TAB:
            if not current.live:
                raise PreventUpdate
            return current.release().to_dict()
        return current.begin().to_dict()

    @app.callback(
        Output(IDs.Store.DASHBOARD_FETCHED, "data"),
        Input(IDs.Store.DASHBOARD_FETCH_CYCLE, "data"),
        State(IDs.Store.DATA_SOURCE, "data"),
        prevent_initial_call=True,
    )
    def load_dashboard_data(cycle_data: Optional[dict], source: Optional[str]):
        current = FetchCycle.from_dict(cycle_data)
        if not current.live:
            raise PreventUpdate
        provider = ctx.data_sources.provider(source)
        return current.stamp(load_dashboard(provider).to_dict())

    @app.callback(
        output=[
            Output(IDs.Control.DASHBOARD_ACTIVE_CUSTOMERS, "children"),
            Output(IDs.Control.DASHBOARD_COMPLETED_TASKS, "children"),
            Output(IDs.Control.DASHBOARD_TOTAL_SALES, "children"),
            Output(IDs.Control.DASHBOARD_GRAPH, "figure"),
            Output(IDs.Control.DASHBOARD_ERROR, "is_open"),
            Output(IDs.Control.DASHBOARD_ERROR_TEXT, "children"),
        ],
        inputs=[Input(IDs.Store.DASHBOARD_FETCHED, "data")],
        state=[State(IDs.Store.DASHBOARD_FETCH_CYCLE, "data")],
        prevent_initial_call=True,
    )
    def render_dashboard(fetched: Optional[dict], cycle_data: Optional[dict]):
        cycle = stamped_cycle(fetched)
        if not FetchCycle.from_dict(cycle_data).accepts(cycle):
            logger.info("dashboard_load_discarded", extra={"cycle": cycle})
            raise PreventUpdate
        return dashboard_outputs(DashboardData.from_dict(stamped_payload(fetched)))
