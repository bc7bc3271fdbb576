from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import dash
from dash import Input, Output, State
from dash.exceptions import PreventUpdate

from crm_browser.services.data_source import REAL, SOURCE_LABELS
from crm_browser.ui.ids import IDs

if TYPE_CHECKING:
    from crm_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_settings_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    sources = ctx.data_sources

    @app.callback(
        Output(IDs.Store.DATA_SOURCE, "data"),
        Input(IDs.Control.SETTINGS_SWITCH_BTN, "n_clicks"),
        State(IDs.Store.DATA_SOURCE, "data"),
        prevent_initial_call=True,
    )
    def switch_source(n_clicks: int, current: Optional[str]):
        if not n_clicks:
            raise PreventUpdate
        try:
            return sources.select(sources.toggled(current))
        except ValueError:
            logger.exception("Could not switch data source from %r", current)
            raise PreventUpdate

    @app.callback(
        Output(IDs.Control.SETTINGS_SOURCE_TEXT, "children"),
        Output(IDs.Control.SETTINGS_SWITCH_BTN, "children"),
        Output(IDs.Control.NAVBAR_SOURCE_BADGE, "children"),
        Output(IDs.Control.NAVBAR_SOURCE_BADGE, "color"),
        Input(IDs.Store.DATA_SOURCE, "data"),
    )
    def show_source(source: Optional[str]):
        label = sources.label(source)
        other = sources.toggled(source)
        button = f"Switch to {SOURCE_LABELS[other].replace('Using ', '')}"
        color = "success" if sources.resolve(source) == REAL else "info"
        saved = "changes are saved" if sources.provider(source).durable else "changes are not saved"
        return f"Currently: {label} ({saved})", button, label, color
