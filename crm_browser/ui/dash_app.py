from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from crm_browser.api.routes import create_api_blueprint
from crm_browser.config.loader import load_global_config
from crm_browser.services.data_source import DEMO, REAL, DataSourceContext, GeneratorProvider, RemoteProvider
from crm_browser.services.generator import RecordGenerator
from crm_browser.services.record_store import JsonRecordStore
from crm_browser.services.storage import LocalFileSystemStorage
from crm_browser.ui.layout.build_layout import build_layout
from crm_browser.ui.callbacks.callbacks_dashboard import register_dashboard_callbacks
from crm_browser.ui.callbacks.callbacks_forms import register_form_callbacks
from crm_browser.ui.callbacks.callbacks_records import register_record_callbacks
from crm_browser.ui.callbacks.callbacks_settings import register_settings_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(
    config_root: Path | str = Path("config"),
    api_base_url: Optional[str] = None,
) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)
    if api_base_url:
        global_config = replace(global_config, api_base_url=api_base_url)

    # 2) Initialize Service Layer
    # LocalFileSystemStorage creates the directory if needed
    storage_backend = LocalFileSystemStorage(global_config.data_root)
    record_store = JsonRecordStore(storage_backend)

    generator = RecordGenerator(seed=global_config.generator.seed)
    data_sources = DataSourceContext(
        {
            DEMO: GeneratorProvider(generator, global_config.generator.counts),
            REAL: RemoteProvider(global_config.api_base_url, timeout=global_config.request_timeout),
        },
        default=global_config.default_source,
    )

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        data_sources=data_sources,
        record_store=record_store,
    )
    ctx.validate()

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
    )
    app.title = global_config.ui_title

    # JSON API for the "real" data source, served by the same Flask app
    app.server.register_blueprint(create_api_blueprint(record_store))

    app.layout = build_layout(ctx)

    # Register callbacks
    register_settings_callbacks(app, ctx)
    register_record_callbacks(app, ctx)
    register_form_callbacks(app, ctx)
    register_dashboard_callbacks(app, ctx)

    logger.info(
        "app_created",
        extra={
            "data_root": str(global_config.data_root),
            "api_base_url": global_config.api_base_url,
            "default_source": global_config.default_source,
        },
    )
    return app
