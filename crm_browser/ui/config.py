from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from crm_browser.config.model import GlobalConfig
from crm_browser.services.data_source import DataSourceContext
from crm_browser.services.record_store import JsonRecordStore


@dataclass
class AppConfig:
    config_root: Path
    global_config: GlobalConfig

    data_sources: Optional[DataSourceContext] = None
    record_store: Optional[JsonRecordStore] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.data_sources is None:
            raise RuntimeError("AppConfig.data_sources must be initialized.")
        if self.record_store is None:
            raise RuntimeError("AppConfig.record_store must be initialized.")
