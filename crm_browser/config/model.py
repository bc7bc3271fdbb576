from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from crm_browser.core.records import CUSTOMERS, SALES, TASKS

DEFAULT_COUNTS: Dict[str, int] = {
    CUSTOMERS: 30,
    TASKS: 20,
    SALES: 30,
}


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Demo data settings.

    - seed: numpy seed; the same seed and counts give the same demo records
    - counts: number of records generated per collection
    """
    seed: Optional[int] = 123
    counts: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_COUNTS))


@dataclass
class GlobalConfig:
    ui_title: str = "CRM Dashboard"
    subtitle: str = "Customers, tasks and sales at a glance"
    data_root: Path = Path("data")
    api_base_url: str = "http://127.0.0.1:8051/api"
    default_source: str = "demo"
    request_timeout: Optional[float] = None
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
