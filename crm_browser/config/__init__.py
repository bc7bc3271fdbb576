"""
Config package for crm_browser.

Responsible for:
- config models (GlobalConfig, GeneratorConfig)
- config I/O (load_global_config)
"""

from .model import GeneratorConfig, GlobalConfig
from .loader import load_global_config

__all__ = ["GeneratorConfig", "GlobalConfig", "load_global_config"]
