"""
Top-level package for the CRM browser.

This package exposes the core architecture (records, view engine, data sources,
UI adapters). Most code should import from submodules such as:
    crm_browser.core
    crm_browser.services
    crm_browser.ui
"""

__all__: list[str] = []
