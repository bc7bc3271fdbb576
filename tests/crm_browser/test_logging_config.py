import logging

import pytest
from pythonjsonlogger import jsonlogger

from crm_browser.logging_config import ContextFormatter, configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_plain_format_appends_extra_context():
    formatter = ContextFormatter("%(levelname)s %(name)s %(message)s")
    record = logging.makeLogRecord(
        {
            "name": "crm_browser.ui",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "records_load_start",
            "collection": "customers",
            "cycle": 2,
        }
    )
    line = formatter.format(record)
    assert line.startswith("INFO crm_browser.ui records_load_start | ")
    assert "collection='customers'" in line
    assert "cycle=2" in line


def test_plain_format_without_context_is_unchanged():
    formatter = ContextFormatter("%(message)s")
    record = logging.makeLogRecord({"msg": "app_created"})
    assert formatter.format(record) == "app_created"


def test_configure_plain_with_level_name(root_logger):
    handler = configure_logging(level="debug", force_format="plain")
    assert root_logger.handlers == [handler]
    assert root_logger.level == logging.DEBUG
    assert isinstance(handler.formatter, ContextFormatter)


def test_configure_defaults_to_json_from_env(root_logger, monkeypatch):
    monkeypatch.delenv("CRM_BROWSER_LOG_FORMAT", raising=False)
    monkeypatch.setenv("CRM_BROWSER_LOG_LEVEL", "WARNING")
    handler = configure_logging()
    assert isinstance(handler.formatter, jsonlogger.JsonFormatter)
    assert root_logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info(root_logger):
    configure_logging(level="chatty", force_format="json")
    assert root_logger.level == logging.INFO


def test_repeated_configuration_does_not_stack_handlers(root_logger):
    configure_logging(force_format="plain")
    configure_logging(force_format="plain")
    assert len(root_logger.handlers) == 1
