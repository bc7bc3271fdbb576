from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

PLAIN = "plain"
JSON = "json"

# attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """
    Plain-text line for local runs. The `extra=` context the callbacks and
    providers attach (collection, data_source, cycle, ...) is appended as
    key=value pairs so dev output carries what the JSON output does.
    """

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if context:
            line += " | " + " ".join(f"{k}={v!r}" for k, v in sorted(context.items()))
        return line


def _resolve_level(level: Optional[Union[int, str]]) -> int:
    if level is None:
        level = os.getenv("CRM_BROWSER_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
) -> logging.Handler:
    """
    Route the CRM browser's logs (callbacks, providers, the /api blueprint)
    through one stderr handler on the root logger.

    Format: `force_format` ("json" or "plain"), else CRM_BROWSER_LOG_FORMAT,
    else JSON lines from python-json-logger.
    Level: `level`, else CRM_BROWSER_LOG_LEVEL, else INFO.
    """
    format_mode = (force_format or os.getenv("CRM_BROWSER_LOG_FORMAT", JSON)).lower()

    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    handler = logging.StreamHandler()
    if format_mode == PLAIN:
        handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s"))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    # calling again (dev reloader, tests) must not stack handlers
    root.handlers.clear()
    root.addHandler(handler)
    return handler
