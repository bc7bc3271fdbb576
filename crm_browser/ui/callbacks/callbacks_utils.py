from __future__ import annotations

import logging
from typing import Any, List, Optional

import dash

from crm_browser.core.records import Record, record_id
from crm_browser.core.view_state import ViewState
from crm_browser.services.data_source import DataResult

logger = logging.getLogger(__name__)


def try_parse_view_state(data: object) -> Optional[ViewState]:
    if not isinstance(data, dict) or not data:
        return None
    try:
        return ViewState.from_dict(data)
    except Exception:
        logger.exception("Invalid view-state: %r", data)
        return None


def safe_view_state(data: object, kind: str) -> ViewState:
    """Stored view state for `kind`, or a fresh one if the store is empty or bad."""
    state = try_parse_view_state(data)
    if state is None or state.kind != kind:
        return ViewState(kind)
    return state


def triggered_value() -> Any:
    """Value of the property that fired the current callback (None if unknown)."""
    triggered = dash.ctx.triggered
    if not triggered:
        return None
    return triggered[0].get("value")


def find_record(records: List[Record], rid: Any) -> Optional[Record]:
    return next((r for r in records if record_id(r) == rid), None)


def upsert_record(data: Optional[dict], record: Record) -> dict:
    """
    Records-store payload with `record` replacing the stored record of the same
    id, or prepended when it is new.
    """
    result = DataResult.from_dict(data)
    rid = record_id(record)
    records = list(result.data)
    for i, existing in enumerate(records):
        if record_id(existing) == rid:
            records[i] = record
            break
    else:
        records.insert(0, record)
    return DataResult(data=records).to_dict()


def remove_record(data: Optional[dict], rid: Any) -> dict:
    result = DataResult.from_dict(data)
    return DataResult(data=[r for r in result.data if record_id(r) != rid]).to_dict()
