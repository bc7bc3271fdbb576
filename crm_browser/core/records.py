from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from crm_browser.core.exceptions import UnknownCollectionError

Record = Dict[str, Any]

CUSTOMERS = "customers"
TASKS = "tasks"
SALES = "sales"

COLLECTIONS = (CUSTOMERS, TASKS, SALES)

_SINGULAR = {
    CUSTOMERS: "customer",
    TASKS: "task",
    SALES: "sale",
}

CUSTOMER_STATUSES = ("Active", "Inactive", "Pending")
TASK_STATUSES = ("To Do", "In Progress", "Completed", "Blocked")
TASK_PRIORITIES = ("Low", "Medium", "High", "Critical")
SALE_STATUSES = ("Completed", "Pending", "Cancelled")


def require_collection(kind: str) -> str:
    """
    Return `kind` if it names a known collection.

    Raises:
        UnknownCollectionError: for anything else
    """
    if kind not in _SINGULAR:
        raise UnknownCollectionError(str(kind))
    return kind


def singular(kind: str) -> str:
    return _SINGULAR[require_collection(kind)]


def today_iso(now: Optional[datetime] = None) -> str:
    """Creation dates are stored as plain ISO dates (no time component)."""
    current = now or datetime.now()
    return current.date().isoformat()


def record_id(record: Record) -> Optional[int]:
    raw = record.get("id")
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw))
    except (TypeError, ValueError):
        return None

