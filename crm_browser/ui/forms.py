"""
Add/edit form definitions per record kind, and conversion between form input
values and record payloads.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from crm_browser.core.records import (
    CUSTOMER_STATUSES,
    CUSTOMERS,
    SALE_STATUSES,
    SALES,
    TASK_PRIORITIES,
    TASK_STATUSES,
    TASKS,
    Record,
    require_collection,
)

TEXT = "text"
EMAIL = "email"
NUMBER = "number"
DATE = "date"
SELECT = "select"
TEXTAREA = "textarea"


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    input_type: str = TEXT
    choices: Tuple[str, ...] = ()

    @property
    def default(self) -> Optional[str]:
        return self.choices[0] if self.choices else None


FORM_FIELDS: Dict[str, Tuple[FormField, ...]] = {
    CUSTOMERS: (
        FormField("name", "Name"),
        FormField("email", "Email", EMAIL),
        FormField("phone", "Phone"),
        FormField("company", "Company"),
        FormField("status", "Status", SELECT, CUSTOMER_STATUSES),
    ),
    TASKS: (
        FormField("title", "Title"),
        FormField("description", "Description", TEXTAREA),
        FormField("assignedTo", "Assigned To"),
        FormField("status", "Status", SELECT, TASK_STATUSES),
        FormField("priority", "Priority", SELECT, TASK_PRIORITIES),
        FormField("dueDate", "Due Date", DATE),
    ),
    SALES: (
        FormField("customer", "Customer"),
        FormField("product", "Product"),
        FormField("amount", "Amount", NUMBER),
        FormField("category", "Category"),
        FormField("status", "Status", SELECT, SALE_STATUSES),
        FormField("date", "Date", DATE),
    ),
}


def form_fields(kind: str) -> Tuple[FormField, ...]:
    return FORM_FIELDS[require_collection(kind)]


def blank_values(kind: str) -> List[Any]:
    return [f.default for f in form_fields(kind)]


def values_from_record(kind: str, record: Optional[Record]) -> List[Any]:
    """Form input values (in field order) pre-filled from `record`."""
    if not record:
        return blank_values(kind)
    values: List[Any] = []
    for f in form_fields(kind):
        value = record.get(f.name)
        if f.input_type == DATE and isinstance(value, str):
            # date inputs take YYYY-MM-DD only
            value = value[:10]
        values.append(value if value is not None else f.default)
    return values


def payload_from_values(kind: str, values: Sequence[Any]) -> Record:
    """
    Build a record payload from form input values (in field order).

    Empty inputs are omitted so validation reports them as missing. Strings are
    passed through untouched; the schemas strip and check them.
    """
    payload: Record = {}
    for f, value in zip(form_fields(kind), values):
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        if f.input_type == NUMBER and isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                pass
        payload[f.name] = value
    return payload
