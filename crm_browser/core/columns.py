from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from crm_browser.core.predicates import DATE_OPTIONS, band_label
from crm_browser.core.records import (
    CUSTOMER_STATUSES,
    CUSTOMERS,
    SALE_STATUSES,
    SALES,
    TASK_PRIORITIES,
    TASK_STATUSES,
    TASKS,
    require_collection,
)

# value types (how a column sorts)
STRING = "string"
NUMBER = "number"
DATE = "date"

# match policies (how a column filters)
EXACT = "exact"
RANGE = "range"
RELATIVE_DATE = "date"


@dataclass(frozen=True)
class FilterOption:
    value: str
    label: str

    def to_dropdown(self) -> dict:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class ColumnSpec:
    """
    One entry of a record kind's column table.

    - field: wire name of the record field ("createdAt", "amount", ...)
    - label: header text
    - value_type: STRING / NUMBER / DATE, selects the sort comparison
    - match_policy: EXACT / RANGE / RELATIVE_DATE, or None if not filterable
    - options: fixed filter options; empty for EXACT columns whose options come
      from the values present in the data (see `filter_options`)
    - searchable: free-text search looks for the term in this field
    """
    field: str
    label: str
    value_type: str = STRING
    match_policy: Optional[str] = None
    options: Tuple[FilterOption, ...] = ()
    in_table: bool = True
    searchable: bool = False

    @property
    def filterable(self) -> bool:
        return self.match_policy is not None


def _enum_options(values: Tuple[str, ...]) -> Tuple[FilterOption, ...]:
    return tuple(FilterOption(v, v) for v in values)


def _date_options(*codes: str) -> Tuple[FilterOption, ...]:
    return tuple(FilterOption(c, DATE_OPTIONS[c].label) for c in codes)


AMOUNT_BANDS = ("0-1000", "1001-5000", "5001-10000", "10001+")

CREATED_AT_OPTIONS = _date_options("today", "last_7_days", "last_30_days", "this_month", "this_year")
DUE_DATE_OPTIONS = _date_options("overdue", "due_today", "next_7_days", "next_30_days")
SALE_DATE_OPTIONS = _date_options("last_7_days", "last_30_days", "last_90_days", "this_year")


COLUMNS: Dict[str, Tuple[ColumnSpec, ...]] = {
    CUSTOMERS: (
        ColumnSpec("id", "ID", NUMBER, in_table=False),
        ColumnSpec("name", "Name", searchable=True),
        ColumnSpec("email", "Email", searchable=True),
        ColumnSpec("phone", "Phone"),
        ColumnSpec("company", "Company", searchable=True),
        ColumnSpec("status", "Status", STRING, EXACT, _enum_options(CUSTOMER_STATUSES)),
        ColumnSpec("createdAt", "Created", DATE, RELATIVE_DATE, CREATED_AT_OPTIONS),
    ),
    TASKS: (
        ColumnSpec("id", "ID", NUMBER, in_table=False),
        ColumnSpec("title", "Title", searchable=True),
        ColumnSpec("description", "Description", in_table=False, searchable=True),
        ColumnSpec("assignedTo", "Assigned To", STRING, EXACT, searchable=True),
        ColumnSpec("status", "Status", STRING, EXACT, _enum_options(TASK_STATUSES)),
        ColumnSpec("priority", "Priority", STRING, EXACT, _enum_options(TASK_PRIORITIES)),
        ColumnSpec("dueDate", "Due Date", DATE, RELATIVE_DATE, DUE_DATE_OPTIONS),
        ColumnSpec("createdAt", "Created", DATE, RELATIVE_DATE, CREATED_AT_OPTIONS),
    ),
    SALES: (
        ColumnSpec("id", "ID", NUMBER, in_table=False),
        ColumnSpec("customer", "Customer", searchable=True),
        ColumnSpec("product", "Product", searchable=True),
        ColumnSpec("category", "Category", STRING, EXACT),
        ColumnSpec(
            "amount",
            "Amount",
            NUMBER,
            RANGE,
            tuple(FilterOption(b, band_label(b)) for b in AMOUNT_BANDS),
        ),
        ColumnSpec("date", "Date", DATE, RELATIVE_DATE, SALE_DATE_OPTIONS),
        ColumnSpec("status", "Status", STRING, EXACT, _enum_options(SALE_STATUSES)),
        ColumnSpec("createdAt", "Created", DATE, RELATIVE_DATE, CREATED_AT_OPTIONS, in_table=False),
    ),
}


def columns_for(kind: str) -> Tuple[ColumnSpec, ...]:
    return COLUMNS[require_collection(kind)]


def column_spec(kind: str, column: str) -> Optional[ColumnSpec]:
    for spec in columns_for(kind):
        if spec.field == column:
            return spec
    return None


def table_columns(kind: str) -> List[ColumnSpec]:
    return [c for c in columns_for(kind) if c.in_table]


def filterable_columns(kind: str) -> List[ColumnSpec]:
    return [c for c in columns_for(kind) if c.filterable]


def searchable_columns(kind: str) -> List[ColumnSpec]:
    return [c for c in columns_for(kind) if c.searchable]


def filter_options(spec: ColumnSpec, records: List[dict]) -> List[FilterOption]:
    """
    Fixed options if the column declares them, otherwise the distinct values
    present in `records` (sorted case-insensitively).
    """
    if spec.options:
        return list(spec.options)
    seen = {str(r[spec.field]) for r in records if r.get(spec.field) is not None}
    return [FilterOption(v, v) for v in sorted(seen, key=str.casefold)]
