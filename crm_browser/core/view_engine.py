"""
List view engine: filter -> sort -> render order, plus adjacent navigation.

Everything here is pure and total: records are plain mappings, a missing field
is treated as null, and nothing raises on odd values.
"""
from __future__ import annotations

import locale
import logging
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from crm_browser.core.columns import (
    DATE,
    EXACT,
    NUMBER,
    RANGE,
    RELATIVE_DATE,
    ColumnSpec,
    column_spec,
    searchable_columns,
)
from crm_browser.core.predicates import as_number, band_matches, date_matches, parse_instant
from crm_browser.core.records import Record, record_id
from crm_browser.core.view_state import DESC, ViewState

logger = logging.getLogger(__name__)

PREVIOUS = "previous"
NEXT = "next"


# -------------------------------------------------------------------------
# Filtering
# -------------------------------------------------------------------------

def _natural_str(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _matches(record: Record, spec: ColumnSpec, accepted: Sequence[str], now: datetime) -> bool:
    value = record.get(spec.field)
    if spec.match_policy == RELATIVE_DATE:
        return any(date_matches(value, code, now) for code in accepted)
    if spec.match_policy == RANGE:
        return any(band_matches(value, code) for code in accepted)
    if value is None:
        return False
    return _natural_str(value) in set(accepted)


def apply_filters(
    records: Iterable[Record],
    filter_map: Mapping[str, Iterable[str]],
    kind: str,
    now: Optional[datetime] = None,
) -> List[Record]:
    """
    Keep the records that satisfy every active column filter (AND across
    columns, OR across the selected options of one column).

    Relative-date options are evaluated against `now` (wall-clock time when
    omitted). Columns that are unknown or not filterable for `kind` are ignored.
    """
    now = now or datetime.now()

    active: List[Tuple[ColumnSpec, List[str]]] = []
    for column, values in (filter_map or {}).items():
        accepted = [str(v) for v in (values or [])]
        if not accepted:
            continue
        spec = column_spec(kind, column)
        if spec is None or spec.match_policy not in (EXACT, RANGE, RELATIVE_DATE):
            continue
        active.append((spec, accepted))

    if not active:
        return list(records)

    return [
        r for r in records
        if all(_matches(r, spec, accepted, now) for spec, accepted in active)
    ]


def apply_search(records: Iterable[Record], term: Optional[str], kind: str) -> List[Record]:
    """
    Keep the records where any searchable column of `kind` contains `term`
    (case-insensitive substring). A blank term keeps everything.
    """
    needle = (term or "").strip().casefold()
    if not needle:
        return list(records)

    fields = [spec.field for spec in searchable_columns(kind)]
    return [
        r for r in records
        if any(
            r.get(name) is not None and needle in _natural_str(r.get(name)).casefold()
            for name in fields
        )
    ]


# -------------------------------------------------------------------------
# Sorting
# -------------------------------------------------------------------------

def use_system_collation(name: str = "") -> bool:
    """
    Set LC_COLLATE to `name` (the environment's locale when blank) so string
    columns sort in that locale's order. Without it the process stays on the C
    locale and strings compare by casefolded code point.

    Returns False and keeps the current collation if the locale is unavailable.
    """
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        logger.warning("Collation locale %r unavailable, string columns sort by code point", name)
        return False
    return True


def _string_key(value: Any) -> str:
    return locale.strxfrm(_natural_str(value).casefold())


def sort_key(value: Any, value_type: str) -> tuple:
    """
    (is_null, rank, comparable). Nulls carry is_null=1 so they land last when
    ascending and first when the sort is reversed. rank separates values that
    parsed as the column's type (0) from fallbacks compared as strings (1).
    """
    if value is None:
        return (1, 0, "")

    if value_type == NUMBER:
        number = as_number(value)
        if number is not None:
            return (0, 0, number)
        if isinstance(value, float):
            # NaN
            return (1, 0, "")
        return (0, 1, _string_key(value))

    if value_type == DATE:
        instant = parse_instant(value)
        if instant is not None:
            return (0, 0, instant)
        return (0, 1, _string_key(value))

    return (0, 0, _string_key(value))


def apply_sort(
    records: Iterable[Record],
    column: Optional[str],
    direction: str,
    kind: str,
) -> List[Record]:
    """
    Stable sort on one column. No column (or one the kind does not define)
    leaves the input order untouched.
    """
    rows = list(records)
    if not column:
        return rows
    spec = column_spec(kind, column)
    if spec is None:
        return rows

    return sorted(
        rows,
        key=lambda r: sort_key(r.get(spec.field), spec.value_type),
        reverse=direction == DESC,
    )


def apply_view_state(
    records: Iterable[Record],
    state: ViewState,
    now: Optional[datetime] = None,
) -> List[Record]:
    filtered = apply_filters(records, state.filters, state.kind, now=now)
    filtered = apply_search(filtered, state.search, state.kind)
    return apply_sort(filtered, state.sort_column, state.sort_direction, state.kind)


# -------------------------------------------------------------------------
# Navigation
# -------------------------------------------------------------------------

def navigate_adjacent(
    ordered_records: Sequence[Record],
    current_id: Any,
    direction: str,
) -> Optional[Record]:
    """
    Previous / next record of `current_id` in an already filtered and sorted
    sequence. None at either boundary or when the id is not in the sequence.
    """
    try:
        wanted = int(current_id)
    except (TypeError, ValueError):
        return None

    index = next(
        (i for i, r in enumerate(ordered_records) if record_id(r) == wanted),
        None,
    )
    if index is None:
        return None

    step = -1 if direction == PREVIOUS else 1 if direction == NEXT else 0
    if step == 0:
        return None
    target = index + step
    if target < 0 or target >= len(ordered_records):
        return None
    return ordered_records[target]
