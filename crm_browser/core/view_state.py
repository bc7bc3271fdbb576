from __future__ import annotations
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class ViewState:
    """
    The user's current list view selections for one record kind.

    Fields:

    - kind: record collection the state belongs to ("customers", ...)
    - sort_column: field currently sorted on, or None for input order
    - sort_direction: "asc" or "desc"
    - filters: column -> accepted option values; a missing or empty list means
      the column is unrestricted
    - search: free-text term matched against the searchable columns; blank
      means no search

    View state lives only in the UI (a memory dcc.Store); it is never persisted.
    """

    kind: str
    sort_column: Optional[str] = None
    sort_direction: str = ASC
    filters: Dict[str, List[str]] = field(default_factory=dict)
    search: str = ""

    def toggle_sort(self, column: str) -> ViewState:
        """Same column flips the direction; a new column starts ascending."""
        if column == self.sort_column:
            direction = DESC if self.sort_direction == ASC else ASC
            return replace(self, sort_direction=direction)
        return replace(self, sort_column=column, sort_direction=ASC)

    def with_filter(self, column: str, values: Optional[List[str]]) -> ViewState:
        filters = {k: list(v) for k, v in self.filters.items()}
        cleaned = [str(v) for v in (values or [])]
        if cleaned:
            filters[column] = cleaned
        else:
            filters.pop(column, None)
        return replace(self, filters=filters)

    def clear_filters(self) -> ViewState:
        return replace(self, filters={})

    def with_search(self, term: Optional[str]) -> ViewState:
        return replace(self, search=(term or "").strip())

    @property
    def active_filters(self) -> Dict[str, List[str]]:
        return {k: v for k, v in self.filters.items() if v}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewState:
        direction = data.get("sort_direction") or ASC
        if direction not in (ASC, DESC):
            direction = ASC
        raw_filters = data.get("filters") or {}
        return cls(
            kind=data["kind"],
            sort_column=data.get("sort_column"),
            sort_direction=direction,
            search=str(data.get("search") or "").strip(),
            filters={
                str(k): [str(v) for v in (vals or [])]
                for k, vals in raw_filters.items()
                if vals
            },
        )
