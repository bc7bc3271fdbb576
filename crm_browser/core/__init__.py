"""
Core domain layer: record kinds and schemas, the column table, view state and
the list view engine.
"""

from .columns import ColumnSpec, FilterOption, columns_for
from .view_engine import apply_filters, apply_search, apply_sort, apply_view_state, navigate_adjacent
from .view_state import ViewState

__all__ = [
    "ColumnSpec",
    "FilterOption",
    "ViewState",
    "apply_filters",
    "apply_search",
    "apply_sort",
    "apply_view_state",
    "columns_for",
    "navigate_adjacent",
]
