from __future__ import annotations

from dataclasses import dataclass

__all__ = ["IDs", "RecordIds", "record_ids", "row_action_id", "sort_button_id", "filter_select_id", "form_field_id"]

ROW_VIEW = "view"
ROW_EDIT = "edit"
ROW_DELETE = "delete"


class IDs:
    class Store:
        DATA_SOURCE = "data-source"
        DASHBOARD_FETCH_CYCLE = "dashboard-fetch-cycle"
        DASHBOARD_FETCHED = "dashboard-fetched"

    class Control:
        PAGE_TABS = "page-tabs"

        # Navbar
        NAVBAR_SOURCE_BADGE = "navbar-source-badge"

        # Dashboard
        DASHBOARD_ACTIVE_CUSTOMERS = "dashboard-active-customers"
        DASHBOARD_COMPLETED_TASKS = "dashboard-completed-tasks"
        DASHBOARD_TOTAL_SALES = "dashboard-total-sales"
        DASHBOARD_GRAPH = "dashboard-sales-graph"
        DASHBOARD_ERROR = "dashboard-error"
        DASHBOARD_ERROR_TEXT = "dashboard-error-text"
        DASHBOARD_RETRY_BTN = "dashboard-retry-btn"

        # Settings
        SETTINGS_SOURCE_TEXT = "settings-source-text"
        SETTINGS_SWITCH_BTN = "settings-switch-btn"

    class Pattern:
        # pattern-matching "type" strings
        ROW_ACTION = "row-action"


@dataclass(frozen=True)
class RecordIds:
    """Component ids of one record page (customers, tasks or sales)."""
    kind: str

    def _id(self, suffix: str) -> str:
        return f"{self.kind}-{suffix}"

    # stores
    @property
    def records(self) -> str:
        return self._id("records")

    @property
    def view_state(self) -> str:
        return self._id("view-state")

    @property
    def selected(self) -> str:
        return self._id("selected-id")

    @property
    def form_mode(self) -> str:
        return self._id("form-mode")

    @property
    def fetch_cycle(self) -> str:
        return self._id("fetch-cycle")

    @property
    def fetched(self) -> str:
        return self._id("fetched")

    # list page
    @property
    def add_btn(self) -> str:
        return self._id("add-btn")

    @property
    def refresh_btn(self) -> str:
        return self._id("refresh-btn")

    @property
    def search_input(self) -> str:
        return self._id("search")

    @property
    def clear_filters_btn(self) -> str:
        return self._id("clear-filters-btn")

    @property
    def count_text(self) -> str:
        return self._id("count-text")

    @property
    def table_body(self) -> str:
        return self._id("table-body")

    @property
    def load_error(self) -> str:
        return self._id("load-error")

    @property
    def load_error_text(self) -> str:
        return self._id("load-error-text")

    @property
    def retry_btn(self) -> str:
        return self._id("retry-btn")

    @property
    def action_error(self) -> str:
        return self._id("action-error")

    # detail dialog
    @property
    def detail_modal(self) -> str:
        return self._id("detail-modal")

    @property
    def detail_title(self) -> str:
        return self._id("detail-title")

    @property
    def detail_body(self) -> str:
        return self._id("detail-body")

    @property
    def prev_btn(self) -> str:
        return self._id("prev-btn")

    @property
    def next_btn(self) -> str:
        return self._id("next-btn")

    @property
    def close_btn(self) -> str:
        return self._id("close-btn")

    # form dialog
    @property
    def form_modal(self) -> str:
        return self._id("form-modal")

    @property
    def form_title(self) -> str:
        return self._id("form-title")

    @property
    def form_error(self) -> str:
        return self._id("form-error")

    @property
    def submit_btn(self) -> str:
        return self._id("submit-btn")

    @property
    def cancel_btn(self) -> str:
        return self._id("cancel-btn")


def record_ids(kind: str) -> RecordIds:
    return RecordIds(kind)


def sort_button_id(kind: str, column: str) -> str:
    return f"{kind}-sort-{column}"


def filter_select_id(kind: str, column: str) -> str:
    return f"{kind}-filter-{column}"


def form_field_id(kind: str, field_name: str) -> str:
    return f"{kind}-field-{field_name}"


def row_action_id(kind: str, action: str, rid: int) -> dict:
    return {"type": IDs.Pattern.ROW_ACTION, "kind": kind, "action": action, "index": rid}
