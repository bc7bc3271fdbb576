from __future__ import annotations

from typing import Any, List, Optional

import dash_bootstrap_components as dbc
from dash import html

from crm_browser.core.columns import DATE, NUMBER, ColumnSpec
from crm_browser.core.predicates import as_number, parse_date
from crm_browser.validation.errors import ValidationIssue

STATUS_COLORS = {
    "Active": "success",
    "Inactive": "secondary",
    "To Do": "secondary",
    "In Progress": "info",
    "Completed": "success",
    "Pending": "warning",
    "Cancelled": "danger",
    "Blocked": "danger",
    "Critical": "dark",
    "High": "danger",
    "Medium": "warning",
    "Low": "secondary",
}


def format_amount(value: Any) -> str:
    number = as_number(value)
    if number is None:
        return "" if value is None else str(value)
    return f"${number:,.2f}"


def format_date(value: Any) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    return parsed.strftime("%b %d, %Y")


def format_cell(spec: ColumnSpec, value: Any):
    """Table cell content for one record field."""
    if spec.field in ("status", "priority") and value is not None:
        return dbc.Badge(str(value), color=STATUS_COLORS.get(str(value), "light"), className="fw-normal")
    if spec.value_type == NUMBER and spec.field == "amount":
        return format_amount(value)
    if spec.value_type == DATE:
        return format_date(value)
    return "" if value is None else str(value)


def issue_list(message: Optional[str], issues: List[ValidationIssue]):
    """Inline error block: the headline message plus one line per field issue."""
    if not message:
        return None
    children: list = [html.Div(message, className="fw-semibold")]
    if issues:
        children.append(
            html.Ul(
                [
                    html.Li(f"{i.field}: {i.message}" if i.field else i.message)
                    for i in issues
                ],
                className="mb-0 small",
            )
        )
    return dbc.Alert(children, color="danger", className="py-2 mb-0")
