"""
Record schemas (pydantic) for the three record kinds.

Each kind has two models:
- a *form* model: the fields a user submits (no id / createdAt)
- a full *record* model: form fields plus id and createdAt

Models use snake_case attributes with camelCase aliases so they read and write
the same JSON shape the API and the stored files use.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import Any, Dict, Literal, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from crm_browser.core.records import CUSTOMERS, SALES, TASKS, require_collection

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

CustomerStatus = Literal["Active", "Inactive", "Pending"]
TaskStatus = Literal["To Do", "In Progress", "Completed", "Blocked"]
TaskPriority = Literal["Low", "Medium", "High", "Critical"]
SaleStatus = Literal["Completed", "Pending", "Cancelled"]


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class CustomerForm(_Schema):
    name: str = Field(min_length=2)
    email: str
    phone: str = Field(min_length=10)
    company: str = Field(min_length=2)
    status: CustomerStatus

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not EMAIL_RE.match(value):
            raise ValueError("Invalid email address")
        return value


class TaskForm(_Schema):
    title: str = Field(min_length=3)
    description: str = Field(min_length=10)
    assigned_to: str = Field(min_length=2)
    status: TaskStatus
    priority: TaskPriority
    due_date: dt.date


class SaleForm(_Schema):
    customer: str = Field(min_length=2)
    product: str = Field(min_length=2)
    amount: float = Field(ge=0)
    status: SaleStatus
    category: str = Field(min_length=2)
    date: dt.date

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_is_number(cls, value: Any) -> Any:
        # form text must not be coerced into an amount
        if isinstance(value, (str, bool)):
            raise ValueError("Amount must be a number")
        return value


class _RecordFields(_Schema):
    id: int = Field(gt=0)
    created_at: dt.date


class Customer(CustomerForm, _RecordFields):
    pass


class Task(TaskForm, _RecordFields):
    pass


class Sale(SaleForm, _RecordFields):
    pass


FORM_SCHEMAS: Dict[str, Type[_Schema]] = {
    CUSTOMERS: CustomerForm,
    TASKS: TaskForm,
    SALES: SaleForm,
}

RECORD_SCHEMAS: Dict[str, Type[_Schema]] = {
    CUSTOMERS: Customer,
    TASKS: Task,
    SALES: Sale,
}


def form_schema(kind: str) -> Type[_Schema]:
    return FORM_SCHEMAS[require_collection(kind)]


def record_schema(kind: str) -> Type[_Schema]:
    return RECORD_SCHEMAS[require_collection(kind)]


def dump(model: BaseModel) -> Dict[str, Any]:
    """JSON-shaped dict with camelCase keys and ISO dates."""
    return model.model_dump(mode="json", by_alias=True)
