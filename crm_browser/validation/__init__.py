"""
Boundary validation: pydantic schema errors mapped onto ValidationIssue lists.
"""

from .errors import ValidationError, ValidationIssue
from .record_validation import validate_create, validate_record, validate_update

__all__ = [
    "ValidationError",
    "ValidationIssue",
    "validate_create",
    "validate_record",
    "validate_update",
]
