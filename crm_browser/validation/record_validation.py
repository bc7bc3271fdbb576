from __future__ import annotations

from typing import Any, List, Mapping

from pydantic import ValidationError as PydanticValidationError

from crm_browser.core.records import Record, singular
from crm_browser.core.schemas import dump, form_schema, record_schema
from crm_browser.validation.errors import ValidationError, ValidationIssue

IMMUTABLE_FIELDS = ("id", "createdAt")


def issues_from_pydantic(exc: PydanticValidationError) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        issues.append(
            ValidationIssue(
                code=str(err.get("type", "invalid")),
                message=str(err.get("msg", "Invalid value")),
                field=loc or None,
            )
        )
    return issues


def _require_object(kind: str, payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError(
            [ValidationIssue("PAYLOAD_TYPE", f"{singular(kind).capitalize()} data must be a JSON object.")]
        )
    return payload


def validate_create(kind: str, payload: Any) -> Record:
    """
    Validate a submitted form body for `kind`.

    Returns the cleaned form fields (camelCase, JSON types). id / createdAt in the
    payload are ignored; the caller assigns them.

    Raises:
        ValidationError: with one issue per failing field
    """
    body = _require_object(kind, payload)
    try:
        model = form_schema(kind).model_validate(dict(body))
    except PydanticValidationError as e:
        raise ValidationError(issues_from_pydantic(e)) from e
    return dump(model)


def validate_record(kind: str, record: Any) -> Record:
    """Validate a complete stored record (form fields plus id and createdAt)."""
    body = _require_object(kind, record)
    try:
        model = record_schema(kind).model_validate(dict(body))
    except PydanticValidationError as e:
        raise ValidationError(issues_from_pydantic(e)) from e
    return dump(model)


def validate_update(kind: str, existing: Record, changes: Any) -> Record:
    """
    Merge a partial update onto `existing` and re-validate the result.

    id and createdAt always come from `existing`, whatever `changes` holds.
    """
    body = _require_object(kind, changes)
    merged = {**existing, **body}
    for key in IMMUTABLE_FIELDS:
        if key in existing:
            merged[key] = existing[key]
    return validate_record(kind, merged)
