from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ValidationError(Exception):
    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__("\n".join(_format(i) for i in issues))

    def to_details(self) -> List[Dict[str, Any]]:
        return [i.to_dict() for i in self.issues]


def _format(issue: ValidationIssue) -> str:
    if issue.field:
        return f"{issue.field}: {issue.message}"
    return f"{issue.code}: {issue.message}"
