"""
Data source abstraction: two interchangeable record providers behind one
interface, and the context object that selects between them.

Providers never raise to their callers. Every failure becomes a DataResult with
`error` set (and `issues` for per-field validation problems).
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import requests

from crm_browser.core.exceptions import UnknownCollectionError
from crm_browser.core.records import Record, record_id, require_collection, singular, today_iso
from crm_browser.services.generator import RecordGenerator, fallback_records
from crm_browser.validation.errors import ValidationError, ValidationIssue
from crm_browser.validation.record_validation import validate_create, validate_record, validate_update

logger = logging.getLogger(__name__)

DEMO = "demo"
REAL = "real"

SOURCE_LABELS = {
    DEMO: "Using Demo Data",
    REAL: "Using Real Data",
}


@dataclass
class DataResult:
    """
    Uniform provider result.

    - data: records (one element for create/update, empty for delete)
    - error: user-facing failure message, None on success
    - issues: per-field validation detail when the failure was a validation one
    """
    data: List[Record] = field(default_factory=list)
    error: Optional[str] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def first(self) -> Optional[Record]:
        return self.data[0] if self.data else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": list(self.data),
            "error": self.error,
            "issues": [i.to_dict() for i in self.issues],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> DataResult:
        if not data:
            return cls()
        return cls(
            data=list(data.get("data") or []),
            error=data.get("error"),
            issues=[
                ValidationIssue(
                    code=str(i.get("code", "invalid")),
                    message=str(i.get("message", "")),
                    field=i.get("field"),
                )
                for i in (data.get("issues") or [])
                if isinstance(i, dict)
            ],
        )

    @classmethod
    def failure(cls, message: str, issues: Optional[List[ValidationIssue]] = None) -> DataResult:
        return cls(data=[], error=message, issues=list(issues or []))


class RecordProvider(ABC):
    """
    Interface shared by the ephemeral (generator) and durable (remote) providers.
    """

    name: str = ""
    durable: bool = False

    @abstractmethod
    def list(self, kind: str) -> DataResult:
        pass

    @abstractmethod
    def create(self, kind: str, payload: Mapping[str, Any]) -> DataResult:
        pass

    @abstractmethod
    def update(self, kind: str, rid: int, changes: Mapping[str, Any]) -> DataResult:
        pass

    @abstractmethod
    def delete(self, kind: str, rid: int) -> DataResult:
        pass


# -------------------------------------------------------------------------
# Ephemeral provider
# -------------------------------------------------------------------------

class GeneratorProvider(RecordProvider):
    """
    Demo data. Reads come from the seeded RecordGenerator; mutations are
    answered locally and never persisted, so they do not survive a reload.
    """

    name = DEMO
    durable = False

    MAX_RANDOM_ID = 10_000
    ID_ATTEMPTS = 100

    def __init__(
        self,
        generator: RecordGenerator,
        counts: Mapping[str, int],
        id_rng: Optional[np.random.Generator] = None,
    ):
        self.generator = generator
        self.counts = dict(counts)
        self._id_rng = id_rng or np.random.default_rng()

    def _records(self, kind: str) -> List[Record]:
        count = self.counts.get(kind, 0)
        try:
            return self.generator.generate(kind, count)
        except Exception:
            logger.warning(
                "Record generation failed; using fallback records",
                extra={"collection": kind, "count": count},
                exc_info=True,
            )
            return fallback_records(kind)

    def list(self, kind: str) -> DataResult:
        try:
            require_collection(kind)
        except UnknownCollectionError as e:
            return DataResult.failure(str(e))
        return DataResult(data=self._records(kind))

    def _unused_id(self, taken: set[int]) -> int:
        """
        Random id in [1, MAX_RANDOM_ID) not used by `taken`. Once the range is
        crowded (ID_ATTEMPTS misses in a row) the id after the largest taken one.
        """
        if len(taken) < self.MAX_RANDOM_ID - 1:
            for _ in range(self.ID_ATTEMPTS):
                candidate = int(self._id_rng.integers(1, self.MAX_RANDOM_ID))
                if candidate not in taken:
                    return candidate
        return max(taken, default=0) + 1

    def create(self, kind: str, payload: Mapping[str, Any]) -> DataResult:
        try:
            fields = validate_create(kind, payload)
        except UnknownCollectionError as e:
            return DataResult.failure(str(e))
        except ValidationError as e:
            return DataResult.failure(f"Invalid {singular(kind)} data", e.issues)

        taken = {i for i in (record_id(r) for r in self._records(kind)) if i is not None}
        record = {"id": self._unused_id(taken), **fields, "createdAt": today_iso()}
        return DataResult(data=[record])

    def update(self, kind: str, rid: int, changes: Mapping[str, Any]) -> DataResult:
        try:
            require_collection(kind)
        except UnknownCollectionError as e:
            return DataResult.failure(str(e))

        base = next((r for r in self._records(kind) if record_id(r) == rid), None)
        if base is None:
            # fabricated earlier in this session: nothing to merge onto
            base = {"id": rid, "createdAt": today_iso()}
        try:
            record = validate_update(kind, base, changes)
        except ValidationError as e:
            return DataResult.failure(f"Invalid {singular(kind)} data", e.issues)
        return DataResult(data=[record])

    def delete(self, kind: str, rid: int) -> DataResult:
        try:
            require_collection(kind)
        except UnknownCollectionError as e:
            return DataResult.failure(str(e))
        return DataResult(data=[])


# -------------------------------------------------------------------------
# Durable provider
# -------------------------------------------------------------------------

class _RemoteFailure(Exception):
    def __init__(self, message: str, issues: Optional[List[ValidationIssue]] = None):
        super().__init__(message)
        self.message = message
        self.issues = issues or []


def _issues_from_details(details: Any) -> List[ValidationIssue]:
    if not isinstance(details, list):
        return []
    return [
        ValidationIssue(
            code=str(d.get("code", "invalid")),
            message=str(d.get("message", "")),
            field=d.get("field"),
        )
        for d in details
        if isinstance(d, dict)
    ]


class RemoteProvider(RecordProvider):
    """
    Real data, read and written through the JSON API (see crm_browser.api).
    """

    name = REAL
    durable = True

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _send(self, method: str, path: str, payload: Any = None) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise _RemoteFailure(str(e) or "Failed to reach the API") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            message = f"HTTP error! status: {response.status_code}"
            issues: List[ValidationIssue] = []
            if isinstance(body, dict):
                message = str(body.get("error") or message)
                issues = _issues_from_details(body.get("details"))
            raise _RemoteFailure(message, issues)

        if body is None:
            raise _RemoteFailure(f"Malformed response from {method} {url}")
        return body

    def _call(self, kind: str, action: str, method: str, path: str, payload: Any = None) -> Any:
        try:
            return self._send(method, path, payload)
        except _RemoteFailure as e:
            logger.error(
                "API request failed",
                extra={"collection": kind, "action": action, "error": e.message},
            )
            raise

    def list(self, kind: str) -> DataResult:
        try:
            require_collection(kind)
            body = self._call(kind, "list", "GET", kind)
            if not isinstance(body, list):
                raise _RemoteFailure(f"Malformed {kind} data: expected a list")
            return DataResult(data=[validate_record(kind, r) for r in body])
        except UnknownCollectionError as e:
            return DataResult.failure(str(e))
        except ValidationError as e:
            logger.error(
                "API returned records that fail validation",
                extra={"collection": kind, "issues": [i.to_dict() for i in e.issues]},
            )
            return DataResult.failure(f"Malformed {kind} data", e.issues)
        except _RemoteFailure as e:
            return DataResult.failure(e.message, e.issues)

    def _single(self, kind: str, action: str, method: str, path: str, payload: Any) -> DataResult:
        try:
            require_collection(kind)
            body = self._call(kind, action, method, path, payload)
        except UnknownCollectionError as e:
            return DataResult.failure(str(e))
        except _RemoteFailure as e:
            return DataResult.failure(e.message, e.issues)
        if not isinstance(body, dict):
            return DataResult.failure(f"Malformed response for {action} {singular(kind)}")
        return DataResult(data=[body])

    def create(self, kind: str, payload: Mapping[str, Any]) -> DataResult:
        return self._single(kind, "create", "POST", kind, dict(payload))

    def update(self, kind: str, rid: int, changes: Mapping[str, Any]) -> DataResult:
        return self._single(kind, "update", "PUT", f"{kind}/{rid}", dict(changes))

    def delete(self, kind: str, rid: int) -> DataResult:
        try:
            require_collection(kind)
            self._call(kind, "delete", "DELETE", f"{kind}/{rid}")
        except UnknownCollectionError as e:
            return DataResult.failure(str(e))
        except _RemoteFailure as e:
            return DataResult.failure(e.message, e.issues)
        return DataResult(data=[])


# -------------------------------------------------------------------------
# Selection
# -------------------------------------------------------------------------

class DataSourceContext:
    """
    Built once at app start and passed to every data-access call site.

    The selected source itself is held client-side (a local-storage dcc.Store)
    and handed in by callers; this object validates it and maps it to a provider.
    """

    def __init__(self, providers: Mapping[str, RecordProvider], default: str = DEMO):
        if default not in providers:
            raise ValueError(f"Default data source '{default}' has no provider")
        self._providers = dict(providers)
        self.default = default

    @property
    def sources(self) -> List[str]:
        return list(self._providers)

    def select(self, source: str) -> str:
        """
        Validate an explicit user choice.

        Raises:
            ValueError: if `source` names no provider
        """
        if source not in self._providers:
            raise ValueError(f"Unknown data source '{source}'")
        logger.info("Data source selected", extra={"data_source": source})
        return source

    def resolve(self, source: Optional[str]) -> str:
        """Stored selection -> known source; stale or missing values get the default."""
        return source if source in self._providers else self.default

    def provider(self, source: Optional[str] = None) -> RecordProvider:
        return self._providers[self.resolve(source)]

    def toggled(self, source: Optional[str]) -> str:
        return REAL if self.resolve(source) == DEMO else DEMO

    def label(self, source: Optional[str]) -> str:
        resolved = self.resolve(source)
        return SOURCE_LABELS.get(resolved, resolved)
