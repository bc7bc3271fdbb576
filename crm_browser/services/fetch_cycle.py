from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class FetchCycle:
    """
    Liveness of one view's load, held in a memory store of the browser tab.

    Showing the view (or refresh / retry) starts a new cycle, leaving it
    releases the cycle. A load result is stamped with the cycle it was started
    in and is only applied while that cycle is still the live one, so each
    client drops its own stale results. The underlying request is not cancelled.
    """

    cycle: int = 0
    live: bool = False

    def begin(self) -> "FetchCycle":
        return FetchCycle(cycle=self.cycle + 1, live=True)

    def release(self) -> "FetchCycle":
        return FetchCycle(cycle=self.cycle, live=False)

    def accepts(self, cycle: Any) -> bool:
        return self.live and cycle == self.cycle

    def stamp(self, payload: Any) -> Dict[str, Any]:
        """Store payload for a result fetched during this cycle."""
        return {"cycle": self.cycle, "payload": payload}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "FetchCycle":
        if not isinstance(data, dict):
            return cls()
        cycle = data.get("cycle")
        if not isinstance(cycle, int) or isinstance(cycle, bool):
            return cls()
        return cls(cycle=cycle, live=bool(data.get("live")))


def stamped_cycle(data: Optional[dict]) -> Optional[int]:
    if not isinstance(data, dict):
        return None
    return data.get("cycle")


def stamped_payload(data: Optional[dict]) -> Any:
    if not isinstance(data, dict):
        return None
    return data.get("payload")
