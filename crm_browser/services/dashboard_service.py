from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from crm_browser.core.records import CUSTOMERS, SALES, TASKS, Record
from crm_browser.services.data_source import RecordProvider

logger = logging.getLogger(__name__)

MONTHLY_COLUMNS = ["month", "sales"]


@dataclass(frozen=True)
class DashboardStats:
    active_customers: int = 0
    completed_tasks: int = 0
    total_sales: float = 0.0


@dataclass
class DashboardData:
    stats: DashboardStats = field(default_factory=DashboardStats)
    monthly: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=MONTHLY_COLUMNS))
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form for a dcc.Store."""
        return {
            "stats": asdict(self.stats),
            "monthly": [
                {"month": str(m), "sales": float(s)}
                for m, s in zip(self.monthly["month"], self.monthly["sales"])
            ],
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DashboardData":
        if not isinstance(data, dict):
            return cls()
        stats = data.get("stats") or {}
        return cls(
            stats=DashboardStats(**{k: v for k, v in stats.items() if k in DashboardStats.__dataclass_fields__}),
            monthly=pd.DataFrame(data.get("monthly") or [], columns=MONTHLY_COLUMNS),
            error=data.get("error"),
        )


def compute_stats(
    customers: Sequence[Record],
    tasks: Sequence[Record],
    sales: Sequence[Record],
) -> DashboardStats:
    total = 0.0
    for s in sales:
        amount = s.get("amount")
        if isinstance(amount, (int, float)) and not isinstance(amount, bool):
            total += float(amount)

    return DashboardStats(
        active_customers=sum(1 for c in customers if c.get("status") == "Active"),
        completed_tasks=sum(1 for t in tasks if t.get("status") == "Completed"),
        total_sales=round(total, 2),
    )


def monthly_sales(sales: Sequence[Record]) -> pd.DataFrame:
    """
    Sum of sale amounts per calendar month, oldest first.

    Returns a DataFrame with columns:
        - month: short label, e.g. "May 2024"
        - sales: total amount for that month
    Sales without a parseable date or numeric amount are skipped.
    """
    if not sales:
        return pd.DataFrame(columns=MONTHLY_COLUMNS)

    df = pd.DataFrame(
        {
            "date": [s.get("date") for s in sales],
            "amount": [s.get("amount") for s in sales],
        }
    )
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")
    df = df.dropna(subset=["date", "amount"])
    if df.empty:
        return pd.DataFrame(columns=MONTHLY_COLUMNS)

    grouped = (
        df.groupby(df["date"].dt.to_period("M"))["amount"]
        .sum()
        .sort_index()
    )
    return pd.DataFrame(
        {
            "month": [p.strftime("%b %Y") for p in grouped.index],
            "sales": grouped.round(2).to_list(),
        }
    )


def load_dashboard(provider: RecordProvider) -> DashboardData:
    """
    Fetch all three collections from `provider` and summarise them.
    Any failed collection turns the whole load into an error (messages joined).
    """
    results = {kind: provider.list(kind) for kind in (CUSTOMERS, TASKS, SALES)}

    errors: List[str] = [r.error for r in results.values() if r.error]
    if errors:
        logger.error("Dashboard load failed", extra={"errors": errors, "data_source": provider.name})
        return DashboardData(error=", ".join(errors))

    sales = results[SALES].data
    return DashboardData(
        stats=compute_stats(results[CUSTOMERS].data, results[TASKS].data, sales),
        monthly=monthly_sales(sales),
    )
