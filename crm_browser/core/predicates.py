"""
Named filter predicates for derived (non-literal) matching.

- relative-date predicates: "last_7_days", "overdue", ... evaluated against a
  `now` snapshot taken when filters are applied
- amount bands: "0-1000" (inclusive both ends) or "10001+" (open top band)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple


def parse_instant(value: Any) -> Optional[datetime]:
    """
    Parse a stored date/datetime into a naive datetime.

    Plain ISO dates become midnight. Aware datetimes are converted to UTC and
    made naive so they compare with everything else. Anything unparseable is None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            instant = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc).replace(tzinfo=None)
    return instant


def parse_date(value: Any) -> Optional[date]:
    instant = parse_instant(value)
    return instant.date() if instant is not None else None


# -------------------------------------------------------------------------
# Relative-date predicates
# -------------------------------------------------------------------------

DatePredicate = Callable[[date, datetime], bool]


def _within_past(days: int) -> DatePredicate:
    def check(value: date, now: datetime) -> bool:
        today = now.date()
        return today - timedelta(days=days) <= value <= today
    return check


def _within_next(days: int) -> DatePredicate:
    def check(value: date, now: datetime) -> bool:
        today = now.date()
        return today <= value <= today + timedelta(days=days)
    return check


@dataclass(frozen=True)
class DateOption:
    code: str
    label: str
    check: DatePredicate


DATE_OPTIONS: Dict[str, DateOption] = {
    opt.code: opt
    for opt in (
        DateOption("today", "Today", lambda d, now: d == now.date()),
        DateOption("last_7_days", "Last 7 days", _within_past(7)),
        DateOption("last_30_days", "Last 30 days", _within_past(30)),
        DateOption("last_90_days", "Last 90 days", _within_past(90)),
        DateOption(
            "this_month",
            "This month",
            lambda d, now: (d.year, d.month) == (now.year, now.month),
        ),
        DateOption("this_year", "This year", lambda d, now: d.year == now.year),
        # due dates carry no time, so "before now" is decided per day
        DateOption("overdue", "Overdue", lambda d, now: d < now.date()),
        DateOption("due_today", "Due today", lambda d, now: d == now.date()),
        DateOption("next_7_days", "Next 7 days", _within_next(7)),
        DateOption("next_30_days", "Next 30 days", _within_next(30)),
    )
}


def date_matches(value: Any, code: str, now: datetime) -> bool:
    option = DATE_OPTIONS.get(code)
    if option is None:
        return False
    parsed = parse_date(value)
    if parsed is None:
        return False
    return option.check(parsed, now)


# -------------------------------------------------------------------------
# Numeric bands
# -------------------------------------------------------------------------

def parse_band(code: str) -> Optional[Tuple[float, Optional[float]]]:
    """
    "0-1000" -> (0.0, 1000.0); "10001+" -> (10001.0, None). Bad codes -> None.
    """
    text = str(code).strip()
    try:
        if text.endswith("+"):
            return float(text[:-1]), None
        low, high = text.split("-", 1)
        return float(low), float(high)
    except ValueError:
        return None


def band_label(code: str) -> str:
    band = parse_band(code)
    if band is None:
        return code
    low, high = band
    if high is None:
        return f"Over ${low - 1:,.0f}"
    return f"${low:,.0f} - ${high:,.0f}"


def as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def band_matches(value: Any, code: str) -> bool:
    band = parse_band(code)
    number = as_number(value)
    if band is None or number is None:
        return False
    low, high = band
    if high is None:
        return number >= low
    return low <= number <= high
