"""
Synthetic ("demo") record generation.

Records are drawn from a seeded numpy Generator, so the same seed and count give
the same records on every call. Dates are offsets from today.
"""
from __future__ import annotations

import copy
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from crm_browser.core.records import (
    CUSTOMER_STATUSES,
    CUSTOMERS,
    SALE_STATUSES,
    SALES,
    TASK_PRIORITIES,
    TASK_STATUSES,
    TASKS,
    Record,
    require_collection,
)

DEFAULT_SEED = 123

FIRST_NAMES = (
    "Alice", "Bob", "Carmen", "David", "Elena", "Farid", "Grace", "Hiro",
    "Isabel", "Jonas", "Keiko", "Liam", "Maya", "Nikolai", "Olivia", "Pedro",
    "Quinn", "Rosa", "Samir", "Tara", "Umar", "Vera", "Wes", "Yara", "Zoe",
)
LAST_NAMES = (
    "Anderson", "Baker", "Chen", "Diaz", "Evans", "Fischer", "Garcia", "Hughes",
    "Ito", "Johnson", "Kowalski", "Lopez", "Moreau", "Nguyen", "Okafor", "Patel",
    "Rossi", "Silva", "Thompson", "Ueda", "Varga", "Walsh", "Young", "Zimmer",
)
COMPANY_SUFFIXES = ("Group", "Industries", "Labs", "Partners", "Solutions", "Systems", "& Co", "Holdings")
EMAIL_DOMAINS = ("example.com", "mail.test", "corp.example", "business.test")

PRODUCT_ADJECTIVES = ("Ergonomic", "Rustic", "Sleek", "Practical", "Refined", "Smart", "Handcrafted", "Licensed")
PRODUCT_MATERIALS = ("Steel", "Wooden", "Cotton", "Granite", "Plastic", "Bronze", "Concrete", "Frozen")
PRODUCT_NOUNS = ("Chair", "Keyboard", "Table", "Gloves", "Lamp", "Bike", "Monitor", "License", "Subscription")
SALE_CATEGORIES = ("Software", "Hardware", "Services", "Consulting", "Support")

LOREM_WORDS = (
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing", "elit",
    "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore", "et", "dolore",
    "magna", "aliqua", "enim", "ad", "minim", "veniam", "quis", "nostrud",
)


class RecordGenerator:
    """
    Seeded generator for all three record kinds.

    Every `generate` call starts a fresh numpy Generator from `seed`; the output
    only depends on (seed, kind, count, today).
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED, today: Optional[Callable[[], date]] = None):
        self.seed = seed
        self._today = today or date.today

    def generate(self, kind: str, count: int) -> List[Record]:
        builders = {
            CUSTOMERS: self._customers,
            TASKS: self._tasks,
            SALES: self._sales,
        }
        rng = np.random.default_rng(self.seed)
        return builders[require_collection(kind)](rng, int(count), self._today())

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _pick(rng: np.random.Generator, options: Sequence[str]) -> str:
        return options[int(rng.integers(len(options)))]

    def _person(self, rng: np.random.Generator) -> tuple[str, str]:
        return self._pick(rng, FIRST_NAMES), self._pick(rng, LAST_NAMES)

    def _words(self, rng: np.random.Generator, n: int) -> str:
        return " ".join(self._pick(rng, LOREM_WORDS) for _ in range(n))

    def _sentence(self, rng: np.random.Generator, low: int, high: int) -> str:
        text = self._words(rng, int(rng.integers(low, high + 1)))
        return text[0].upper() + text[1:] + "."

    @staticmethod
    def _days_from(today: date, days: int) -> str:
        return (today + timedelta(days=days)).isoformat()

    # ------------------------------------------------------------------
    # per kind
    # ------------------------------------------------------------------

    def _customers(self, rng: np.random.Generator, count: int, today: date) -> List[Record]:
        records: List[Record] = []
        for i in range(count):
            first, last = self._person(rng)
            domain = self._pick(rng, EMAIL_DOMAINS)
            area, mid = int(rng.integers(200, 999)), int(rng.integers(200, 999))
            tail = int(rng.integers(0, 10000))
            records.append(
                {
                    "id": i + 1,
                    "name": f"{first} {last}",
                    "email": f"{first.lower()}.{last.lower()}{int(rng.integers(1, 100))}@{domain}",
                    "phone": f"+1 ({area}) {mid}-{tail:04d}",
                    "company": f"{self._pick(rng, LAST_NAMES)} {self._pick(rng, COMPANY_SUFFIXES)}",
                    "status": self._pick(rng, CUSTOMER_STATUSES),
                    "createdAt": self._days_from(today, -int(rng.integers(0, 31))),
                }
            )
        return records

    def _tasks(self, rng: np.random.Generator, count: int, today: date) -> List[Record]:
        records: List[Record] = []
        for i in range(count):
            first, last = self._person(rng)
            records.append(
                {
                    "id": i + 1,
                    "title": self._sentence(rng, 3, 8),
                    "description": " ".join(self._sentence(rng, 6, 12) for _ in range(3)),
                    "assignedTo": f"{first} {last}",
                    "status": self._pick(rng, TASK_STATUSES),
                    "priority": self._pick(rng, TASK_PRIORITIES),
                    "dueDate": self._days_from(today, int(rng.integers(1, 183))),
                    "createdAt": self._days_from(today, -int(rng.integers(0, 15))),
                }
            )
        return records

    def _sales(self, rng: np.random.Generator, count: int, today: date) -> List[Record]:
        customers = self._customers(rng, 10, today)
        records: List[Record] = []
        for i in range(count):
            customer = customers[int(rng.integers(len(customers)))]
            sold_on = self._days_from(today, -int(rng.integers(0, 61)))
            product = " ".join(
                self._pick(rng, words)
                for words in (PRODUCT_ADJECTIVES, PRODUCT_MATERIALS, PRODUCT_NOUNS)
            )
            records.append(
                {
                    "id": i + 1,
                    "customer": customer["name"],
                    "product": product,
                    "amount": round(float(rng.uniform(100, 10000)), 2),
                    "status": self._pick(rng, SALE_STATUSES),
                    "category": self._pick(rng, SALE_CATEGORIES),
                    "date": sold_on,
                    "createdAt": sold_on,
                }
            )
        return records


# -------------------------------------------------------------------------
# Fallback data (used when generation fails)
# -------------------------------------------------------------------------

FALLBACK_RECORDS: Dict[str, List[Record]] = {
    CUSTOMERS: [
        {
            "id": 1,
            "name": "John Smith",
            "email": "john.smith@example.com",
            "phone": "+1 (555) 123-4567",
            "company": "Tech Solutions Inc",
            "status": "Active",
            "createdAt": "2024-05-01",
        },
        {
            "id": 2,
            "name": "Sarah Johnson",
            "email": "sarah.j@businesscorp.com",
            "phone": "+1 (555) 987-6543",
            "company": "Business Corp",
            "status": "Active",
            "createdAt": "2024-05-02",
        },
        {
            "id": 3,
            "name": "Mike Davis",
            "email": "mike.davis@startup.io",
            "phone": "+1 (555) 456-7890",
            "company": "Startup IO",
            "status": "Inactive",
            "createdAt": "2024-04-28",
        },
    ],
    TASKS: [
        {
            "id": 1,
            "title": "Follow up with new leads",
            "description": "Contact potential customers from the trade show",
            "assignedTo": "Alice Cooper",
            "status": "In Progress",
            "priority": "High",
            "dueDate": "2024-05-25",
            "createdAt": "2024-05-20",
        },
        {
            "id": 2,
            "title": "Prepare quarterly report",
            "description": "Compile sales data for Q2 presentation",
            "assignedTo": "Bob Wilson",
            "status": "To Do",
            "priority": "Medium",
            "dueDate": "2024-05-30",
            "createdAt": "2024-05-18",
        },
    ],
    SALES: [
        {
            "id": 1,
            "customer": "John Smith",
            "product": "Enterprise Software License",
            "amount": 2500.0,
            "status": "Completed",
            "category": "Software",
            "date": "2024-05-20",
            "createdAt": "2024-05-20",
        },
        {
            "id": 2,
            "customer": "Sarah Johnson",
            "product": "Consulting Services",
            "amount": 1200.0,
            "status": "Completed",
            "category": "Consulting",
            "date": "2024-05-18",
            "createdAt": "2024-05-18",
        },
    ],
}


def fallback_records(kind: str) -> List[Record]:
    return copy.deepcopy(FALLBACK_RECORDS[require_collection(kind)])
