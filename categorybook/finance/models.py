"""Mini README: Category and entry records plus read-only aggregations.

Structure:
    * Entry - immutable dated income/expense record.
    * Category - named, ordered collection of entries identified by id.
    * SortOption - display orderings offered for a category's entries.
    * parse_amount / build_entry - turn raw form text into entries.
    * total_income / total_expense / total_profit - per-category sums.
    * sorted_entries - non-mutating display ordering.

Nothing in this module persists or mutates the store; the helpers compute
derived view state that callers render alongside a category.
"""

from __future__ import annotations

import math
import re
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

# Plain ASCII decimal with optional sign and exponent; no separators.
_AMOUNT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def new_identifier() -> str:
    """Return a fresh random identifier for categories and entries."""

    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class Entry:
    """A single dated income/expense record belonging to one category."""

    name: str
    income: float
    expense: float
    date: date
    id: str = field(default_factory=new_identifier)

    @property
    def profit(self) -> float:
        return self.income - self.expense

    def as_dict(self) -> Dict[str, object]:
        """Export the entry with serialisable values."""

        return {
            "id": self.id,
            "name": self.name,
            "income": self.income,
            "expense": self.expense,
            "date": self.date.isoformat(),
        }


@dataclass(slots=True)
class Category:
    """User-defined grouping holding zero or more entries in insertion order."""

    name: str
    entries: List[Entry] = field(default_factory=list)
    id: str = field(default_factory=new_identifier)

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "entries": [entry.as_dict() for entry in self.entries],
        }


class SortOption(str, Enum):
    """Display orderings for a category's entries."""

    NAME = "name"
    INCOME = "income"
    EXPENSE = "expense"
    DATE = "date"

    @classmethod
    def from_str(cls, value: str) -> "SortOption":
        """Coerce arbitrary casing into a valid sort option."""

        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported sort option: {value}") from error


def parse_amount(text: str) -> Optional[float]:
    """Parse user supplied text as a finite decimal amount, ``None`` otherwise."""

    candidate = str(text).strip()
    if not _AMOUNT_PATTERN.fullmatch(candidate):
        return None
    amount = float(candidate)
    if not math.isfinite(amount):
        return None
    return amount


def build_entry(
    name: str,
    income_text: str,
    expense_text: str,
    occurred_on: date | datetime,
) -> Optional[Entry]:
    """Create an entry from form input, declining silently on unparseable numbers."""

    income = parse_amount(income_text)
    expense = parse_amount(expense_text)
    if income is None or expense is None:
        LOGGER.debug(
            "Declined entry %r: income=%r expense=%r", name, income_text, expense_text
        )
        return None
    if isinstance(occurred_on, datetime):
        occurred_on = occurred_on.date()
    return Entry(name=name, income=income, expense=expense, date=occurred_on)


def total_income(entries: Iterable[Entry]) -> float:
    return sum((entry.income for entry in entries), 0.0)


def total_expense(entries: Iterable[Entry]) -> float:
    return sum((entry.expense for entry in entries), 0.0)


def total_profit(entries: Sequence[Entry]) -> float:
    return total_income(entries) - total_expense(entries)


def summarise(category: Category) -> Dict[str, float]:
    """Return the three totals shown beneath a category."""

    return {
        "total_income": total_income(category.entries),
        "total_expense": total_expense(category.entries),
        "total_profit": total_profit(category.entries),
    }


def sorted_entries(entries: Sequence[Entry], option: SortOption = SortOption.NAME) -> List[Entry]:
    """Return a new list ordered for display; the stored sequence is untouched.

    Names sort ascending, amounts and dates descending. Ties keep insertion
    order because ``sorted`` is stable.
    """

    if option is SortOption.NAME:
        return sorted(entries, key=lambda entry: entry.name)
    if option is SortOption.INCOME:
        return sorted(entries, key=lambda entry: entry.income, reverse=True)
    if option is SortOption.EXPENSE:
        return sorted(entries, key=lambda entry: entry.expense, reverse=True)
    return sorted(entries, key=lambda entry: entry.date, reverse=True)
