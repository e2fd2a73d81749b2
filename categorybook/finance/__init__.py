"""Mini README: Finance records for categorybook.

This package holds the category and entry records shared by the store, the
blob codec, and the web interface, together with the read-only helpers that
compute totals and display orderings for a category.
"""

from .models import (
    Category,
    Entry,
    SortOption,
    build_entry,
    new_identifier,
    parse_amount,
    sorted_entries,
    summarise,
    total_expense,
    total_income,
    total_profit,
)

__all__ = [
    "Category",
    "Entry",
    "SortOption",
    "build_entry",
    "new_identifier",
    "parse_amount",
    "sorted_entries",
    "summarise",
    "total_expense",
    "total_income",
    "total_profit",
]
