# ==============================================
# Search & Sort
# ==============================================
#
# PURPOSE:
#   Filtering and ordering used by the history view and the
#   marketplace browser. Inputs are never mutated.
#
#   search_history(records, term, category, sort_by)
#       term     → case-insensitive substring of object name or category
#       category → exact match, "all" disables the filter
#       sort_by  → "date" (newest first) | "confidence" (highest first)
#                  | "name" (A→Z, case-insensitive)
#
#   search_listings(listings, term, category, condition, sort_by)
#       term      → case-insensitive substring of title or description
#       category  → exact match, "all" disables the filter
#       condition → Condition value, "all" disables the filter
#       sort_by   → "newest" | "price-low" | "price-high"
#
#   Unknown sort keys raise ValueError.
#
# ==============================================

from typing import List, Sequence

from ewaste.domain import ClassificationRecord, MarketplaceListing

HISTORY_SORTS = ("date", "confidence", "name")
LISTING_SORTS = ("newest", "price-low", "price-high")
ALL = "all"


def _contains(term: str, *fields: str) -> bool:
    needle = term.lower()
    return any(needle in f.lower() for f in fields)


def search_history(records: Sequence[ClassificationRecord], term: str = "",
                   category: str = ALL, sort_by: str = "date") -> List[ClassificationRecord]:
    if sort_by not in HISTORY_SORTS:
        raise ValueError(f"Unknown sort '{sort_by}' (expected one of {', '.join(HISTORY_SORTS)})")

    matches = [
        r for r in records
        if _contains(term, r.object_name, r.category)
        and (category == ALL or r.category == category)
    ]

    if sort_by == "date":
        matches.sort(key=lambda r: r.created_at, reverse=True)
    elif sort_by == "confidence":
        matches.sort(key=lambda r: r.confidence, reverse=True)
    else:
        matches.sort(key=lambda r: r.object_name.lower())
    return matches


def search_listings(listings: Sequence[MarketplaceListing], term: str = "",
                    category: str = ALL, condition: str = ALL,
                    sort_by: str = "newest") -> List[MarketplaceListing]:
    if sort_by not in LISTING_SORTS:
        raise ValueError(f"Unknown sort '{sort_by}' (expected one of {', '.join(LISTING_SORTS)})")

    matches = [
        item for item in listings
        if _contains(term, item.title, item.description)
        and (category == ALL or item.category == category)
        and (condition == ALL or item.condition.value == condition)
    ]

    if sort_by == "price-low":
        matches.sort(key=lambda item: item.price)
    elif sort_by == "price-high":
        matches.sort(key=lambda item: item.price, reverse=True)
    else:
        matches.sort(key=lambda item: item.created_at, reverse=True)
    return matches


def history_categories(records: Sequence[ClassificationRecord]) -> List[str]:
    """Distinct categories in first-seen order."""
    return list(dict.fromkeys(r.category for r in records))
