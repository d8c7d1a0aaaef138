# ==============================================
# Impact & Dashboard Aggregation
# ==============================================
#
# PURPOSE:
#   Derived, read-only numbers computed from classification records
#   and listings: breakdowns, trends, impact estimates, achievements.
#   Nothing here is stored; callers recompute on demand.
#
# FUNCTIONS:
# ----------
# - category_breakdown(records) -> dict[str, int]
# - hazardous_element_counts(records, top=None) -> list[(element, count)]
# - user_activity(records) -> dict[str, int]
# - daily_trend(records, days=7, today=None) -> list[(date, count)]
# - monthly_trend(records, months=6, today=None) -> list[(year, month, count)]
# - impact_summary(records) -> ImpactSummary
# - achievements(summary) -> list[Achievement]
# - dashboard_stats(records, now=None) -> DashboardStats
# - admin_stats(records, listings) -> AdminStats
#
# IMPACT FACTORS (per classified item):
# -------------------------------------
#   2.3 kg CO₂, 15 kWh energy, 18 litres water
#
# ==============================================

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ewaste.domain import ClassificationRecord, MarketplaceListing

CO2_KG_PER_ITEM = 2.3
ENERGY_KWH_PER_ITEM = 15
WATER_LITRES_PER_ITEM = 18


@dataclass
class ImpactSummary:
    """Estimated savings from recycling the classified items."""
    total_items: int
    hazardous_items: int
    co2_saved_kg: float
    energy_saved_kwh: float
    water_saved_litres: float


@dataclass
class Achievement:
    title: str
    description: str
    requirement: float
    progress: float

    @property
    def earned(self) -> bool:
        return self.progress >= self.requirement


@dataclass
class DashboardStats:
    """Headline numbers of a single user's dashboard."""
    total_classifications: int
    most_common_category: Optional[str]
    most_common_category_count: int
    hazardous_items: int
    last_30_days: int


@dataclass
class AdminStats:
    """Headline numbers of the system-wide dashboard."""
    total_classifications: int
    active_users: int
    hazardous_items: int
    marketplace_listings: int


def category_breakdown(records: Sequence[ClassificationRecord]) -> Dict[str, int]:
    return dict(Counter(r.category for r in records))


def hazardous_element_counts(records: Sequence[ClassificationRecord],
                             top: Optional[int] = None) -> List[Tuple[str, int]]:
    """
    Count how often each hazardous element appears, most frequent first.

    Args:
        records: Records to count over
        top: Keep only the first `top` elements (None keeps all)
    """
    counts = Counter(e for r in records for e in r.hazardous_elements)
    # Counter.most_common keeps first-seen order for ties
    return counts.most_common(top)


def user_activity(records: Sequence[ClassificationRecord]) -> Dict[str, int]:
    return dict(Counter(r.user_id for r in records))


def _today(today: Optional[date]) -> date:
    return today or datetime.now(timezone.utc).date()


def daily_trend(records: Sequence[ClassificationRecord], days: int = 7,
                today: Optional[date] = None) -> List[Tuple[date, int]]:
    """Classifications per day for the last `days` days, oldest day first."""
    end = _today(today)
    per_day = Counter(r.created_at.date() for r in records)
    window = [end - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    return [(day, per_day.get(day, 0)) for day in window]


def monthly_trend(records: Sequence[ClassificationRecord], months: int = 6,
                  today: Optional[date] = None) -> List[Tuple[int, int, int]]:
    """Classifications per calendar month for the last `months` months, oldest first."""
    end = _today(today)
    per_month = Counter((r.created_at.year, r.created_at.month) for r in records)

    result = []
    for offset in range(months - 1, -1, -1):
        month_index = end.year * 12 + (end.month - 1) - offset
        year, month = divmod(month_index, 12)
        result.append((year, month + 1, per_month.get((year, month + 1), 0)))
    return result


def impact_summary(records: Sequence[ClassificationRecord]) -> ImpactSummary:
    total = len(records)
    return ImpactSummary(
        total_items=total,
        hazardous_items=sum(1 for r in records if r.is_hazardous),
        co2_saved_kg=round(total * CO2_KG_PER_ITEM, 1),
        energy_saved_kwh=total * ENERGY_KWH_PER_ITEM,
        water_saved_litres=total * WATER_LITRES_PER_ITEM,
    )


def achievements(summary: ImpactSummary) -> List[Achievement]:
    return [
        Achievement("First Steps", "Classified your first item", 1, summary.total_items),
        Achievement("Eco Warrior", "Classified 10+ items", 10, summary.total_items),
        Achievement("Hazard Detective", "Identified 5+ hazardous items", 5, summary.hazardous_items),
        Achievement("Planet Protector", "Saved 100kg+ CO₂", 100, summary.co2_saved_kg),
    ]


def dashboard_stats(records: Sequence[ClassificationRecord],
                    now: Optional[datetime] = None) -> DashboardStats:
    now = now or datetime.now(timezone.utc)
    top = Counter(r.category for r in records).most_common(1)
    cutoff = now - timedelta(days=30)
    return DashboardStats(
        total_classifications=len(records),
        most_common_category=top[0][0] if top else None,
        most_common_category_count=top[0][1] if top else 0,
        hazardous_items=sum(1 for r in records if r.is_hazardous),
        last_30_days=sum(1 for r in records if r.created_at >= cutoff),
    )


def admin_stats(records: Sequence[ClassificationRecord],
                listings: Sequence[MarketplaceListing]) -> AdminStats:
    return AdminStats(
        total_classifications=len(records),
        active_users=len({r.user_id for r in records}),
        hazardous_items=sum(1 for r in records if r.is_hazardous),
        marketplace_listings=sum(1 for item in listings if item.is_active),
    )
