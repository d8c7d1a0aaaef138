# ==============================================
# ANALYSIS (Derived views)
# ==============================================
#
# Read-only aggregation over the store collections, used by
# dashboards, the impact tracker, history and marketplace search.
#
# Modules:
# --------
# - hazard.py  → Hazard level grading of hazardous elements
# - impact.py  → Breakdowns, trends, impact estimates, achievements
# - search.py  → Filtering and sorting of records and listings
#
# ==============================================

from .hazard import HazardLevel, hazard_level
from .impact import (
    ImpactSummary,
    Achievement,
    DashboardStats,
    AdminStats,
    category_breakdown,
    hazardous_element_counts,
    user_activity,
    daily_trend,
    monthly_trend,
    impact_summary,
    achievements,
    dashboard_stats,
    admin_stats,
)
from .search import search_history, search_listings, history_categories

__all__ = [
    "HazardLevel",
    "hazard_level",
    "ImpactSummary",
    "Achievement",
    "DashboardStats",
    "AdminStats",
    "category_breakdown",
    "hazardous_element_counts",
    "user_activity",
    "daily_trend",
    "monthly_trend",
    "impact_summary",
    "achievements",
    "dashboard_stats",
    "admin_stats",
    "search_history",
    "search_listings",
    "history_categories"
]
