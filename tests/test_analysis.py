# ==============================================
# Tests for Analysis Module
# ==============================================

from datetime import date, datetime, timezone

import pytest

from ewaste.analysis import (
    HazardLevel,
    hazard_level,
    category_breakdown,
    hazardous_element_counts,
    user_activity,
    daily_trend,
    monthly_trend,
    impact_summary,
    achievements,
    dashboard_stats,
    admin_stats,
    search_history,
    search_listings,
    history_categories,
)
from ewaste.domain import NewClassification, ClassificationRecord
from ewaste.stores.seed import seed_listings


def make(record_id, name, category, elements, confidence=90.0, user_id="1",
         when=datetime(2025, 3, 10, tzinfo=timezone.utc)):
    return ClassificationRecord.create(
        NewClassification(user_id=user_id, object_name=name, category=category,
                          hazardous_elements=elements, confidence=confidence),
        record_id=record_id,
        created_at=when,
    )


@pytest.fixture
def records():
    return [
        make("4", "router", "Networking", ["Lead"], 80, "2", datetime(2025, 3, 10, tzinfo=timezone.utc)),
        make("3", "Laptop Battery", "Battery", ["Lead", "Cadmium"], 94.2, "1", datetime(2025, 3, 9, tzinfo=timezone.utc)),
        make("2", "Smartphone", "Mobile Device", ["Lithium", "Cobalt"], 87.5, "1", datetime(2025, 2, 1, tzinfo=timezone.utc)),
        make("1", "Power Bank", "Battery", ["Lithium"], 99.0, "1", datetime(2024, 12, 24, tzinfo=timezone.utc)),
    ]


class TestHazardLevel:
    @pytest.mark.parametrize("elements, level", [
        (["Lithium", "Mercury"], HazardLevel.CRITICAL),
        (["Lead"], HazardLevel.CRITICAL),
        (["Chromium", "Lithium"], HazardLevel.HIGH),
        (["Brominated Flame Retardants"], HazardLevel.HIGH),
        (["Lithium", "Cobalt", "Nickel"], HazardLevel.MEDIUM),
        (["Lithium", "Cobalt"], HazardLevel.LOW),
        ([], HazardLevel.LOW),
    ])
    def test_levels(self, elements, level):
        assert hazard_level(elements) is level


class TestBreakdowns:
    def test_category_breakdown(self, records):
        assert category_breakdown(records) == {"Networking": 1, "Battery": 2, "Mobile Device": 1}

    def test_hazardous_element_counts_sorted(self, records):
        assert hazardous_element_counts(records) == [
            ("Lead", 2), ("Lithium", 2), ("Cadmium", 1), ("Cobalt", 1),
        ]

    def test_hazardous_element_counts_top(self, records):
        assert hazardous_element_counts(records, top=1) == [("Lead", 2)]

    def test_user_activity(self, records):
        assert user_activity(records) == {"2": 1, "1": 3}

    def test_history_categories_first_seen_order(self, records):
        assert history_categories(records) == ["Networking", "Battery", "Mobile Device"]


class TestTrends:
    def test_daily_trend(self, records):
        trend = daily_trend(records, days=3, today=date(2025, 3, 10))
        assert trend == [(date(2025, 3, 8), 0), (date(2025, 3, 9), 1), (date(2025, 3, 10), 1)]

    def test_monthly_trend_crosses_year(self, records):
        trend = monthly_trend(records, months=4, today=date(2025, 3, 15))
        assert trend == [(2024, 12, 1), (2025, 1, 0), (2025, 2, 1), (2025, 3, 2)]


class TestImpact:
    def test_impact_summary(self, records):
        summary = impact_summary(records)
        assert summary.total_items == 4
        assert summary.hazardous_items == 4
        assert summary.co2_saved_kg == pytest.approx(9.2)
        assert summary.energy_saved_kwh == 60
        assert summary.water_saved_litres == 72

    def test_empty_summary(self):
        summary = impact_summary([])
        assert summary.total_items == 0
        assert summary.co2_saved_kg == 0

    def test_achievements(self, records):
        earned = {a.title: a.earned for a in achievements(impact_summary(records))}
        assert earned == {
            "First Steps": True,
            "Eco Warrior": False,
            "Hazard Detective": False,
            "Planet Protector": False,
        }


class TestDashboards:
    def test_dashboard_stats(self, records):
        stats = dashboard_stats(records, now=datetime(2025, 3, 10, 12, tzinfo=timezone.utc))
        assert stats.total_classifications == 4
        assert stats.most_common_category == "Battery"
        assert stats.most_common_category_count == 2
        assert stats.last_30_days == 2

    def test_dashboard_stats_empty(self):
        stats = dashboard_stats([])
        assert stats.most_common_category is None
        assert stats.most_common_category_count == 0

    def test_admin_stats(self, records):
        stats = admin_stats(records, seed_listings())
        assert stats.total_classifications == 4
        assert stats.active_users == 2
        assert stats.marketplace_listings == 2


class TestSearch:
    def test_history_term_matches_name_or_category(self, records):
        assert [r.id for r in search_history(records, term="BATT")] == ["3", "1"]
        assert [r.id for r in search_history(records, term="mobile")] == ["2"]

    def test_history_category_filter(self, records):
        assert [r.id for r in search_history(records, category="Battery")] == ["3", "1"]

    def test_history_sorts(self, records):
        assert [r.id for r in search_history(records, sort_by="confidence")] == ["1", "3", "2", "4"]
        assert [r.id for r in search_history(records, sort_by="name")] == ["3", "1", "4", "2"]
        assert [r.id for r in search_history(records, sort_by="date")] == ["4", "3", "2", "1"]

    def test_history_does_not_mutate_input(self, records):
        before = list(records)
        search_history(records, sort_by="name")
        assert records == before

    def test_listing_filters_and_sorts(self):
        listings = seed_listings()
        assert [i.id for i in search_listings(listings, sort_by="price-low")] == ["2", "1"]
        assert [i.id for i in search_listings(listings, sort_by="price-high")] == ["1", "2"]
        assert [i.id for i in search_listings(listings, condition="parts")] == ["2"]
        assert [i.id for i in search_listings(listings, category="Smartphones")] == ["1"]
        assert [i.id for i in search_listings(listings, term="motherboard")] == ["2"]

    def test_unknown_sort_rejected(self, records):
        with pytest.raises(ValueError):
            search_history(records, sort_by="colour")
        with pytest.raises(ValueError):
            search_listings(seed_listings(), sort_by="cheapest")
