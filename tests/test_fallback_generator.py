"""Tests for the templated itinerary used when the completion has no days."""
from __future__ import annotations

import pytest

from models import DateRange
from services.fallback_generator import daily_activities, generate_fallback_days

TOKYO = DateRange(start="2024-06-01", end="2024-06-03")


def _titles(activities):
    return [a.title for a in activities]


def test_tokyo_scenario():
    days = generate_fallback_days("Tokyo", TOKYO, ["Adventure", "Culture"])
    assert [d.day for d in days] == [1, 2, 3]
    assert [d.date for d in days] == ["2024-06-01", "2024-06-02", "2024-06-03"]
    for d in days:
        assert [a.time for a in d.activities] == ["09:00", "12:00", "14:00", "19:00"]
        assert d.activities[0].title == "Tokyo Adventure Tour"


def test_is_deterministic():
    first = generate_fallback_days("Lisbon", TOKYO, ["Culture"])
    second = generate_fallback_days("Lisbon", TOKYO, ["Culture"])
    assert first == second


@pytest.mark.parametrize(
    "interests",
    [[], ["Adventure"], ["Culture"], ["Culture", "Adventure"], ["Food", "Nightlife"]],
)
def test_interest_gated_activities(interests):
    activities = daily_activities("Oslo", interests)
    titles = _titles(activities)

    assert ("Oslo Adventure Tour" in titles) == ("Adventure" in interests)
    assert ("Cultural Experience" in titles) == ("Culture" in interests)
    assert titles.count("Lunch at Local Restaurant") == 1
    assert titles.count("Dinner") == 1

    times = [a.time for a in activities]
    assert times == sorted(times)


def test_unknown_interests_are_ignored():
    assert _titles(daily_activities("Oslo", ["Shopping"])) == ["Lunch at Local Restaurant", "Dinner"]


def test_dates_cross_month_boundary():
    days = generate_fallback_days("Rome", DateRange(start="2024-02-28", end="2024-03-01"), [])
    assert [d.date for d in days] == ["2024-02-28", "2024-02-29", "2024-03-01"]


def test_single_day_trip():
    days = generate_fallback_days("Rome", DateRange(start="2024-06-01", end="2024-06-01"), [])
    assert len(days) == 1
