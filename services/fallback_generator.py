# services/fallback_generator.py
from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Sequence

from models import Activity, DateRange, DayPlan
from services.prompt_builder import count_days, parse_trip_date

log = logging.getLogger("fallback")

def daily_activities(destination: str, interests: Sequence[str]) -> List[Activity]:
    """The same set for every day; only 'Adventure' and 'Culture' add entries."""
    activities: List[Activity] = []

    if "Adventure" in interests:
        activities.append(Activity(
            time="09:00",
            title=f"{destination} Adventure Tour",
            description="Exciting outdoor activities",
        ))
    if "Culture" in interests:
        activities.append(Activity(
            time="14:00",
            title="Cultural Experience",
            description="Visit local museums and historical sites",
        ))

    activities.append(Activity(
        time="12:00",
        title="Lunch at Local Restaurant",
        description="Try authentic local cuisine",
    ))
    activities.append(Activity(
        time="19:00",
        title="Dinner",
        description="Relax and enjoy your meal",
    ))

    # zero-padded HH:MM sorts chronologically as plain strings
    return sorted(activities, key=lambda a: a.time)

def generate_fallback_days(destination: str, dates: DateRange, interests: Sequence[str]) -> List[DayPlan]:
    start = parse_trip_date(dates.start)
    day_count = count_days(dates)
    days = [
        DayPlan(
            day=i + 1,
            date=(start + timedelta(days=i)).date().isoformat(),
            activities=daily_activities(destination, interests),
        )
        for i in range(day_count)
    ]
    log.info("Generated fallback itinerary", extra={"destination": destination, "days": day_count})
    return days
