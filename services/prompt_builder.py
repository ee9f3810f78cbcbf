# services/prompt_builder.py
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from config import settings
from errors import ValidationError
from models import DateRange, ItineraryRequest

SECONDS_PER_DAY = 24 * 60 * 60

def parse_trip_date(value: str) -> datetime:
    """ISO date or date-time -> aware UTC datetime. Date-only and naive values are read as UTC."""
    try:
        dt = datetime.fromisoformat(value.strip())
    except (AttributeError, ValueError) as e:
        raise ValidationError("Invalid trip dates") from e
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def count_days(dates: DateRange, max_days: Optional[int] = None) -> int:
    # Elapsed time, not calendar days: a partial day rounds up.
    start = parse_trip_date(dates.start)
    end = parse_trip_date(dates.end)
    days = math.ceil((end - start).total_seconds() / SECONDS_PER_DAY) + 1
    if days < 1:
        raise ValidationError("End date must not be before start date")
    limit = max_days if max_days is not None else settings.MAX_TRIP_DAYS
    if days > limit:
        raise ValidationError(f"Trip must not be longer than {limit} days")
    return days

def build_prompt(req: ItineraryRequest) -> str:
    day_count = count_days(req.dates)
    lines = [
        f"Create a detailed {day_count}-day travel itinerary for {req.travelers} visiting "
        f"{req.destination} with a {req.budget} budget.",
        f"Interests include: {', '.join(req.interests)}. "
        "Include accommodations, activities, and dining recommendations.",
        "Format as JSON with days array containing date, activities (time, title, description).",
    ]
    return "\n".join(lines)
