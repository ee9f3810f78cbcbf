from __future__ import annotations

import re
from datetime import date
from typing import List, Literal
from pydantic import (
    BaseModel,
    Field,
    ConfigDict,
    field_validator,
    conint,
)

TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?(?:\s*([ap])\.?\s*m\.?)?$", re.IGNORECASE)

def normalize_time(value: str) -> str:
    """Coerce '9:00', '9:00 AM', '21:30:00' and friends into zero-padded 24-hour 'HH:MM'."""
    m = TIME_RE.match(value.strip())
    if not m:
        raise ValueError(f"unrecognised time of day: {value!r}")
    hour, minute, meridiem = int(m.group(1)), int(m.group(2)), m.group(3)
    if meridiem:
        if not 1 <= hour <= 12:
            raise ValueError(f"hour out of range for 12-hour clock: {value!r}")
        hour = hour % 12 + (12 if meridiem.lower() == "p" else 0)
    if hour > 23 or minute > 59:
        raise ValueError(f"time of day out of range: {value!r}")
    return f"{hour:02d}:{minute:02d}"

# -----------------------------
# Request
# -----------------------------

class DateRange(BaseModel):
    """Trip dates exactly as the caller sent them; parsing happens in the prompt builder."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    start: str
    end: str

class ItineraryRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    destination: str
    dates: DateRange
    travelers: str
    budget: str
    interests: List[str] = Field(default_factory=list)
    email: str

    @field_validator("interests", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return [] if v is None else v

# -----------------------------
# Itinerary
# -----------------------------

class Activity(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    time: str = Field(description="24-hour 'HH:MM'; ordering is lexicographic")
    title: str
    description: str = ""

    @field_validator("time", mode="before")
    @classmethod
    def _normalize_time(cls, v):
        if not isinstance(v, str):
            raise ValueError("time must be a string")
        return normalize_time(v)

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

class DayPlan(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    day: conint(ge=1)
    date: str
    activities: List[Activity] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _iso_date(cls, v):
        if isinstance(v, date):
            return v.isoformat()
        if not isinstance(v, str):
            raise ValueError("date must be an ISO date string")
        return date.fromisoformat(v.strip()[:10]).isoformat()

    @field_validator("activities", mode="after")
    @classmethod
    def _sort_by_time(cls, v: List[Activity]) -> List[Activity]:
        return sorted(v, key=lambda a: a.time)

class ItineraryRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    destination: str
    dates: DateRange
    travelers: str
    budget: str
    interests: List[str] = Field(default_factory=list)
    email: str
    status: Literal["generated"] = "generated"
    created_at: str = Field(alias="createdAt")
    days: List[DayPlan] = Field(default_factory=list)

# -----------------------------
# Response envelopes
# -----------------------------

class GenerateItineraryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    itinerary_id: str = Field(alias="itineraryId")
    message: str = "Itinerary generated successfully!"
    itinerary: ItineraryRecord

class ErrorResponse(BaseModel):
    error: str

class FailureResponse(BaseModel):
    success: Literal[False] = False
    error: str = "Failed to generate itinerary"
    message: str
