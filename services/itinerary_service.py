# services/itinerary_service.py
from __future__ import annotations

import json
import logging
from datetime import date as _date, datetime, timedelta, timezone
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from config import Settings, settings as default_settings
from errors import UpstreamError
from models import DayPlan, GenerateItineraryResponse, ItineraryRecord, ItineraryRequest
from request_context import get_request_id
from services.fallback_generator import generate_fallback_days
from services.openai_service import CompletionClient
from services.prompt_builder import build_prompt, parse_trip_date
from store import ItineraryStore

log = logging.getLogger("app")

def _strip_code_fences(s: str) -> str:
    t = s.strip()
    if t.startswith("```"):
        parts = t.split("```")
        if len(parts) >= 3:
            body = parts[1]
            # drop a language tag such as ```json
            if body.lower().startswith("json"):
                body = body[4:]
            return body.strip()
    return t

def _unwrap_root(candidate: Any) -> Any:
    if isinstance(candidate, dict) and len(candidate) == 1:
        k = next(iter(candidate.keys()))
        if k in {"itinerary", "plan", "data", "result"}:
            return candidate[k]
    return candidate

def _coerce_date(value: Any, expected: _date) -> str:
    if isinstance(value, str):
        try:
            return _date.fromisoformat(value.strip()[:10]).isoformat()
        except ValueError:
            pass
    return expected.isoformat()

def parse_completion_days(text: str, req: ItineraryRequest) -> Optional[List[DayPlan]]:
    """
    Decode completion text into day plans.

    Returns None when the payload carries no usable ``days`` (missing, empty, or
    any day/activity that does not fit the DayPlan shape); the caller then falls
    back. Text that is not JSON at all raises UpstreamError. An empty ``days``
    list and a bare ``null`` root also fall back; a plain truthiness check on
    ``days`` would instead keep the empty list and fail outright on ``null``.
    """
    try:
        raw = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Malformed completion JSON: {e}") from e

    candidate = _unwrap_root(raw)
    if not isinstance(candidate, dict):
        return None
    raw_days = candidate.get("days")
    if not raw_days or not isinstance(raw_days, list):
        return None

    start = parse_trip_date(req.dates.start).date()
    days: List[DayPlan] = []
    for i, d in enumerate(raw_days):
        if not isinstance(d, dict):
            return None
        try:
            days.append(DayPlan.model_validate({
                "day": i + 1,
                "date": _coerce_date(d.get("date"), start + timedelta(days=i)),
                "activities": d.get("activities") or [],
            }))
        except PydanticValidationError:
            log.warning("Completion day %d has an unexpected shape", i + 1, exc_info=True)
            return None
    return days

def _iso_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def assemble_itinerary(
    req: ItineraryRequest,
    days: List[DayPlan],
    store: ItineraryStore,
    now: Optional[datetime] = None,
) -> GenerateItineraryResponse:
    created = now or datetime.now(timezone.utc)
    itinerary_id = store.new_id(created)
    record = ItineraryRecord(
        id=itinerary_id,
        destination=req.destination,
        dates=req.dates,
        travelers=req.travelers,
        budget=req.budget,
        interests=list(req.interests),
        email=req.email,
        status="generated",
        created_at=_iso_utc(created),
        days=days,
    )
    store.put(record)
    return GenerateItineraryResponse(itinerary_id=itinerary_id, itinerary=record)

class ItineraryService:
    def __init__(
        self,
        client: CompletionClient,
        store: ItineraryStore,
        settings: Optional[Settings] = None,
    ) -> None:
        self.client = client
        self.store = store
        self.settings = settings or default_settings

    def generate(self, req: ItineraryRequest) -> GenerateItineraryResponse:
        rid = get_request_id()
        prompt = build_prompt(req)

        days: Optional[List[DayPlan]] = None
        try:
            text = self.client.complete(prompt)
        except UpstreamError as e:
            if not self.settings.FALLBACK_ON_UPSTREAM_ERROR:
                raise
            log.warning("Completion failed, using fallback: %s", e, extra={"request_id": rid})
        else:
            days = parse_completion_days(text, req)

        if days is None:
            log.warning("No usable days from completion; using fallback", extra={"request_id": rid, "destination": req.destination})
            days = generate_fallback_days(req.destination, req.dates, req.interests)

        response = assemble_itinerary(req, days, self.store)
        log.info("Itinerary generation completed", extra={"request_id": rid, "itinerary_id": response.itinerary_id, "days": len(days)})
        return response
