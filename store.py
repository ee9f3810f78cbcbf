# store.py
from __future__ import annotations
from datetime import datetime
from typing import Dict, Optional
import logging, threading

from models import ItineraryRecord

log = logging.getLogger("store")

class ItineraryStore:
    """In-process itinerary records keyed by id. No update, delete, bound or expiry."""

    def __init__(self) -> None:
        self._records: Dict[str, ItineraryRecord] = {}
        self._lock = threading.Lock()
        self._last_id = 0

    def new_id(self, created_at: datetime) -> str:
        # Epoch milliseconds of creation, bumped so ids stay strictly increasing.
        ms = int(created_at.timestamp() * 1000)
        with self._lock:
            ms = max(ms, self._last_id + 1)
            self._last_id = ms
        return str(ms)

    def put(self, record: ItineraryRecord) -> None:
        with self._lock:
            if record.id in self._records:
                log.warning("Overwriting itinerary %s", record.id)
            self._records[record.id] = record
        log.info("Stored itinerary", extra={"itinerary_id": record.id, "days": len(record.days)})

    def get(self, itinerary_id: str) -> Optional[ItineraryRecord]:
        with self._lock:
            return self._records.get(itinerary_id)

    def __contains__(self, itinerary_id: object) -> bool:
        with self._lock:
            return itinerary_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
