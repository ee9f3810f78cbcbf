# errors.py
from __future__ import annotations


class TripPlannerError(Exception):
    """Base class for failures raised along the itinerary request path."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TripPlannerError):
    """The caller's input cannot be processed; resubmitting corrected input fixes it."""

    status_code = 400


class UpstreamError(TripPlannerError):
    """The completion service failed or returned something that is not JSON."""

    status_code = 500
