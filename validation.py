# validation.py
"""
Input validation for itinerary requests.
Only presence is enforced up front; formats are left to later stages.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError
from models import ItineraryRequest

log = logging.getLogger("app")

REQUIRED_FIELDS = ("destination", "dates", "travelers", "budget", "email")

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_FIELDS_MESSAGE = "Invalid request fields"

def missing_fields(payload: Mapping[str, Any]) -> list[str]:
    """Names of required fields that are absent or empty (None, '', {}, [], 0, False)."""
    return [name for name in REQUIRED_FIELDS if not payload.get(name)]

def validate_itinerary_request(payload: Any) -> ItineraryRequest:
    """
    Check a raw request body and coerce it into an ItineraryRequest.

    Args:
        payload: Decoded JSON body

    Returns:
        The typed request

    Raises:
        ValidationError: If a required field is missing or a field has the wrong shape
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    missing = missing_fields(payload)
    if missing:
        log.info("Rejected itinerary request", extra={"missing": missing})
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    try:
        return ItineraryRequest.model_validate(payload)
    except PydanticValidationError as e:
        log.info("Rejected itinerary request", extra={"errors": e.error_count()})
        raise ValidationError(INVALID_FIELDS_MESSAGE) from e
