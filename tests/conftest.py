"""Pytest configuration for the trip planner service."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Ensure the project root is on sys.path so the flat modules import under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from store import ItineraryStore  # noqa: E402


class StubCompletionClient:
    """Stands in for CompletionClient: returns canned text or raises a canned error."""

    def __init__(self, text: str = "{}", error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


def make_payload(**overrides: Any) -> Dict[str, Any]:
    """Return a valid request body for the generate endpoint."""
    payload: Dict[str, Any] = {
        "destination": "Tokyo",
        "dates": {"start": "2024-06-01", "end": "2024-06-03"},
        "travelers": "2 adults",
        "budget": "medium",
        "interests": ["Adventure", "Culture"],
        "email": "a@b.com",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def store() -> ItineraryStore:
    return ItineraryStore()


@pytest.fixture
def stub_client() -> StubCompletionClient:
    return StubCompletionClient()
