"""Shared fixtures for the city guide tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from viberoute.api.llm import ModelReply
from viberoute.api.services.guide_service import GuideService
from viberoute.api.services.view_state import ViewStateStore
from viberoute.app import create_app

ROMA_ITINERARY = [
    {
        "time": "09:00 - 10:30",
        "activity": "Colazione al Pantheon",
        "location": "Piazza della Rotonda",
        "description": "Cornetto e cappuccino davanti al Pantheon.",
        "historicalContext": "Tempio romano consacrato come chiesa nel 609.",
        "costEstimate": "5€",
        "proTip": "Arriva prima delle 9 per evitare la folla.",
        "bestPhotoSpot": "Dalla fontana al centro della piazza",
    },
]

GROUNDING = {
    "grounding_chunks": [
        {"web": {"uri": "https://example.com/roma", "title": "Guida di Roma"}},
        {"web": {"uri": "https://example.com/pantheon", "title": None}},
    ]
}


class FakeModelClient:
    """Stands in for GeminiClient/OpenAIClient and records every call."""

    def __init__(self, text: str | None = "[]", grounding_metadata: Any = None, error: Exception | None = None):
        self.text = text
        self.grounding_metadata = grounding_metadata
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def generate(self, prompt: str, schema: dict) -> ModelReply:
        self.calls.append((prompt, schema))
        if self.error is not None:
            raise self.error
        return ModelReply(text=self.text, grounding_metadata=self.grounding_metadata)


@pytest.fixture
def fake_client() -> FakeModelClient:
    return FakeModelClient(text=json.dumps(ROMA_ITINERARY), grounding_metadata=GROUNDING)


@pytest.fixture
def guide_service(fake_client: FakeModelClient) -> GuideService:
    return GuideService(client=fake_client, geocode=False)


@pytest.fixture
def state_store() -> ViewStateStore:
    return ViewStateStore(start_cleanup=False)


@pytest.fixture
def app_and_socketio(guide_service: GuideService, state_store: ViewStateStore):
    app, socketio = create_app(guide_service=guide_service, state_store=state_store)
    app.config["TESTING"] = True
    return app, socketio


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def http(app):
    return app.test_client()
