"""Shared fixtures: a scripted generator, a manual clock and an API client."""

import json

import pytest
from fastapi.testclient import TestClient

from app.main import app, get_service
from discovery.core.rate_limiter import RateLimiter
from discovery.service import DiscoveryService


RECOMMENDATIONS = {
    "userIntent": {"problem": "Transcribe podcasts", "category": "Speech to text"},
    "recommendations": [
        {"name": "Whisper", "vendor": "OpenAI", "matchScore": 95},
        {"name": "Descript", "vendor": "Descript", "matchScore": 88},
    ],
    "summary": "Speech recognition is mature.",
}


class ScriptedGenerator:
    """Returns queued responses and records every prompt it receives."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class ManualClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def fenced(data):
    return "Here you go:\n```json\n" + json.dumps(data, indent=2) + "\n```"


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def generator():
    return ScriptedGenerator(fenced(RECOMMENDATIONS))


@pytest.fixture
def service(generator, clock):
    return DiscoveryService(generator, RateLimiter(max_requests=10, window_seconds=60, clock=clock))


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
