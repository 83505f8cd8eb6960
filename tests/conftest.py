"""Shared fixtures: settings without a .env file, a sample payload, a fake Gemini transport."""
from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest

from swot_engine.config import Settings


def make_payload(counts=(6, 5, 7, 6), summary="Strong technical base, thin market reach.") -> Dict[str, Any]:
    names = (("strengths", "Strength"), ("weaknesses", "Weakness"), ("opportunities", "Opportunity"), ("threats", "Threat"))
    payload: Dict[str, Any] = {
        key: [f"{name} point {i + 1}" for i in range(n)] for (key, name), n in zip(names, counts)
    }
    payload["summary"] = summary
    return payload


class FakeTransport:
    """Stands in for llm_gemini.generate_json and records every call."""

    def __init__(self, response: Any = None, error: Exception = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, **kwargs: Any) -> str:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if isinstance(self.response, str):
            return self.response
        return json.dumps(self.response)


@pytest.fixture
def settings() -> Settings:
    return Settings(GEMINI_API_KEY="test-key", GEMINI_MODEL="gemini-test", _env_file=None)


@pytest.fixture
def payload() -> Dict[str, Any]:
    return make_payload()
