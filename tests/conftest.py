"""Shared fixtures: a scripted stand-in for the LLM call and a temp store."""
import copy

import pytest

from storage.local_store import LocalStore
from storage.saved_careers import SavedCareers


class FakeLLM:
    """Replays queued replies in order and records every prompt it was sent."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(copy.deepcopy(r) for r in replies)

    async def __call__(self, system_prompt, user_prompt, temperature=0.4):
        self.calls.append({"system": system_prompt, "user": user_prompt})
        if not self.replies:
            return {"error": "no reply queued"}
        reply = self.replies.pop(0)
        if callable(reply):
            return reply()
        return reply


@pytest.fixture
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr("ai.analysis_engine.analyse", fake)
    monkeypatch.setattr("ai.scenario_engine.analyse", fake)
    return fake


@pytest.fixture
def store_path(tmp_path):
    return str(tmp_path / "pathfinder_store.json")


@pytest.fixture
def saved(store_path):
    return SavedCareers(LocalStore(store_path))
