"""Shared fixtures for API integration tests.

Uses FastAPI TestClient (in-memory, no network) so tests run
without a live server, an API key or a shared upload directory.
"""

from __future__ import annotations

import os
import sys
from typing import List, Optional

import pytest

# Ensure project root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


class StubAgent:
    """Answers every prompt with a fixed reply, or raises."""

    def __init__(self, answer: str = "คำตอบจาก AI", error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.prompts: List[str] = []

    async def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture(autouse=True)
def _isolated_state(tmp_path, monkeypatch):
    """Empty document store and a per-test upload directory."""
    from core import storage
    from services.api.app import db

    db.documents.clear()
    monkeypatch.setattr(storage, "_default_storage", storage.LocalFileStorage(str(tmp_path / "uploads")))
    yield
    db.documents.clear()


@pytest.fixture()
def stub_agent(monkeypatch):
    """Replace the configured AI agent with a StubAgent."""
    from services.api.app import agent

    stub = StubAgent()
    monkeypatch.setattr(agent, "get_agent", lambda: stub)
    return stub


@pytest.fixture()
def client():
    """FastAPI TestClient — no network, no server startup needed."""
    from fastapi.testclient import TestClient

    from services.api.app.main import app

    return TestClient(app)


@pytest.fixture()
def sample_document(client):
    """Upload a text document and return its id."""
    resp = client.post(
        "/v1/documents/upload",
        files={"files": (
            "contract.txt",
            "สัญญาเงินกู้เพื่อการส่งออก วงเงิน 10 ล้านบาท".encode("utf-8"),
            "text/plain",
        )},
    )
    assert resp.status_code == 200
    return resp.json()["documents"][0]["id"]
