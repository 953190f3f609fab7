"""Shared fixtures for the Document Assistant test suite.

Provides a scripted stand-in for the AI agent, in-memory documents and
a throwaway upload directory.
"""

import asyncio
from typing import List, Optional

import pytest

from core.storage import LocalFileStorage
from services.api.app.db import DocumentRepository
from src.documents.models import Document


# ---------------------------------------------------------------------------
# Agent double
# ---------------------------------------------------------------------------

class FakeAgent:
    """Records every prompt and answers with a canned reply (or raises)."""

    def __init__(self, answer: str = "คำตอบ", error: Optional[BaseException] = None, delay: float = 0.0):
        self.answer = answer
        self.error = error
        self.delay = delay
        self.prompts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.answer


@pytest.fixture
def fake_agent():
    return FakeAgent()


@pytest.fixture
def agent_factory():
    """Build a FakeAgent with a specific answer or error."""
    return FakeAgent


# ---------------------------------------------------------------------------
# Documents and storage
# ---------------------------------------------------------------------------

@pytest.fixture
def storage(tmp_path):
    """LocalFileStorage rooted in a per-test directory."""
    return LocalFileStorage(str(tmp_path / "uploads"))


@pytest.fixture
def repository():
    return DocumentRepository()


@pytest.fixture
def make_document(tmp_path):
    """Factory for documents backed by a real file under tmp_path."""

    def _make(
        file_name: str = "report.txt",
        text_content: Optional[str] = "เนื้อหาเอกสารทดสอบ",
        body: bytes = b"file body",
        content_type: str = "text/plain",
    ) -> Document:
        path = tmp_path / file_name
        path.write_bytes(body)
        return Document.create(
            file_name=file_name,
            file_path=str(path),
            content_type=content_type,
            size=len(body),
            text_content=text_content,
        )

    return _make
