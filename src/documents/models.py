"""Document entity and summary-type enumeration."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional


class SummaryType(str, Enum):
    """Which instruction template is appended to a summarization prompt."""

    GENERAL = "general"
    EXECUTIVE = "executive"
    FINANCIAL = "financial"
    LEGAL = "legal"
    TRADE = "trade"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SummaryType":
        """Case-insensitive lookup; anything unrecognised is GENERAL."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.GENERAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.GENERAL


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Document:
    """An uploaded file and (once extraction has run) its text.

    Instances are immutable: a later extraction pass produces a copy via
    :meth:`with_text_content` which the store swaps in under the same id.
    """

    id: str
    title: str
    file_name: str
    file_path: str
    content_type: str
    size: int
    uploaded_at: datetime = field(default_factory=_utcnow)
    text_content: Optional[str] = None

    @classmethod
    def create(
        cls,
        file_name: str,
        file_path: str,
        content_type: str,
        size: int,
        text_content: Optional[str] = None,
    ) -> "Document":
        return cls(
            id=str(uuid.uuid4()),
            title=Path(file_name).stem,
            file_name=file_name,
            file_path=file_path,
            content_type=content_type,
            size=size,
            text_content=text_content,
        )

    def with_text_content(self, text_content: str) -> "Document":
        return replace(self, text_content=text_content)

    @property
    def has_content(self) -> bool:
        return bool(self.text_content and self.text_content.strip())

    def matches(self, query: str) -> bool:
        """Case-insensitive match on title, file name or extracted text."""
        q = query.strip().lower()
        if not q:
            return True
        haystacks = (self.title, self.file_name, self.text_content or "")
        return any(q in h.lower() for h in haystacks)
