"""Chat (ask) schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

__all__ = [
    "AskRequest",
    "AskResponse",
    "FormatRequest",
    "FormatResponse",
]


class AskRequest(BaseModel):
    question: str = ""
    context: Optional[str] = None


class AskResponse(BaseModel):
    success: bool = True
    answer: str
    summary: Optional[str] = None
    timestamp: datetime


class FormatRequest(BaseModel):
    text: str = ""


class FormatResponse(BaseModel):
    html: str = ""
