"""Document upload / listing / summarization schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.documents.models import Document, SummaryType

__all__ = [
    "DocumentDto",
    "DocumentDetail",
    "UploadResponse",
    "DocumentListResponse",
    "DeleteResponse",
    "ExtractResponse",
    "SummarizeRequest",
    "SummarizeResponse",
]

PREVIEW_CHARS = 500


class DocumentDto(BaseModel):
    """One document as shown in lists."""

    id: str
    title: str
    file_name: str
    size: int
    uploaded_at: datetime

    @classmethod
    def from_document(cls, doc: Document) -> "DocumentDto":
        return cls(
            id=doc.id,
            title=doc.title,
            file_name=doc.file_name,
            size=doc.size,
            uploaded_at=doc.uploaded_at,
        )


class DocumentDetail(DocumentDto):
    """A single document with a preview of its extracted text."""

    content_type: str
    extracted_chars: int = 0
    preview: str = ""

    @classmethod
    def from_document(cls, doc: Document) -> "DocumentDetail":
        text = doc.text_content or ""
        return cls(
            id=doc.id,
            title=doc.title,
            file_name=doc.file_name,
            size=doc.size,
            uploaded_at=doc.uploaded_at,
            content_type=doc.content_type,
            extracted_chars=len(text),
            preview=text[:PREVIEW_CHARS],
        )


class UploadResponse(BaseModel):
    """Response after a (possibly multi-file) upload."""

    success: bool
    documents: List[DocumentDto] = Field(default_factory=list)
    errors: Optional[List[str]] = None


class DocumentListResponse(BaseModel):
    success: bool = True
    documents: List[DocumentDto] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    success: bool = True


class ExtractResponse(BaseModel):
    success: bool = True
    document_id: str
    extracted_chars: int
    preview: str = ""


class SummarizeRequest(BaseModel):
    """Unknown summary types are accepted and treated as ``general``."""

    summary_type: str = SummaryType.GENERAL.value


class SummarizeResponse(BaseModel):
    success: bool = True
    document_id: str
    file_name: str
    summary: str
    summary_type: str
