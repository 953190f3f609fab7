"""Upload, re-extract, list and delete documents.

The uploader owns the only writes to the document store: a file is saved,
its text extracted, and only then is the :class:`Document` made visible.
If anything fails (or the request is cancelled) after the file hit the
disk, the file is removed again and nothing is stored.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Protocol

from ..agents.errors import (
    DELETE_ERROR,
    DOCUMENT_NOT_FOUND,
    UPLOAD_ERROR,
    VALIDATION_ERROR,
    PipelineError,
)
from ..ingest import extract_text_async
from .models import Document

logger = logging.getLogger(__name__)

Extractor = Callable[[str, Optional[str]], Awaitable[str]]


class DocumentStore(Protocol):
    def add(self, document: Document) -> Document: ...
    def get(self, document_id: str) -> Optional[Document]: ...
    def list(self) -> List[Document]: ...
    def update(self, document: Document) -> bool: ...
    def delete(self, document_id: str) -> bool: ...


class FileStorage(Protocol):
    def delete_file(self, file_path: str) -> bool: ...
    async def save_file_async(self, content: bytes, file_name: str) -> str: ...
    async def delete_file_async(self, file_path: str) -> bool: ...
    async def file_exists_async(self, file_path: str) -> bool: ...


class DocumentUploader:
    """Coordinates storage, extraction and the document store."""

    def __init__(
        self,
        store: DocumentStore,
        storage: FileStorage,
        extractor: Extractor = extract_text_async,
    ) -> None:
        self.store = store
        self.storage = storage
        self.extractor = extractor

    async def upload(
        self,
        content: bytes,
        file_name: str,
        content_type: Optional[str] = None,
    ) -> Document:
        """Persist one uploaded file and return the stored document."""
        if not file_name or not file_name.strip():
            raise PipelineError("กรุณาระบุชื่อไฟล์", VALIDATION_ERROR)
        if not content:
            raise PipelineError(f"ไฟล์ {file_name} ว่างเปล่า", VALIDATION_ERROR)

        logger.info("Uploading document: %s (%d bytes)", file_name, len(content))
        ctype = content_type or "application/octet-stream"

        try:
            file_path = await self.storage.save_file_async(content, file_name)
        except OSError as exc:
            logger.error("Failed to store %s: %s", file_name, exc)
            raise PipelineError(f"อัพโหลดไฟล์ไม่สำเร็จ: {exc}", UPLOAD_ERROR) from exc

        try:
            text = await self.extractor(file_path, ctype)
            document = Document.create(
                file_name=file_name,
                file_path=file_path,
                content_type=ctype,
                size=len(content),
                text_content=text,
            )
            self.store.add(document)
        except asyncio.CancelledError:
            logger.warning("Upload of %s cancelled, removing %s", file_name, file_path)
            self.storage.delete_file(file_path)
            raise
        except Exception as exc:
            logger.error("Failed to upload document %s: %s", file_name, exc)
            self.storage.delete_file(file_path)
            raise PipelineError(f"อัพโหลดไฟล์ไม่สำเร็จ: {exc}", UPLOAD_ERROR) from exc

        logger.info("Document uploaded successfully: %s", document.id)
        return document

    async def reextract(self, document_id: str) -> Document:
        """Run extraction again on the stored file and replace the text."""
        document = self._require(document_id)
        if not await self.storage.file_exists_async(document.file_path):
            raise PipelineError("ไม่พบไฟล์ของเอกสาร", DOCUMENT_NOT_FOUND)

        text = await self.extractor(document.file_path, document.content_type)
        updated = document.with_text_content(text)
        if not self.store.update(updated):
            # deleted while we were extracting
            raise PipelineError("ไม่พบเอกสาร", DOCUMENT_NOT_FOUND)
        logger.info("Re-extracted document %s (%d chars)", document_id, len(text))
        return updated

    async def delete(self, document_id: str) -> None:
        """Remove the document and its backing file."""
        logger.info("Deleting document: %s", document_id)
        document = self._require(document_id)
        try:
            await self.storage.delete_file_async(document.file_path)
            self.store.delete(document_id)
        except Exception as exc:
            logger.error("Failed to delete document %s: %s", document_id, exc)
            raise PipelineError(f"ลบเอกสารไม่สำเร็จ: {exc}", DELETE_ERROR) from exc
        logger.info("Document deleted successfully: %s", document_id)

    def list_documents(self, query: Optional[str] = None) -> List[Document]:
        """All documents, newest first, optionally filtered by *query*."""
        documents = self.store.list()
        if query:
            documents = [d for d in documents if d.matches(query)]
        return sorted(documents, key=lambda d: d.uploaded_at, reverse=True)

    def _require(self, document_id: str) -> Document:
        document = self.store.get(document_id)
        if document is None:
            raise PipelineError("ไม่พบเอกสาร", DOCUMENT_NOT_FOUND)
        return document
