"""Document upload, listing, deletion and summarization endpoints."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile

from core import storage
from shared.schemas.documents import (
    DeleteResponse,
    DocumentDetail,
    DocumentDto,
    DocumentListResponse,
    ExtractResponse,
    SummarizeRequest,
    SummarizeResponse,
    UploadResponse,
)
from src.agents.errors import FILE_TOO_LARGE, VALIDATION_ERROR, PipelineError
from src.agents.orchestrator import DocumentOrchestrator
from src.documents.uploader import DocumentUploader

from .. import agent, db

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_UPLOAD_BYTES = int(os.environ.get("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))


def _uploader() -> DocumentUploader:
    return DocumentUploader(db.documents, storage.get_storage())


def _http_error(err: PipelineError) -> HTTPException:
    return HTTPException(status_code=err.http_status, detail=err.to_detail())


async def _read_within_limit(file: UploadFile) -> bytes:
    """Read an upload, refusing one over MAX_UPLOAD_BYTES before buffering it."""
    too_large = PipelineError(
        f"ขนาดไฟล์ต้องไม่เกิน {MAX_UPLOAD_BYTES // (1024 * 1024)}MB",
        FILE_TOO_LARGE,
    )
    if file.size is not None and file.size > MAX_UPLOAD_BYTES:
        raise too_large
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise too_large
    return content


@router.post("/documents/upload")
async def upload_documents(files: Optional[List[UploadFile]] = File(None)) -> UploadResponse:
    """Upload one or more documents; per-file failures are reported, not raised."""
    if not files:
        raise HTTPException(
            status_code=400,
            detail={"code": VALIDATION_ERROR, "message": "ไม่มีไฟล์ที่อัพโหลด"},
        )

    uploader = _uploader()
    uploaded: List[DocumentDto] = []
    errors: List[str] = []

    for file in files:
        name = file.filename or ""
        try:
            content = await _read_within_limit(file)
            doc = await uploader.upload(content, name, file.content_type)
        except PipelineError as e:
            logger.warning("Upload rejected for %s: [%s] %s", name, e.code, e.message)
            errors.append(f"{name}: {e.message}")
            continue
        uploaded.append(DocumentDto.from_document(doc))

    return UploadResponse(
        success=len(uploaded) > 0,
        documents=uploaded,
        errors=errors or None,
    )


@router.get("/documents")
async def list_documents(q: Optional[str] = None) -> DocumentListResponse:
    """List documents, newest first; ``q`` filters by title, file name or text."""
    docs = _uploader().list_documents(q)
    return DocumentListResponse(documents=[DocumentDto.from_document(d) for d in docs])


@router.get("/documents/{document_id}")
async def get_document(document_id: str) -> DocumentDetail:
    doc = db.get_document(document_id)
    if doc is None:
        raise HTTPException(
            status_code=404,
            detail={"code": "DOCUMENT_NOT_FOUND", "message": "ไม่พบเอกสาร"},
        )
    return DocumentDetail.from_document(doc)


@router.delete("/documents/{document_id}")
async def delete_document(document_id: str) -> DeleteResponse:
    try:
        await _uploader().delete(document_id)
    except PipelineError as e:
        raise _http_error(e)
    return DeleteResponse()


@router.post("/documents/{document_id}/extract")
async def reextract_document(document_id: str) -> ExtractResponse:
    """Run text extraction again on the stored file."""
    try:
        doc = await _uploader().reextract(document_id)
    except PipelineError as e:
        raise _http_error(e)
    detail = DocumentDetail.from_document(doc)
    return ExtractResponse(
        document_id=doc.id,
        extracted_chars=detail.extracted_chars,
        preview=detail.preview,
    )


@router.post("/documents/{document_id}/summarize")
async def summarize_document(
    document_id: str,
    request: Optional[SummarizeRequest] = None,
) -> SummarizeResponse:
    """Summarize a document with the AI agent."""
    summary_type = request.summary_type if request else None
    orchestrator = DocumentOrchestrator(agent.get_agent(), lookup=db.get_document)
    try:
        result = await orchestrator.summarize(document_id, summary_type)
    except PipelineError as e:
        raise _http_error(e)

    return SummarizeResponse(
        document_id=result.document_id,
        file_name=result.file_name,
        summary=result.formatted_summary,
        summary_type=result.summary_type.value,
    )
