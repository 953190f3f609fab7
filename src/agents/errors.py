"""Typed failures raised by the ask / summarize / upload pipelines."""
from __future__ import annotations

from typing import Optional

VALIDATION_ERROR = "VALIDATION_ERROR"
DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
NO_CONTENT = "NO_CONTENT"
AI_ERROR = "AI_ERROR"
SUMMARIZE_ERROR = "SUMMARIZE_ERROR"
UPLOAD_ERROR = "UPLOAD_ERROR"
DELETE_ERROR = "DELETE_ERROR"
FILE_TOO_LARGE = "FILE_TOO_LARGE"

# HTTP status the API layer answers with; anything unlisted is a 500
HTTP_STATUS = {
    VALIDATION_ERROR: 400,
    DOCUMENT_NOT_FOUND: 404,
    FILE_TOO_LARGE: 413,
}


class PipelineError(Exception):
    """A failed request, carrying a stable code and a user-facing message."""

    def __init__(self, message: str, code: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.stage = stage

    @property
    def http_status(self) -> int:
        return HTTP_STATUS.get(self.code, 500)

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}
