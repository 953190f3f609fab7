"""FastAPI application — Document Assistant API.

Upload documents, list/search/delete them, summarize them with an AI
agent, and ask the agent free-form questions.
"""

from __future__ import annotations

import os
import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import __version__, storage

from .routers import chat, documents

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Document Assistant API",
    version=__version__,
    description="Document upload, AI summarization and chat",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
ALLOWED_ORIGINS = os.environ.get(
    "CORS_ORIGINS",
    "http://localhost:4200,http://localhost:4201",
).split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in ALLOWED_ORIGINS],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(documents.router, prefix="/v1", tags=["documents"])
app.include_router(chat.router, prefix="/v1", tags=["chat"])


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    writable = storage.get_storage().is_writable()
    return {
        "status": "ok" if writable else "degraded",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "storage": "writable" if writable else "unavailable",
    }


@app.get("/")
async def root():
    return {"message": "Document Assistant API", "docs": "/docs"}
