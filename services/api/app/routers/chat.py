"""Chat endpoints — free-form questions to the AI agent."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from shared.schemas.chat import AskRequest, AskResponse, FormatRequest, FormatResponse
from src.agents.errors import PipelineError
from src.agents.orchestrator import DocumentOrchestrator
from src.summarize.formatter import format_as_html

from .. import agent, db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/chat/ask")
async def ask(request: AskRequest) -> AskResponse:
    """Ask the agent a question, optionally with context text."""
    orchestrator = DocumentOrchestrator(agent.get_agent(), lookup=db.get_document)
    try:
        result = await orchestrator.ask(request.question, request.context)
    except PipelineError as e:
        raise HTTPException(status_code=e.http_status, detail=e.to_detail())

    return AskResponse(
        answer=result.formatted_answer,
        summary=result.summary,
        timestamp=result.timestamp,
    )


@router.post("/chat/format")
async def format_html(request: FormatRequest) -> FormatResponse:
    """Render agent text as escaped HTML for clients that display markup."""
    return FormatResponse(html=format_as_html(request.text) or "")
