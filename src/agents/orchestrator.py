"""Ask / Summarize orchestrator -- one request, one agent call.

Both request kinds move through the same stages::

    received -> validating -> [extracting] -> prompting
             -> awaiting_agent -> formatting -> completed

``extracting`` only happens for a summarize request whose document has
never been through extraction.  Any stage may end in ``failed``, which
surfaces as a :class:`~src.agents.errors.PipelineError`.  Validation and
lookup failures are raised before the agent is contacted; agent failures
are logged and converted, never retried.

Usage::

    orch = DocumentOrchestrator(agent, lookup=db.get_document)
    result = await orch.summarize(doc_id, "executive")
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol, Union

from ..documents.models import Document, SummaryType
from ..ingest import extract_text_async
from ..summarize.formatter import extract_summary, format_for_display
from ..summarize.prompts import build_prompt, build_question
from .errors import (
    AI_ERROR,
    DOCUMENT_NOT_FOUND,
    NO_CONTENT,
    SUMMARIZE_ERROR,
    VALIDATION_ERROR,
    PipelineError,
)

logger = logging.getLogger(__name__)


class AgentService(Protocol):
    """Anything that turns a prompt into an answer."""

    async def ask(self, prompt: str) -> str:
        ...


class Stage(str, Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    EXTRACTING = "extracting"
    PROMPTING = "prompting"
    AWAITING_AGENT = "awaiting_agent"
    FORMATTING = "formatting"
    COMPLETED = "completed"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AskResult:
    answer: str
    formatted_answer: str
    summary: Optional[str]
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass
class SummarizeResult:
    document_id: str
    file_name: str
    summary: str
    formatted_summary: str
    summary_type: SummaryType
    timestamp: datetime = field(default_factory=_utcnow)


DocumentLookup = Callable[[str], Optional[Document]]
Extractor = Callable[[str, Optional[str]], Awaitable[str]]


class DocumentOrchestrator:
    """Sequences prompt building, the agent call and answer formatting.

    Parameters
    ----------
    agent : AgentService
        The AI-answering collaborator.
    lookup : callable
        ``lookup(document_id) -> Document | None``.
    extractor : callable, optional
        Async ``extractor(file_path, content_type) -> str`` used when a
        document has no extracted text yet.
    """

    def __init__(
        self,
        agent: AgentService,
        lookup: DocumentLookup,
        extractor: Extractor = extract_text_async,
    ) -> None:
        self.agent = agent
        self.lookup = lookup
        self.extractor = extractor

    # ------------------------------------------------------------------
    # Ask
    # ------------------------------------------------------------------

    async def ask(self, question: str, context: Optional[str] = None) -> AskResult:
        stage = Stage.VALIDATING
        if not question or not question.strip():
            raise PipelineError("กรุณาระบุคำถาม", VALIDATION_ERROR, stage=stage)

        logger.info("Processing question: %s", _preview(question))
        prompt = build_question(question, context)

        try:
            stage = Stage.AWAITING_AGENT
            raw_answer = await self.agent.ask(prompt)

            stage = Stage.FORMATTING
            formatted = format_for_display(raw_answer)
            summary = extract_summary(formatted)
        except Exception as exc:
            logger.error("Failed to process question at stage %s: %s", stage.value, exc)
            raise PipelineError(
                f"ไม่สามารถประมวลผลคำถามได้: {exc}", AI_ERROR, stage=stage,
            ) from exc

        logger.info("Question answered successfully")
        return AskResult(
            answer=raw_answer,
            formatted_answer=formatted,
            summary=summary,
        )

    # ------------------------------------------------------------------
    # Summarize
    # ------------------------------------------------------------------

    async def summarize(
        self,
        document_id: str,
        summary_type: Union[SummaryType, str, None] = SummaryType.GENERAL,
    ) -> SummarizeResult:
        stage = Stage.VALIDATING
        logger.info("Summarizing document: %s", document_id)
        resolved_type = SummaryType.parse(summary_type)

        document = self.lookup(document_id)
        if document is None:
            raise PipelineError("ไม่พบเอกสาร", DOCUMENT_NOT_FOUND, stage=stage)

        content = document.text_content
        if content is None:
            stage = Stage.EXTRACTING
            logger.info("Document %s has no extracted text yet, extracting", document_id)
            content = await self.extractor(document.file_path, document.content_type)

        if not content or not content.strip():
            raise PipelineError("ไม่สามารถอ่านเนื้อหาเอกสารได้", NO_CONTENT, stage=stage)

        stage = Stage.PROMPTING
        prompt = build_prompt(content, document.file_name, resolved_type)

        try:
            stage = Stage.AWAITING_AGENT
            raw_summary = await self.agent.ask(prompt)

            stage = Stage.FORMATTING
            formatted = format_for_display(raw_summary)
        except Exception as exc:
            logger.error("Failed to summarize document %s: %s", document_id, exc)
            raise PipelineError(
                f"สรุปเอกสารไม่สำเร็จ: {exc}", SUMMARIZE_ERROR, stage=stage,
            ) from exc

        logger.info("Document summarized successfully: %s", document_id)
        return SummarizeResult(
            document_id=document.id,
            file_name=document.file_name,
            summary=raw_summary,
            formatted_summary=formatted,
            summary_type=resolved_type,
        )


def _preview(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else text[:limit] + "..."
