"""Tests for src.agents.orchestrator -- ask and summarize pipelines.

Every test drives the orchestrator with a scripted agent, so no network
or API key is needed.
"""

import asyncio

import pytest

from src.agents.errors import (
    AI_ERROR,
    DOCUMENT_NOT_FOUND,
    NO_CONTENT,
    SUMMARIZE_ERROR,
    VALIDATION_ERROR,
    PipelineError,
)
from src.agents.orchestrator import DocumentOrchestrator, Stage
from src.documents.models import SummaryType
from src.summarize.prompts import LEGAL_INSTRUCTIONS, QUESTION_LABEL


def _lookup_for(*docs):
    by_id = {d.id: d for d in docs}
    return by_id.get


# ===================================================================
# Ask
# ===================================================================

class TestAsk:

    def test_simple_question(self, agent_factory):
        agent = agent_factory(answer="It is a bank.")
        orch = DocumentOrchestrator(agent, lookup=_lookup_for())

        result = asyncio.run(orch.ask("What is EXIM Bank?"))

        assert result.answer == "It is a bank."
        assert result.formatted_answer == "It is a bank."
        assert result.summary == "It is a bank."
        assert result.timestamp is not None
        assert agent.prompts == ["What is EXIM Bank?"]

    def test_context_is_prefixed(self, fake_agent):
        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for())
        asyncio.run(orch.ask("Q?", "Background"))
        assert fake_agent.prompts == [f"Background\n\n{QUESTION_LABEL} Q?"]

    def test_answer_is_formatted(self, agent_factory):
        agent = agent_factory(answer="## Result\n- one\n\n\n\nSecond paragraph")
        orch = DocumentOrchestrator(agent, lookup=_lookup_for())

        result = asyncio.run(orch.ask("Q?"))
        assert result.formatted_answer == "## Result\n\n• one\n\nSecond paragraph"
        assert result.summary == "## Result"
        assert result.answer.startswith("## Result\n- one")

    @pytest.mark.parametrize("question", ["", "   ", None])
    def test_blank_question_rejected_before_agent(self, fake_agent, question):
        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for())

        with pytest.raises(PipelineError) as exc_info:
            asyncio.run(orch.ask(question))

        assert exc_info.value.code == VALIDATION_ERROR
        assert exc_info.value.http_status == 400
        assert fake_agent.call_count == 0

    def test_agent_failure_becomes_ai_error(self, agent_factory):
        agent = agent_factory(error=RuntimeError("upstream down"))
        orch = DocumentOrchestrator(agent, lookup=_lookup_for())

        with pytest.raises(PipelineError) as exc_info:
            asyncio.run(orch.ask("Q?"))

        err = exc_info.value
        assert err.code == AI_ERROR
        assert "upstream down" in err.message
        assert err.stage == Stage.AWAITING_AGENT
        assert err.http_status == 500

    def test_agent_timeout_becomes_ai_error(self, agent_factory):
        agent = agent_factory(error=asyncio.TimeoutError())
        orch = DocumentOrchestrator(agent, lookup=_lookup_for())

        with pytest.raises(PipelineError) as exc_info:
            asyncio.run(orch.ask("Q?"))
        assert exc_info.value.code == AI_ERROR

    def test_cancellation_propagates(self, agent_factory):
        agent = agent_factory(delay=10)
        orch = DocumentOrchestrator(agent, lookup=_lookup_for())

        async def run():
            task = asyncio.ensure_future(orch.ask("Q?"))
            await asyncio.sleep(0)
            task.cancel()
            await task

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(run())


# ===================================================================
# Summarize
# ===================================================================

class TestSummarize:

    def test_legal_summary(self, agent_factory, make_document):
        doc = make_document("file.txt", text_content="content")
        agent = agent_factory(answer="- obligation one\n- obligation two")
        orch = DocumentOrchestrator(agent, lookup=_lookup_for(doc))

        result = asyncio.run(orch.summarize(doc.id, "legal"))

        assert result.document_id == doc.id
        assert result.file_name == "file.txt"
        assert result.summary_type is SummaryType.LEGAL
        assert result.summary == "- obligation one\n- obligation two"
        assert result.formatted_summary == "• obligation one\n• obligation two"

        (prompt,) = agent.prompts
        assert '"file.txt"' in prompt
        assert "content" in prompt
        assert prompt.endswith(LEGAL_INSTRUCTIONS)

    def test_unknown_type_resolves_to_general(self, fake_agent, make_document):
        doc = make_document()
        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for(doc))

        result = asyncio.run(orch.summarize(doc.id, "haiku"))
        assert result.summary_type is SummaryType.GENERAL

    def test_missing_document(self, fake_agent):
        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for())

        with pytest.raises(PipelineError) as exc_info:
            asyncio.run(orch.summarize("doc-999"))

        assert exc_info.value.code == DOCUMENT_NOT_FOUND
        assert exc_info.value.http_status == 404
        assert fake_agent.call_count == 0

    @pytest.mark.parametrize("text", ["", "   \n\t"])
    def test_empty_content(self, fake_agent, make_document, text):
        doc = make_document(text_content=text)
        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for(doc))

        with pytest.raises(PipelineError) as exc_info:
            asyncio.run(orch.summarize(doc.id))

        assert exc_info.value.code == NO_CONTENT
        assert exc_info.value.http_status == 500
        assert fake_agent.call_count == 0

    def test_extracts_when_text_missing(self, fake_agent, make_document):
        doc = make_document(text_content=None)
        calls = []

        async def extractor(path, content_type):
            calls.append((path, content_type))
            return "freshly extracted"

        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for(doc), extractor=extractor)
        asyncio.run(orch.summarize(doc.id))

        assert calls == [(doc.file_path, doc.content_type)]
        assert "freshly extracted" in fake_agent.prompts[0]

    def test_extracted_blank_is_no_content(self, fake_agent, make_document):
        doc = make_document(text_content=None)

        async def extractor(path, content_type):
            return ""

        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for(doc), extractor=extractor)
        with pytest.raises(PipelineError) as exc_info:
            asyncio.run(orch.summarize(doc.id))
        assert exc_info.value.code == NO_CONTENT

    def test_agent_failure_becomes_summarize_error(self, agent_factory, make_document):
        doc = make_document()
        agent = agent_factory(error=ValueError("quota exceeded"))
        orch = DocumentOrchestrator(agent, lookup=_lookup_for(doc))

        with pytest.raises(PipelineError) as exc_info:
            asyncio.run(orch.summarize(doc.id))

        assert exc_info.value.code == SUMMARIZE_ERROR
        assert "quota exceeded" in exc_info.value.message
        assert exc_info.value.to_detail() == {
            "code": SUMMARIZE_ERROR,
            "message": exc_info.value.message,
        }

    def test_exactly_one_agent_call(self, fake_agent, make_document):
        doc = make_document()
        orch = DocumentOrchestrator(fake_agent, lookup=_lookup_for(doc))
        asyncio.run(orch.summarize(doc.id, SummaryType.TRADE))
        assert fake_agent.call_count == 1
