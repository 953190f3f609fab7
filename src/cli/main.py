"""CLI interface for the Document Assistant."""
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(help="Document Assistant - extract, summarize and ask about documents")

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def _guess_content_type(path: Path) -> str:
    import mimetypes
    ctype, _ = mimetypes.guess_type(path.name)
    return ctype or "application/octet-stream"


def _load_document(input_file: str, content_type: Optional[str] = None):
    """Extract *input_file* and wrap it in a transient Document."""
    from ..documents.models import Document
    from ..ingest import extract_text

    path = Path(input_file)
    if not path.is_file():
        print(f"File not found: {input_file}", file=sys.stderr)
        raise typer.Exit(code=1)

    ctype = content_type or _guess_content_type(path)
    text = extract_text(str(path), ctype)
    return Document.create(
        file_name=path.name,
        file_path=str(path),
        content_type=ctype,
        size=path.stat().st_size,
        text_content=text,
    )


def _default_agent(provider: str, model: Optional[str]):
    # resolved on the first ask, inside the orchestrator's error handling
    from core.providers.adapter import LazyProviderAdapter
    return LazyProviderAdapter(provider, model)


def extract(input_file: str, content_type: Optional[str] = None) -> str:
    """Print the text extracted from a file."""
    doc = _load_document(input_file, content_type)
    print(doc.text_content)
    return doc.text_content or ""


def prompt(input_file: str, summary_type: str = "general", content_type: Optional[str] = None) -> str:
    """Print the summarization prompt for a file without calling the agent."""
    from ..summarize.prompts import build_prompt

    doc = _load_document(input_file, content_type)
    text = build_prompt(doc.text_content or "", doc.file_name, summary_type)
    print(text)
    return text


def summarize(
    input_file: str,
    summary_type: str = "general",
    provider: str = "anthropic",
    model: Optional[str] = None,
    agent=None,
) -> str:
    """Summarize a local file with the AI agent."""
    from ..agents.errors import PipelineError
    from ..agents.orchestrator import DocumentOrchestrator

    doc = _load_document(input_file)
    orch = DocumentOrchestrator(
        agent or _default_agent(provider, model),
        lookup=lambda doc_id: doc if doc_id == doc.id else None,
    )
    try:
        result = asyncio.run(orch.summarize(doc.id, summary_type))
    except PipelineError as e:
        print(f"[{e.code}] {e.message}", file=sys.stderr)
        raise typer.Exit(code=1)

    print(f"=== {result.file_name} ({result.summary_type.value}) ===")
    print(result.formatted_summary)
    return result.formatted_summary


def ask(
    question: str,
    context: Optional[str] = None,
    provider: str = "anthropic",
    model: Optional[str] = None,
    agent=None,
) -> str:
    """Ask the AI agent a question."""
    from ..agents.errors import PipelineError
    from ..agents.orchestrator import DocumentOrchestrator

    orch = DocumentOrchestrator(agent or _default_agent(provider, model), lookup=lambda _: None)
    try:
        result = asyncio.run(orch.ask(question, context))
    except PipelineError as e:
        print(f"[{e.code}] {e.message}", file=sys.stderr)
        raise typer.Exit(code=1)

    print(result.formatted_answer)
    return result.formatted_answer


def models(provider: Optional[str] = None) -> list:
    """Print the supported provider/model combinations."""
    from core.providers.registry import get_model_catalog

    entries = [m for m in get_model_catalog() if not provider or m["provider"] == provider]
    for m in entries:
        print(f"{m['provider']:<10} {m['model_id']:<32} {m['label']} ({m['tier']})")
    return entries


@app.command("extract")
def cli_extract(
    input_file: str = typer.Argument(..., help="Path to the document"),
    content_type: Optional[str] = typer.Option(None, help="MIME type (guessed from the name if omitted)"),
):
    """Extract text from a document."""
    extract(input_file, content_type)


@app.command("prompt")
def cli_prompt(
    input_file: str = typer.Argument(..., help="Path to the document"),
    summary_type: str = typer.Option("general", "--type", help="general/executive/financial/legal/trade"),
    content_type: Optional[str] = typer.Option(None, help="MIME type (guessed from the name if omitted)"),
):
    """Show the summarization prompt for a document."""
    prompt(input_file, summary_type, content_type)


@app.command("summarize")
def cli_summarize(
    input_file: str = typer.Argument(..., help="Path to the document"),
    summary_type: str = typer.Option("general", "--type", help="general/executive/financial/legal/trade"),
    provider: str = typer.Option("anthropic", help="LLM provider (anthropic/openai)"),
    model: Optional[str] = typer.Option(None, help="Model ID override"),
):
    """Summarize a document with the AI agent."""
    summarize(input_file, summary_type, provider, model)


@app.command("ask")
def cli_ask(
    question: str = typer.Argument(..., help="Question for the agent"),
    context: Optional[str] = typer.Option(None, help="Context text prepended to the question"),
    provider: str = typer.Option("anthropic", help="LLM provider (anthropic/openai)"),
    model: Optional[str] = typer.Option(None, help="Model ID override"),
):
    """Ask the AI agent a question."""
    ask(question, context, provider, model)


@app.command("models")
def cli_models(
    provider: Optional[str] = typer.Option(None, help="Only list this provider's models"),
):
    """List the models accepted by --model."""
    models(provider)


@app.command("serve")
def cli_serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Run the API server."""
    import uvicorn
    uvicorn.run("services.api.app.main:app", host=host, port=port, reload=reload)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
