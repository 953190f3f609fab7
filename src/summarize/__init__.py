"""Summarization prompts and answer formatting."""

from .formatter import extract_summary, format_as_html, format_for_display
from .prompts import build_prompt, build_question

__all__ = [
    "build_prompt",
    "build_question",
    "extract_summary",
    "format_as_html",
    "format_for_display",
]
