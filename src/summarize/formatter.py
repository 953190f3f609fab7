"""Formatting of raw agent answers for display.

Agents reply in loose markdown.  These helpers normalise it into a stable
plain-text form, an escaped HTML form, and a short one-paragraph summary.
"""
from __future__ import annotations

import html
import re
from typing import Optional

BULLET = "• "
ELLIPSIS = "..."

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_HEADING_WITHOUT_GAP = re.compile(r"^([ \t]*#{1,6}[ \t]+.+)\n(?!\n)", re.MULTILINE)
_BULLET_MARKER = re.compile(r"^[ \t]*[-*][ \t]+", re.MULTILINE)
_NUMBER_MARKER = re.compile(r"^[ \t]*(\d+)\.[ \t]+", re.MULTILINE)

_HTML_H4 = re.compile(r"^### (.+)$", re.MULTILINE)
_HTML_H3 = re.compile(r"^## (.+)$", re.MULTILINE)
_HTML_H2 = re.compile(r"^# (.+)$", re.MULTILINE)
_HTML_BOLD = re.compile(r"\*\*(.+?)\*\*")
_HTML_ITALIC = re.compile(r"\*(.+?)\*")


def format_for_display(raw: Optional[str]) -> Optional[str]:
    """Normalise blank lines, headings, bullets and numbering; idempotent."""
    if raw is None or not raw.strip():
        return raw

    # Strip first: the line-start patterns must see the same first line on
    # every pass, whatever whitespace the answer started with.
    text = _EXCESS_NEWLINES.sub("\n\n", raw.strip())
    text = _HEADING_WITHOUT_GAP.sub(r"\1\n\n", text)
    text = _BULLET_MARKER.sub(BULLET, text)
    return _NUMBER_MARKER.sub(r"\1. ", text)


def format_as_html(raw: Optional[str]) -> Optional[str]:
    """Render *raw* as HTML.

    The text is escaped before any tag is introduced, so markup coming from
    the agent is always shown literally.
    """
    if raw is None or not raw.strip():
        return raw

    text = html.escape(raw, quote=True)
    text = _HTML_H4.sub(r"<h4>\1</h4>", text)
    text = _HTML_H3.sub(r"<h3>\1</h3>", text)
    text = _HTML_H2.sub(r"<h2>\1</h2>", text)
    text = _HTML_BOLD.sub(r"<strong>\1</strong>", text)
    text = _HTML_ITALIC.sub(r"<em>\1</em>", text)
    text = text.replace("\n\n", "</p><p>")
    text = text.replace("\n", "<br/>")
    return f"<p>{text}</p>"


def extract_summary(text: Optional[str], max_length: int = 200) -> Optional[str]:
    """First paragraph of *text*, cut at a word boundary past *max_length*."""
    if text is None or not text.strip():
        return text

    first = next((p for p in text.split("\n\n") if p), text)
    if len(first) <= max_length:
        return first

    truncated = first[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        truncated = truncated[:last_space]
    return truncated + ELLIPSIS
