"""Tests for src.documents.models."""

import dataclasses
from datetime import timezone

import pytest

from src.documents.models import Document, SummaryType


class TestSummaryType:

    @pytest.mark.parametrize("value,expected", [
        ("general", SummaryType.GENERAL),
        ("EXECUTIVE", SummaryType.EXECUTIVE),
        ("Trade", SummaryType.TRADE),
        (" legal ", SummaryType.LEGAL),
        (SummaryType.FINANCIAL, SummaryType.FINANCIAL),
    ])
    def test_parse_known(self, value, expected):
        assert SummaryType.parse(value) is expected

    @pytest.mark.parametrize("value", [None, "", "unknown", "exec"])
    def test_parse_unknown_is_general(self, value):
        assert SummaryType.parse(value) is SummaryType.GENERAL

    def test_value_is_lowercase_name(self):
        assert SummaryType.TRADE.value == "trade"


class TestDocument:

    def test_create_fills_identity(self):
        doc = Document.create("Annual Report.pdf", "/tmp/x.pdf", "application/pdf", 10)

        assert doc.id
        assert doc.title == "Annual Report"
        assert doc.file_name == "Annual Report.pdf"
        assert doc.text_content is None
        assert doc.uploaded_at.tzinfo == timezone.utc

    def test_ids_are_unique(self):
        a = Document.create("a.txt", "/tmp/a", "text/plain", 1)
        b = Document.create("a.txt", "/tmp/a", "text/plain", 1)
        assert a.id != b.id

    def test_is_immutable(self):
        doc = Document.create("a.txt", "/tmp/a", "text/plain", 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.title = "changed"

    def test_with_text_content_copies(self):
        doc = Document.create("a.txt", "/tmp/a", "text/plain", 1)
        updated = doc.with_text_content("hello")

        assert updated.text_content == "hello"
        assert updated.id == doc.id
        assert doc.text_content is None

    @pytest.mark.parametrize("text,expected", [
        (None, False), ("", False), ("  \n", False), ("x", True),
    ])
    def test_has_content(self, text, expected):
        doc = Document.create("a.txt", "/tmp/a", "text/plain", 1, text_content=text)
        assert doc.has_content is expected

    @pytest.mark.parametrize("query", ["budget", "BUDGET", "plan.txt", "ค่าใช้จ่าย", "  "])
    def test_matches(self, query):
        doc = Document.create(
            "Budget Plan.txt", "/tmp/b", "text/plain", 1,
            text_content="รายการค่าใช้จ่ายประจำปี",
        )
        assert doc.matches(query)

    def test_does_not_match(self):
        doc = Document.create("a.txt", "/tmp/a", "text/plain", 1, text_content="alpha")
        assert not doc.matches("omega")
