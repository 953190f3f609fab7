"""Uploaded documents: the entity, summary types and the upload flow."""
from .models import Document, SummaryType

__all__ = [
    "Document",
    "SummaryType",
]
