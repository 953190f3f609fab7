"""Document ingestion module — turn a stored upload into plain text.

Public API
----------
.. autofunction:: extract_text
.. autofunction:: extract_text_async
.. autofunction:: can_extract
"""
from .extractor import can_extract, extract_text, extract_text_async

__all__ = [
    "can_extract",
    "extract_text",
    "extract_text_async",
]
