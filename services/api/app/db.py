"""In-memory document store.

A dict keyed by document id, guarded by a lock so concurrent requests can
add, read and delete without corrupting it.  Each id is independent: an
add becomes visible only once complete, a delete hides the document
immediately, and there are no cross-document transactions.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from src.documents.models import Document

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Thread-safe keyed store of :class:`Document` records."""

    def __init__(self) -> None:
        self._documents: Dict[str, Document] = {}
        self._lock = threading.Lock()

    def add(self, document: Document) -> Document:
        with self._lock:
            self._documents.setdefault(document.id, document)
        logger.info("Document added to repository: %s", document.id)
        return document

    def get(self, document_id: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(document_id)

    def list(self) -> List[Document]:
        with self._lock:
            return list(self._documents.values())

    def update(self, document: Document) -> bool:
        """Replace an existing record; False if the id is not present."""
        with self._lock:
            if document.id not in self._documents:
                return False
            self._documents[document.id] = document
            return True

    def delete(self, document_id: str) -> bool:
        with self._lock:
            removed = self._documents.pop(document_id, None) is not None
        if removed:
            logger.info("Document removed from repository: %s", document_id)
        return removed

    def exists(self, document_id: str) -> bool:
        with self._lock:
            return document_id in self._documents

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)


# Process-wide store used by the API
documents = DocumentRepository()


def get_document(document_id: str) -> Optional[Document]:
    return documents.get(document_id)
