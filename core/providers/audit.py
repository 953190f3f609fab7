"""LLM audit logging — tracks every agent call for cost monitoring and debugging.

Records are kept in memory; an optional ``persist_fn`` can forward each
one elsewhere.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .base import LLMResponse

logger = logging.getLogger(__name__)


@dataclass
class AuditRecord:
    """Single LLM call audit entry."""

    provider: str = ""
    model: str = ""
    prompt_hash: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    timestamp: float = field(default_factory=time.time)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "model": self.model,
            "prompt_hash": self.prompt_hash,
            "token_usage": {
                "input": self.input_tokens,
                "output": self.output_tokens,
            },
            "latency_ms": self.latency_ms,
            "timestamp": self.timestamp,
            "error": self.error,
        }


class AuditLogger:
    """Collects LLM audit records.

    Usage::

        audit = AuditLogger()
        # ... after LLM call ...
        audit.log(response)

        print(audit.summary())
    """

    def __init__(self, persist_fn: Optional[Callable[[AuditRecord], None]] = None):
        self._records: List[AuditRecord] = []
        self._lock = threading.Lock()
        self._persist_fn = persist_fn

    def log(self, response: LLMResponse) -> AuditRecord:
        """Record a successful call."""
        record = AuditRecord(
            provider=response.provider,
            model=response.model,
            prompt_hash=response.prompt_hash,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            latency_ms=response.latency_ms,
        )
        self._append(record)
        logger.info(
            "LLM call: provider=%s model=%s tokens=%d/%d latency=%dms",
            record.provider, record.model,
            record.input_tokens, record.output_tokens, record.latency_ms,
        )
        return record

    def log_error(self, provider: str, model: str, error: str, prompt_hash: str = "") -> AuditRecord:
        """Record a failed call."""
        record = AuditRecord(
            provider=provider, model=model, prompt_hash=prompt_hash, error=error,
        )
        self._append(record)
        logger.warning("LLM call failed: provider=%s model=%s error=%s", provider, model, error)
        return record

    def _append(self, record: AuditRecord) -> None:
        with self._lock:
            self._records.append(record)
        if self._persist_fn:
            try:
                self._persist_fn(record)
            except Exception as e:
                logger.error("Failed to persist audit record: %s", e)

    @property
    def records(self) -> List[AuditRecord]:
        with self._lock:
            return list(self._records)

    def summary(self) -> Dict[str, Any]:
        """Aggregate call counts, token usage and latency."""
        records = self.records
        ok = [r for r in records if r.error is None]
        return {
            "total_calls": len(records),
            "failed_calls": len(records) - len(ok),
            "input_tokens": sum(r.input_tokens for r in ok),
            "output_tokens": sum(r.output_tokens for r in ok),
            "avg_latency_ms": (
                int(sum(r.latency_ms for r in ok) / len(ok)) if ok else 0
            ),
        }

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
