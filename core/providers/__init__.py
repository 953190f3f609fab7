"""LLM Provider abstraction layer.

Supports multiple LLM backends (Anthropic Claude, OpenAI) with a unified
interface, an ``ask(prompt)`` adapter for the orchestrator, and audit
logging.
"""

from .base import LLMConfig, LLMError, LLMProvider, LLMResponse, LLMTimeoutError
from .adapter import LazyProviderAdapter, ProviderAdapter
from .audit import AuditLogger, AuditRecord
from .registry import get_provider, resolve_provider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LLMConfig",
    "LLMError",
    "LLMTimeoutError",
    "ProviderAdapter",
    "LazyProviderAdapter",
    "AuditLogger",
    "AuditRecord",
    "get_provider",
    "resolve_provider",
]
