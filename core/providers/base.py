"""LLM Provider interface — abstract base for all LLM backends.

Every provider must implement ``complete``.  The agent adapter calls
providers via dependency injection, making it trivial to swap
Claude ↔ OpenAI.
"""

from __future__ import annotations

import abc
import hashlib
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_TIMEOUT_SECONDS = float(os.environ.get("AGENT_TIMEOUT_SECONDS", "120"))


@dataclass(frozen=True)
class LLMConfig:
    """Immutable configuration for a single LLM call."""

    model: str = ""
    temperature: float = 0.3
    max_tokens: int = 4096
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass
class LLMResponse:
    """Standardised response from any LLM provider."""

    text: str
    model: str = ""
    provider: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: int = 0
    stop_reason: str = ""
    prompt_hash: str = ""


def prompt_hash(system_prompt: str, user_prompt: str) -> str:
    """Short stable fingerprint of a prompt pair, for audit records."""
    return hashlib.sha256((system_prompt + user_prompt).encode()).hexdigest()[:16]


class LLMProvider(abc.ABC):
    """Abstract base class for LLM providers.

    Subclasses must implement ``complete``: send a prompt pair and return
    the model's text reply.
    """

    provider_name: str = "base"
    default_model: str = ""

    @abc.abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Send a prompt and return the text response.

        Parameters
        ----------
        system_prompt : str
            System-level instruction (persona, rules).
        user_prompt : str
            The question or the document prompt.
        config : LLMConfig, optional
            Override default config for this call.

        Returns
        -------
        LLMResponse
            Contains ``text`` and usage metadata.

        Raises
        ------
        LLMError
            On API failure or an empty reply.
        """
        ...

    def _default_config(self, config: Optional[LLMConfig]) -> LLMConfig:
        return config or LLMConfig()

    def _model_for(self, cfg: LLMConfig) -> str:
        return cfg.model or self.default_model


class LLMError(Exception):
    """Base exception for LLM provider errors."""

    def __init__(self, message: str, provider: str = "", retryable: bool = False):
        super().__init__(message)
        self.provider = provider
        self.retryable = retryable


class LLMTimeoutError(LLMError):
    """LLM call exceeded timeout."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message, provider=provider, retryable=True)
