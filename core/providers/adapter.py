"""Adapter: bridge an LLMProvider → the agent ``ask(prompt)`` interface.

The orchestrator only knows ``await agent.ask(prompt) -> str``.  This
adapter wraps any provider so it can be passed as that agent, adding the
assistant persona as system prompt, the per-call timeout and audit
records.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

from .audit import AuditLogger
from .base import LLMConfig, LLMError, LLMProvider, LLMTimeoutError, prompt_hash
from .registry import resolve_provider

logger = logging.getLogger(__name__)

DEFAULT_INSTRUCTIONS = os.environ.get(
    "AGENT_INSTRUCTIONS",
    "คุณคือผู้ช่วย AI ที่ช่วยวิเคราะห์และสรุปเอกสาร ตอบเป็นภาษาไทย "
    "อย่างกระชับ ชัดเจน และอ้างอิงจากเนื้อหาที่ได้รับเท่านั้น",
)

NO_ANSWER = "ไม่ได้รับคำตอบจาก AI"


class ProviderAdapter:
    """Wraps an LLMProvider to expose ``ask(prompt)`` for the orchestrator."""

    def __init__(
        self,
        provider: LLMProvider,
        *,
        instructions: Optional[str] = None,
        config: Optional[LLMConfig] = None,
        audit: Optional[AuditLogger] = None,
    ):
        self._provider = provider
        self.instructions = instructions or DEFAULT_INSTRUCTIONS
        self.config = config or LLMConfig()
        self.audit = audit or AuditLogger()

    @property
    def provider_name(self) -> str:
        return self._provider.provider_name

    async def ask(self, prompt: str) -> str:
        """Send *prompt* to the provider and return its text reply.

        Raises
        ------
        LLMTimeoutError
            When the call exceeds ``config.timeout_seconds``.
        LLMError
            On any provider failure.
        """
        logger.info(
            "Sending prompt to %s: %s",
            self.provider_name,
            prompt if len(prompt) <= 100 else prompt[:100] + "...",
        )
        model = self.config.model or self._provider.default_model
        fingerprint = prompt_hash(self.instructions, prompt)

        try:
            response = await asyncio.wait_for(
                self._provider.complete(self.instructions, prompt, config=self.config),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            self.audit.log_error(self.provider_name, model, "timeout", fingerprint)
            raise LLMTimeoutError(
                f"Agent did not answer within {self.config.timeout_seconds:g}s",
                provider=self.provider_name,
            ) from e
        except LLMError as e:
            self.audit.log_error(self.provider_name, model, str(e), fingerprint)
            raise

        self.audit.log(response)
        return response.text or NO_ANSWER


class LazyProviderAdapter:
    """``ask(prompt)`` whose provider is resolved on the first call.

    Resolution failures (unknown model, missing API key) therefore surface
    from ``ask`` and are reported like any other agent failure, and a
    request rejected before the agent is contacted never needs a provider.
    """

    def __init__(self, provider_name: str, model: Optional[str] = None):
        self.provider_name = provider_name
        self.model = model
        self._adapter: Optional[ProviderAdapter] = None

    @property
    def adapter(self) -> ProviderAdapter:
        if self._adapter is None:
            self._adapter = ProviderAdapter(resolve_provider(self.provider_name, self.model))
        return self._adapter

    async def ask(self, prompt: str) -> str:
        return await self.adapter.ask(prompt)
