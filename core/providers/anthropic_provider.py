"""Anthropic Claude provider implementation."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from anthropic import AsyncAnthropic

from .base import LLMConfig, LLMError, LLMProvider, LLMResponse, prompt_hash

logger = logging.getLogger(__name__)


class AnthropicProvider(LLMProvider):
    """LLM Provider backed by Anthropic Claude API."""

    provider_name = "anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "claude-sonnet-4-5-20250929",
        base_url: Optional[str] = None,
    ):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY", "")
        self.default_model = default_model
        self.base_url = base_url
        self._client: Optional[AsyncAnthropic] = None

    @property
    def client(self) -> AsyncAnthropic:
        if self._client is None:
            if not self.api_key:
                raise LLMError(
                    "ANTHROPIC_API_KEY ยังไม่ได้ตั้งค่า",
                    provider=self.provider_name,
                )
            kwargs: Dict[str, Any] = {"api_key": self.api_key}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            self._client = AsyncAnthropic(**kwargs)
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        cfg = self._default_config(config)
        model = self._model_for(cfg)

        t0 = time.time()
        try:
            response = await self.client.messages.create(
                model=model,
                max_tokens=cfg.max_tokens,
                temperature=cfg.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except LLMError:
            raise
        except Exception as e:
            logger.error("Anthropic API error: %s", e)
            raise LLMError(f"Anthropic API call failed: {e}", provider=self.provider_name) from e

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", "") == "text"
        )
        usage = getattr(response, "usage", None)

        return LLMResponse(
            text=text,
            model=model,
            provider=self.provider_name,
            input_tokens=getattr(usage, "input_tokens", 0) if usage else 0,
            output_tokens=getattr(usage, "output_tokens", 0) if usage else 0,
            latency_ms=int((time.time() - t0) * 1000),
            stop_reason=getattr(response, "stop_reason", "") or "",
            prompt_hash=prompt_hash(system_prompt, user_prompt),
        )
