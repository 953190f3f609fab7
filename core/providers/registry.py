"""LLM provider factory and model catalog.

Central registry of available LLM providers and models, a factory that
instantiates the right provider, and an availability check that falls
back to Anthropic when the selected provider cannot be used.
"""
from __future__ import annotations

import importlib
import logging
import os
from typing import Any, Dict, List, Optional

from .base import LLMProvider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Model catalog: supported provider/model combos
# ---------------------------------------------------------------------------

MODEL_CATALOG: List[Dict[str, Any]] = [
    # --- Anthropic Claude ---
    {
        "provider": "anthropic",
        "provider_label": "Claude",
        "model_id": "claude-sonnet-4-5-20250929",
        "label": "Claude Sonnet 4.5",
        "tier": "standard",
    },
    {
        "provider": "anthropic",
        "provider_label": "Claude",
        "model_id": "claude-haiku-4-5-20251001",
        "label": "Claude Haiku 4.5",
        "tier": "fast",
    },
    # --- OpenAI GPT ---
    {
        "provider": "openai",
        "provider_label": "ChatGPT",
        "model_id": "gpt-4o",
        "label": "GPT-4o",
        "tier": "standard",
    },
    {
        "provider": "openai",
        "provider_label": "ChatGPT",
        "model_id": "gpt-4o-mini",
        "label": "GPT-4o mini",
        "tier": "fast",
    },
]

# provider name → (required env var, import check module)
_PROVIDER_REQUIREMENTS = {
    "anthropic": ("ANTHROPIC_API_KEY", "anthropic"),
    "openai": ("OPENAI_API_KEY", "openai"),
}

FALLBACK_PROVIDER = "anthropic"


def get_model_catalog() -> List[Dict[str, Any]]:
    """Return the full model catalog."""
    return MODEL_CATALOG


def get_default_model_for_provider(provider: str) -> Optional[str]:
    """Return the default (standard tier) model_id for a provider."""
    for m in MODEL_CATALOG:
        if m["provider"] == provider and m["tier"] == "standard":
            return m["model_id"]
    for m in MODEL_CATALOG:
        if m["provider"] == provider:
            return m["model_id"]
    return None


def validate_provider_model(provider: str, model_id: str) -> bool:
    """Check if a provider/model combination is valid."""
    return any(
        m["provider"] == provider and m["model_id"] == model_id
        for m in MODEL_CATALOG
    )


def check_provider_available(provider_name: str) -> Optional[str]:
    """Return None if provider is ready, or an error message string."""
    reqs = _PROVIDER_REQUIREMENTS.get(provider_name)
    if not reqs:
        return f"Unknown provider: {provider_name}"

    env_var, import_module = reqs
    try:
        importlib.import_module(import_module)
    except ImportError:
        return f"{import_module} package is not installed"

    if not os.environ.get(env_var):
        return f"environment variable {env_var} is not set"

    return None


# ---------------------------------------------------------------------------
# Provider factory
# ---------------------------------------------------------------------------

def get_provider(provider_name: str, model: Optional[str] = None) -> LLMProvider:
    """Create and return an LLMProvider instance for the given provider/model.

    Parameters
    ----------
    provider_name :
        One of "anthropic", "openai".
    model :
        Optional model ID override. Passed as default_model to the provider.

    Raises
    ------
    ValueError
        If the provider_name is not recognized.
    """
    kwargs: Dict[str, Any] = {}
    if model:
        kwargs["default_model"] = model

    if provider_name == "anthropic":
        from .anthropic_provider import AnthropicProvider
        return AnthropicProvider(**kwargs)
    elif provider_name == "openai":
        from .openai_provider import OpenAIProvider
        return OpenAIProvider(**kwargs)
    else:
        raise ValueError(
            f"Unknown LLM provider: {provider_name!r}. "
            f"Supported: anthropic, openai"
        )


def resolve_provider(provider_name: str, model: Optional[str] = None) -> LLMProvider:
    """Like :func:`get_provider`, falling back to Anthropic when unavailable.

    *model* must be a catalog entry for *provider_name*; when omitted the
    provider's standard-tier model from :data:`MODEL_CATALOG` is used.

    Raises
    ------
    ValueError
        When *model* is not in the catalog for *provider_name*.
    RuntimeError
        When neither the selected provider nor the fallback can be used.
    """
    if model and not validate_provider_model(provider_name, model):
        raise ValueError(
            f"Unknown model {model!r} for provider {provider_name!r}. "
            f"Supported: {', '.join(m['model_id'] for m in MODEL_CATALOG)}"
        )

    error = check_provider_available(provider_name)
    if error and provider_name != FALLBACK_PROVIDER:
        logger.warning(
            "Provider '%s' unavailable (%s), falling back to %s",
            provider_name, error, FALLBACK_PROVIDER,
        )
        fallback_error = check_provider_available(FALLBACK_PROVIDER)
        if fallback_error:
            raise RuntimeError(
                f"{provider_name} provider unavailable ({error}) and "
                f"fallback {FALLBACK_PROVIDER} unavailable ({fallback_error})"
            )
        provider_name = FALLBACK_PROVIDER
        model = None
    elif error:
        raise RuntimeError(f"{provider_name} provider unavailable ({error})")

    model = model or get_default_model_for_provider(provider_name)
    logger.info("Using provider=%s model=%s", provider_name, model)
    return get_provider(provider_name, model=model)
