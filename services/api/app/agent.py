"""The AI agent used by the API.

Provider and model come from ``AGENT_PROVIDER`` / ``AGENT_MODEL``.  The
provider is resolved on the first question rather than at startup, so a
missing API key or an unknown model surfaces as a failed ask/summarize
instead of a failed boot, and document lookups still answer 404 first.
"""
from __future__ import annotations

import os
from typing import Optional

from core.providers.adapter import LazyProviderAdapter

AGENT_PROVIDER = os.environ.get("AGENT_PROVIDER", "anthropic")
AGENT_MODEL = os.environ.get("AGENT_MODEL") or None

_agent: Optional[LazyProviderAdapter] = None


def get_agent() -> LazyProviderAdapter:
    global _agent
    if _agent is None:
        _agent = LazyProviderAdapter(AGENT_PROVIDER, AGENT_MODEL)
    return _agent
