"""LLM provider adapters."""

from __future__ import annotations

from event_scheduler.providers.base import ProviderAdapter, is_invalid_credential
from event_scheduler.providers.gemini import GeminiAdapter
from event_scheduler.providers.openai import OpenAIAdapter

__all__ = [
    "GeminiAdapter",
    "OpenAIAdapter",
    "ProviderAdapter",
    "is_invalid_credential",
]
