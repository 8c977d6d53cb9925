"""Model registry and dispatch to provider adapters.

The registry is a fixed, read-only mapping from exact (case-sensitive)
model identifiers to adapter instances.  :func:`build_request` and
:func:`parse_response` both resolve through :func:`resolve`, so a model
that cannot build a request cannot parse a response either.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping

from event_scheduler.exceptions import UnsupportedModelError
from event_scheduler.models.event import NormalizedResponse
from event_scheduler.models.request import ProviderRequest, RequestParams
from event_scheduler.providers.base import ProviderAdapter
from event_scheduler.providers.gemini import GeminiAdapter
from event_scheduler.providers.openai import OpenAIAdapter

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"

_OPENAI = OpenAIAdapter()
_GEMINI = GeminiAdapter()

MODEL_REGISTRY: Mapping[str, ProviderAdapter] = MappingProxyType(
    {
        "gpt-3.5-turbo": _OPENAI,
        "gpt-4o-mini": _OPENAI,
        "gpt-4o": _OPENAI,
        "gemini-pro": _GEMINI,
        "gemini-1.5-flash-latest": _GEMINI,
    }
)


def supported_models() -> list[str]:
    """Return the registered model identifiers in registry order."""
    return list(MODEL_REGISTRY)


def resolve(model: str) -> ProviderAdapter:
    """Return the adapter registered for *model*.

    Raises:
        UnsupportedModelError: If *model* is not an exact registry key.
    """
    adapter = MODEL_REGISTRY.get(model)
    if adapter is None:
        raise UnsupportedModelError(model)
    return adapter


def build_request(params: RequestParams, api_key: str, model: str) -> ProviderRequest:
    """Build the provider request for *model*.

    Raises:
        UnsupportedModelError: If *model* is not registered.
    """
    adapter = resolve(model)
    logger.debug("Building %s request for model %s", adapter.name, model)
    return adapter.build(params, api_key, model)


def parse_response(data: Any, model: str) -> NormalizedResponse:
    """Parse a raw response body returned for *model*.

    Raises:
        UnsupportedModelError: If *model* is not registered.
    """
    return resolve(model).parse(data)
