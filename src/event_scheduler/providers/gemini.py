"""Google Gemini ``generateContent`` adapter (``gemini-*`` models)."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

from event_scheduler.exceptions import MalformedResponseError
from event_scheduler.models.request import (
    ProviderRequest,
    RequestOptions,
    RequestParams,
)
from event_scheduler.providers.base import ProviderAdapter

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiAdapter(ProviderAdapter):
    """Builds ``generateContent`` requests with function declarations.

    Gemini authenticates with a ``key`` query parameter instead of a header,
    and returns function arguments as a JSON object rather than a string.
    """

    name = "Gemini"

    def build(
        self,
        params: RequestParams,
        api_key: str,
        model: str,
    ) -> ProviderRequest:
        calling_config: dict[str, Any] = {"mode": "ANY"}
        if params.forced_function is not None:
            calling_config["allowed_function_names"] = [params.forced_function]

        body = {
            "system_instruction": {"parts": [{"text": params.system_prompt}]},
            "contents": [
                {"role": "user", "parts": [{"text": params.user_prompt}]},
            ],
            "tools": [
                {
                    "function_declarations": [
                        {
                            "name": spec.name,
                            "description": spec.description,
                            "parameters": spec.parameters,
                        }
                        for spec in params.functions
                    ]
                }
            ],
            "tool_config": {"function_calling_config": calling_config},
        }

        endpoint = (
            f"{GEMINI_BASE_URL}/{quote(model, safe='')}:generateContent"
            f"?key={quote(api_key, safe='')}"
        )

        return ProviderRequest(
            endpoint=endpoint,
            options=RequestOptions(
                method="POST",
                headers={"Content-Type": "application/json"},
                body=json.dumps(body),
            ),
        )

    def _extract_function_call(self, data: dict) -> tuple[str, Any]:
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError(
                f"No candidate content in Gemini response: {exc!r}",
                raw_response=data,
            ) from exc

        if not isinstance(parts, list):
            raise MalformedResponseError(
                f"Gemini content parts must be a list, got {type(parts).__name__}",
                raw_response=data,
            )

        for part in parts:
            call = part.get("functionCall") if isinstance(part, dict) else None
            if call is None:
                continue
            if not isinstance(call, dict) or "name" not in call:
                raise MalformedResponseError(
                    "Gemini functionCall part has no function name",
                    raw_response=data,
                )
            return call["name"], call.get("args", {})

        raise MalformedResponseError(
            "No functionCall part in Gemini response", raw_response=data
        )
