"""OpenAI chat-completions adapter (``gpt-*`` models)."""

from __future__ import annotations

import json
from typing import Any

from event_scheduler.exceptions import MalformedResponseError
from event_scheduler.models.request import (
    ProviderRequest,
    RequestOptions,
    RequestParams,
)
from event_scheduler.providers.base import ProviderAdapter

OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"


class OpenAIAdapter(ProviderAdapter):
    """Builds chat-completions requests with tools and parses tool calls."""

    name = "OpenAI"

    def build(
        self,
        params: RequestParams,
        api_key: str,
        model: str,
    ) -> ProviderRequest:
        tools = [
            {
                "type": "function",
                "function": {
                    "name": spec.name,
                    "description": spec.description,
                    "parameters": spec.parameters,
                },
            }
            for spec in params.functions
        ]

        if params.forced_function is not None:
            tool_choice: Any = {
                "type": "function",
                "function": {"name": params.forced_function},
            }
        else:
            tool_choice = "required"

        body = {
            "model": model,
            "messages": [
                {"role": "system", "content": params.system_prompt},
                {"role": "user", "content": params.user_prompt},
            ],
            "tools": tools,
            "tool_choice": tool_choice,
        }

        return ProviderRequest(
            endpoint=OPENAI_ENDPOINT,
            options=RequestOptions(
                method="POST",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {api_key}",
                },
                body=json.dumps(body),
            ),
        )

    def _extract_function_call(self, data: dict) -> tuple[str, Any]:
        try:
            message = data["choices"][0]["message"]
            call = message["tool_calls"][0]["function"]
            return call["name"], call.get("arguments", "{}")
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError(
                f"No tool call in OpenAI response: {exc!r}", raw_response=data
            ) from exc
