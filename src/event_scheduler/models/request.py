"""Request-side models: what the LLM is asked to do and the HTTP request.

- :class:`FunctionSpec` -- one callable function offered to the LLM.
- :class:`RequestParams` -- mode-dependent, vendor-neutral description of
  the extraction (produced by the mode selector).
- :class:`ProviderRequest` -- the vendor-specific HTTP request, passed
  verbatim to the transport.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FunctionSpec(BaseModel):
    """A function declaration the LLM may call.

    Attributes:
        name: Function name (``"get_event_information"`` or
            ``"generate_ical_file"``).
        description: What the function does, for the LLM.
        parameters: JSON schema of the function arguments.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, Any]


class RequestParams(BaseModel):
    """Vendor-neutral request parameters built from the selected text.

    Attributes:
        mode: The mode that produced these parameters.
        system_prompt: Instructions for the LLM.
        user_prompt: The user's selected text.
        functions: Functions offered to the LLM.
        forced_function: Name of the function the LLM must call, or
            ``None`` to let it choose among *functions*.
    """

    model_config = ConfigDict(frozen=True)

    mode: str
    system_prompt: str
    user_prompt: str
    functions: tuple[FunctionSpec, ...]
    forced_function: str | None = None


class RequestOptions(BaseModel):
    """HTTP method, headers and serialized JSON body."""

    model_config = ConfigDict(frozen=True)

    method: str = "POST"
    headers: dict[str, str] = Field(default_factory=dict)
    body: str


class ProviderRequest(BaseModel):
    """A fully built provider request.

    Attributes:
        endpoint: Absolute URL, including any query-string credential.
        options: Method, headers and body.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str
    options: RequestOptions
