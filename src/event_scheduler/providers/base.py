"""Provider adapter interface.

An adapter knows one vendor's request and response shapes.  It builds a
:class:`~event_scheduler.models.ProviderRequest` from vendor-neutral
:class:`~event_scheduler.models.RequestParams`, and parses the raw JSON body
back into a :class:`~event_scheduler.models.NormalizedResponse`.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from event_scheduler.exceptions import (
    InvalidCredentialError,
    MalformedResponseError,
    ProviderError,
)
from event_scheduler.models.event import NormalizedResponse
from event_scheduler.models.request import ProviderRequest, RequestParams

logger = logging.getLogger(__name__)


def is_invalid_credential(data: Any) -> bool:
    """Return ``True`` if *data* carries a credential-rejection signature.

    Recognised signatures:

    - ``error.type == "invalid_request_error"`` (OpenAI)
    - ``error.details[0].reason == "API_KEY_INVALID"`` (Gemini)
    - ``error.code == 403`` (Gemini)
    """
    if not isinstance(data, dict):
        return False
    error = data.get("error")
    if not isinstance(error, dict):
        return False

    if error.get("type") == "invalid_request_error":
        return True

    details = error.get("details")
    if isinstance(details, list) and details:
        first = details[0]
        if isinstance(first, dict) and first.get("reason") == "API_KEY_INVALID":
            return True

    return error.get("code") == 403


class ProviderAdapter(ABC):
    """Base class for vendor adapters.

    Subclasses implement :meth:`build` and :meth:`_extract_function_call`;
    :meth:`parse` handles error detection and validation for all of them.
    """

    #: Vendor name used in log messages.
    name: str = "provider"

    @abstractmethod
    def build(
        self,
        params: RequestParams,
        api_key: str,
        model: str,
    ) -> ProviderRequest:
        """Build the vendor HTTP request for *params*."""

    @abstractmethod
    def _extract_function_call(self, data: dict) -> tuple[str, Any]:
        """Return ``(function_name, arguments)`` from the vendor body.

        Raises:
            MalformedResponseError: If the body has no function call.
        """

    def parse(self, data: Any) -> NormalizedResponse:
        """Parse a raw response body into a :class:`NormalizedResponse`.

        Args:
            data: The decoded JSON body returned by the transport.

        Returns:
            The normalized ``{function_used, event}`` result.

        Raises:
            InvalidCredentialError: If the body carries a credential
                rejection signature.
            ProviderError: If the body carries any other error object.
            MalformedResponseError: If no valid function call can be
                extracted.
        """
        if is_invalid_credential(data):
            logger.warning("%s rejected the API key", self.name)
            raise InvalidCredentialError()

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object from {self.name}, got {type(data).__name__}",
                raw_response=data,
            )

        error = data.get("error")
        if error:
            message = error.get("message", error) if isinstance(error, dict) else error
            raise ProviderError(
                f"{self.name} returned an error: {message}",
                payload=error if isinstance(error, dict) else {"message": error},
            )

        function_name, arguments = self._extract_function_call(data)
        arguments = _decode_arguments(arguments, data)
        logger.debug("%s called %s with %s", self.name, function_name, arguments)

        try:
            return NormalizedResponse.model_validate(
                {"function_used": function_name, "event": arguments}
            )
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Function call {function_name!r} failed validation: {exc}",
                raw_response=data,
            ) from exc


def _decode_arguments(arguments: Any, raw: dict) -> dict:
    """Accept arguments as a JSON string (OpenAI) or an object (Gemini)."""
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(
                f"Function arguments are not valid JSON: {exc}", raw_response=raw
            ) from exc
    if not isinstance(arguments, dict):
        raise MalformedResponseError(
            "Function arguments must be a JSON object", raw_response=raw
        )
    return arguments
