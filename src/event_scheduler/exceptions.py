"""Custom exceptions for the event-scheduler pipeline.

Provider adapters, the dispatcher and the event compiler raise these; they
never attempt recovery themselves.  The pipeline is the single place that
maps each condition to a user-visible notification.

Exception hierarchy::

    EventSchedulerError           (base for all pipeline errors)
    +-- MissingCredentialError    (no API key configured)
    +-- InvalidCredentialError    (vendor rejected the API key)
    +-- UnsupportedModelError     (model id not in the registry)
    +-- TransportError            (network / body decoding failure)
    +-- ProviderError             (vendor returned another error object)
    +-- MalformedResponseError    (response has no usable function call)
"""

from __future__ import annotations


class EventSchedulerError(Exception):
    """Base exception for event-scheduler failures."""


class MissingCredentialError(EventSchedulerError):
    """Raised when no API key is configured.

    The caller must send the user to the settings surface instead of
    attempting the network call.
    """

    def __init__(self, message: str = "API key is not set") -> None:
        super().__init__(message)


class InvalidCredentialError(EventSchedulerError):
    """Raised when a provider response carries a credential-rejection signature."""

    def __init__(self, message: str = "Invalid API key") -> None:
        super().__init__(message)


class UnsupportedModelError(EventSchedulerError):
    """Raised when a model identifier is not in the model registry.

    Attributes:
        model: The rejected model identifier.
    """

    def __init__(self, model: str) -> None:
        super().__init__(f"Unsupported model: {model}")
        self.model = model


class TransportError(EventSchedulerError):
    """Raised when the HTTP exchange fails or the body is not JSON."""


class ProviderError(EventSchedulerError):
    """Raised when the provider returns an error object that is not a
    credential rejection.

    Attributes:
        payload: The ``error`` object from the response body.
    """

    def __init__(self, message: str, payload: dict | None = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class MalformedResponseError(EventSchedulerError):
    """Raised when the LLM response cannot be turned into a normalized result.

    Covers a missing function call, undecodable function arguments and
    Pydantic validation errors on the extracted event.

    Attributes:
        raw_response: The raw data that failed to parse.
    """

    def __init__(self, message: str, raw_response: object = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response
