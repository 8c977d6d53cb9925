"""HTTP transport for provider requests.

Sends a :class:`~event_scheduler.models.ProviderRequest` exactly once and
returns the decoded JSON body.  HTTP error statuses are not raised here:
providers describe credential rejections in the JSON error body, and the
adapter is the one that recognises them.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from event_scheduler.exceptions import TransportError
from event_scheduler.models.request import ProviderRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class Transport(Protocol):
    """Anything that can deliver a provider request and return its JSON body."""

    def send(self, request: ProviderRequest) -> Any: ...


class HttpTransport:
    """:class:`Transport` backed by :mod:`requests`.

    Use it as a context manager, or call :meth:`close`, to release the
    connection pool.  A session passed in by the caller is left open.

    Args:
        timeout: Seconds to wait for the provider.
        session: Optional pre-configured :class:`requests.Session`.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the session if this transport created it."""
        if self._owns_session:
            self._session.close()

    def send(self, request: ProviderRequest) -> Any:
        """Send *request* and return the decoded JSON body.

        Raises:
            TransportError: On connection errors, timeouts, or a body that
                is not JSON.
        """
        options = request.options
        try:
            response = self._session.request(
                options.method,
                request.endpoint,
                headers=options.headers,
                data=options.body.encode("utf-8"),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            # The message can embed the endpoint, and Gemini keys travel in
            # its query string.
            endpoint = _redact(request.endpoint)
            logger.error("Request to %s failed: %s", endpoint, type(exc).__name__)
            raise TransportError(
                f"Request to {endpoint} failed: {type(exc).__name__}"
            ) from exc

        logger.debug("Provider responded with HTTP %s", response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Provider returned a non-JSON body (HTTP {response.status_code})"
            ) from exc


def _redact(endpoint: str) -> str:
    """Drop the query string, which may carry an API key."""
    return endpoint.split("?", 1)[0]
