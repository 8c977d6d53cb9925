"""Unit tests for the requests-based HTTP transport.

All tests use a mocked :class:`requests.Session`; no network calls are made.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from event_scheduler.exceptions import TransportError
from event_scheduler.models import ProviderRequest, RequestOptions
from event_scheduler.transport import HttpTransport


def _request(endpoint: str = "https://api.example.com/v1/x?key=SECRET") -> ProviderRequest:
    return ProviderRequest(
        endpoint=endpoint,
        options=RequestOptions(
            method="POST",
            headers={"Content-Type": "application/json"},
            body='{"a": "é"}',
        ),
    )


def _session(response: MagicMock | None = None, error: Exception | None = None) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = response
    return session


class TestHttpTransport:
    """Request delivery and body decoding."""

    def test_sends_request_verbatim(self) -> None:
        response = MagicMock(status_code=200)
        response.json.return_value = {"ok": True}
        session = _session(response)

        body = HttpTransport(timeout=5.0, session=session).send(_request())

        assert body == {"ok": True}
        session.request.assert_called_once_with(
            "POST",
            "https://api.example.com/v1/x?key=SECRET",
            headers={"Content-Type": "application/json"},
            data='{"a": "é"}'.encode("utf-8"),
            timeout=5.0,
        )

    def test_error_status_returns_body(self) -> None:
        response = MagicMock(status_code=401)
        response.json.return_value = {"error": {"type": "invalid_request_error"}}

        body = HttpTransport(session=_session(response)).send(_request())

        assert body["error"]["type"] == "invalid_request_error"

    def test_connection_error_wrapped_and_redacted(self) -> None:
        session = _session(error=requests.ConnectionError("key=SECRET refused"))

        with pytest.raises(TransportError) as exc_info:
            HttpTransport(session=session).send(_request())

        assert "SECRET" not in str(exc_info.value)
        assert "https://api.example.com/v1/x" in str(exc_info.value)

    def test_timeout_wrapped(self) -> None:
        session = _session(error=requests.Timeout("slow"))

        with pytest.raises(TransportError, match="Timeout"):
            HttpTransport(session=session).send(_request())

    def test_non_json_body(self) -> None:
        response = MagicMock(status_code=502)
        response.json.side_effect = ValueError("no json")

        with pytest.raises(TransportError, match="HTTP 502"):
            HttpTransport(session=_session(response)).send(_request())


class TestSessionLifecycle:
    """Only a session the transport created is closed."""

    def test_owned_session_closed_on_exit(self) -> None:
        with patch("event_scheduler.transport.requests.Session") as session_cls:
            with HttpTransport() as transport:
                transport.send(_request())

        session_cls.return_value.close.assert_called_once_with()

    def test_owned_session_closed_when_send_fails(self) -> None:
        with patch("event_scheduler.transport.requests.Session") as session_cls:
            session_cls.return_value.request.side_effect = requests.Timeout("slow")
            with pytest.raises(TransportError):
                with HttpTransport() as transport:
                    transport.send(_request())

        session_cls.return_value.close.assert_called_once_with()

    def test_injected_session_left_open(self) -> None:
        session = _session(MagicMock(status_code=200))

        with HttpTransport(session=session) as transport:
            transport.send(_request())

        session.close.assert_not_called()
