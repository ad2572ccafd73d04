"""Tests for HttpxNoticeTransport using httpx.MockTransport."""

import json

import httpx
import pytest

from hbreport.adapters.transport.httpx_transport import HttpxNoticeTransport
from hbreport.core.errors import (
    DeliveryTransportError,
    RequestBuildError,
    ResponseParseError,
)

ENDPOINT = "https://api.honeybadger.io/v1/notices"
HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "X-API-Key": "secret-key",
}


class BrokenBodyStream(httpx.SyncByteStream):
    """Response body that fails partway through and records closing."""

    def __init__(self) -> None:
        self.closed = False

    def __iter__(self):
        yield b'{"id": '
        raise httpx.ReadError("connection reset")

    def close(self) -> None:
        self.closed = True


class RecordingStream(httpx.SyncByteStream):
    """Complete response body that records closing."""

    def __init__(self, content: bytes) -> None:
        self.content = content
        self.closed = False

    def __iter__(self):
        yield self.content

    def close(self) -> None:
        self.closed = True


def make_transport(handler) -> HttpxNoticeTransport:
    """Create a transport whose requests are answered by handler."""
    return HttpxNoticeTransport(transport=httpx.MockTransport(handler))


class TestHttpxNoticeTransport:
    """Test suite for HttpxNoticeTransport."""

    def test_posts_body_with_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": "abc123"})

        transport = make_transport(handler)
        body = json.dumps({"error": {"message": "boom"}}).encode()

        response = transport.send(ENDPOINT, body, HEADERS)

        assert response.status_code == 201
        assert json.loads(response.body) == {"id": "abc123"}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == ENDPOINT
        assert request.content == body
        assert request.headers["accept"] == "application/json"
        assert request.headers["content-type"] == "application/json"
        assert request.headers["x-api-key"] == "secret-key"
        assert "authorization" not in request.headers

    def test_error_status_is_returned_not_raised(self) -> None:
        transport = make_transport(
            lambda request: httpx.Response(422, json={"error": "invalid"})
        )

        response = transport.send(ENDPOINT, b"{}", HEADERS)

        assert response.status_code == 422
        assert not response.is_success

    def test_connection_error_is_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        transport = make_transport(handler)

        with pytest.raises(DeliveryTransportError, match="Connection refused"):
            transport.send(ENDPOINT, b"{}", HEADERS)

    def test_timeout_is_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = make_transport(handler)

        with pytest.raises(DeliveryTransportError) as exc_info:
            transport.send(ENDPOINT, b"{}", HEADERS)

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    def test_unsupported_scheme_is_request_build_error(self) -> None:
        transport = HttpxNoticeTransport()

        try:
            with pytest.raises(RequestBuildError):
                transport.send("ftp://api.example.invalid/v1/notices", b"{}", HEADERS)
        finally:
            transport.close()

    def test_invalid_url_is_request_build_error(self) -> None:
        transport = make_transport(lambda request: httpx.Response(201))

        with pytest.raises(RequestBuildError):
            transport.send("https://api.example.com/\x00notices", b"{}", HEADERS)

    def test_non_ascii_header_is_request_build_error(self) -> None:
        transport = make_transport(lambda request: httpx.Response(201))
        headers = {**HEADERS, "X-API-Key": "\u043a\u043b\u044e\u0447"}

        with pytest.raises(RequestBuildError):
            transport.send(ENDPOINT, b"{}", headers)

    def test_body_read_failure_is_parse_error_and_closes(self) -> None:
        stream = BrokenBodyStream()
        transport = make_transport(lambda request: httpx.Response(201, stream=stream))

        with pytest.raises(ResponseParseError) as exc_info:
            transport.send(ENDPOINT, b"{}", HEADERS)

        assert isinstance(exc_info.value.__cause__, httpx.ReadError)
        assert stream.closed

    def test_response_closed_after_success(self) -> None:
        stream = RecordingStream(b'{"id": "abc123"}')
        transport = make_transport(lambda request: httpx.Response(201, stream=stream))

        response = transport.send(ENDPOINT, b"{}", HEADERS)

        assert response.body == b'{"id": "abc123"}'
        assert stream.closed

    def test_close_releases_owned_client(self) -> None:
        transport = make_transport(lambda request: httpx.Response(201, json={"id": "x"}))
        transport.send(ENDPOINT, b"{}", HEADERS)

        transport.close()

        assert transport._client is None

    def test_injected_client_is_not_closed(self) -> None:
        client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(201, json={"id": "x"}))
        )
        transport = HttpxNoticeTransport(client=client)

        transport.close()

        assert not client.is_closed
        client.close()
