"""httpx notice transport.

Implements NoticeTransportPort with a synchronous httpx.Client. Each call
performs one blocking POST and always closes the response, whatever the
outcome.
"""

import logging

import httpx

from hbreport.core.errors import (
    DeliveryTransportError,
    RequestBuildError,
    ResponseParseError,
)
from hbreport.core.models import DeliveryResponse
from hbreport.core.ports import NoticeTransportPort

logger = logging.getLogger(__name__)


class HttpxNoticeTransport(NoticeTransportPort):
    """Delivers notices over HTTPS using httpx."""

    def __init__(
        self,
        timeout: float | None = 30.0,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the transport.

        Args:
            timeout: Request deadline in seconds; None disables it.
            client: Pre-configured httpx client. Not closed by close().
            transport: Optional httpx transport for the owned client
                (e.g. httpx.MockTransport in tests).
        """
        self.timeout = timeout
        self._transport = transport
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, transport=self._transport)
        return self._client

    def close(self) -> None:
        """Close the owned HTTP client."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def send(
        self, endpoint: str, body: bytes, headers: dict[str, str]
    ) -> DeliveryResponse:
        """POST a serialized notice and read the whole response."""
        client = self._get_client()

        try:
            request = client.build_request("POST", endpoint, content=body, headers=headers)
        except httpx.InvalidURL as e:
            raise RequestBuildError(f"invalid endpoint {endpoint!r}: {e}") from e
        except ValueError as e:
            # Header values httpx cannot encode, e.g. a non-ASCII API key
            raise RequestBuildError(f"cannot build notice request: {e}") from e

        try:
            response = client.send(request, stream=True)
        except httpx.UnsupportedProtocol as e:
            raise RequestBuildError(f"invalid endpoint {endpoint!r}: {e}") from e
        except httpx.RequestError as e:
            raise DeliveryTransportError(f"failed to send notice: {e}") from e

        try:
            content = response.read()
        except httpx.HTTPError as e:
            raise ResponseParseError(f"failed to read response body: {e}") from e
        finally:
            response.close()

        logger.debug(
            f"Notice endpoint answered {response.status_code}",
            extra={"endpoint": endpoint, "status_code": response.status_code},
        )
        return DeliveryResponse(status_code=response.status_code, body=content)
