"""Port interfaces for the hbreport notifier.

The core builds and interprets notices; moving bytes over the network is
delegated to a transport adapter implementing NoticeTransportPort.
Implementations live in the adapters/ package.
"""

from abc import ABC, abstractmethod

from .models import DeliveryResponse


class NoticeTransportPort(ABC):
    """Port for delivering a serialized notice to the tracking service.

    Implementations must:
    - Perform exactly one blocking request per call (no retries)
    - Read the full response body before returning
    - Release the underlying connection on every path, including errors
    """

    @abstractmethod
    def send(
        self, endpoint: str, body: bytes, headers: dict[str, str]
    ) -> DeliveryResponse:
        """POST body to endpoint.

        Args:
            endpoint: Absolute URL of the notices endpoint.
            body: JSON-encoded notice.
            headers: Request headers, including the API key header.

        Returns:
            DeliveryResponse with the status code and raw body. Non-2xx
            statuses are returned, not raised.

        Raises:
            RequestBuildError: If the endpoint cannot be turned into a request.
            DeliveryTransportError: If the request fails on the wire.
            ResponseParseError: If the response body cannot be read.
        """

    def close(self) -> None:
        """Release resources held by the transport."""
