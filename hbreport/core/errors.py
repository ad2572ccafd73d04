"""Failure classification for notice delivery.

Every failure of a report surfaces as one of these exceptions. Nothing is
retried and nothing is logged here; the caller decides what to do.
"""


class ReportError(Exception):
    """Base class for all failures to deliver a notice."""


class NoticeSerializationError(ReportError):
    """The notice could not be encoded as JSON (usually a context value)."""


class RequestBuildError(ReportError):
    """The HTTP request could not be built, e.g. a malformed endpoint."""


class DeliveryTransportError(ReportError):
    """The request failed on the wire (connection refused, DNS, timeout)."""


class UnexpectedStatusError(ReportError):
    """The service answered with a non-2xx status code."""

    def __init__(self, status_code: int, body: bytes = b""):
        super().__init__(f"unexpected status code {status_code}")
        self.status_code = status_code
        self.body = body


class ResponseParseError(ReportError):
    """The response body could not be read or decoded."""


__all__ = [
    "DeliveryTransportError",
    "NoticeSerializationError",
    "ReportError",
    "RequestBuildError",
    "ResponseParseError",
    "UnexpectedStatusError",
]
