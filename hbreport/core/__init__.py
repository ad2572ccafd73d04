"""Core domain logic for the hbreport notifier.

This package contains zero external dependencies. Network delivery is
handled by the adapters package.
"""

from .context import Context
from .errors import (
    DeliveryTransportError,
    NoticeSerializationError,
    ReportError,
    RequestBuildError,
    ResponseParseError,
    UnexpectedStatusError,
)
from .models import (
    BacktraceFrame,
    DeliveryResponse,
    ErrorInfo,
    Notice,
    NotifierInfo,
    RequestInfo,
    ServerInfo,
)

__all__ = [
    "BacktraceFrame",
    "Context",
    "DeliveryResponse",
    "DeliveryTransportError",
    "ErrorInfo",
    "Notice",
    "NoticeSerializationError",
    "NotifierInfo",
    "ReportError",
    "RequestBuildError",
    "RequestInfo",
    "ResponseParseError",
    "ServerInfo",
    "UnexpectedStatusError",
]
