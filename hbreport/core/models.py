"""Domain models for the hbreport notifier.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass, field
from typing import Any

ENVIRONMENT_NAME = "production"
NOTIFIER_LANGUAGE = "python"


@dataclass(frozen=True)
class BacktraceFrame:
    """A single frame in a captured backtrace.

    number is the 1-based source line; 0 means the interpreter reported no
    line for the frame.
    """

    file: str
    number: int
    method: str

    def __post_init__(self) -> None:
        """Validate frame invariants on creation."""
        if self.number < 0:
            raise ValueError(f"number must be non-negative, got {self.number}")
        if not self.method:
            raise ValueError("method must be a non-empty string")

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "number": self.number, "method": self.method}


@dataclass(frozen=True)
class NotifierInfo:
    """Identity of the library sending the notice."""

    name: str
    url: str
    language: str = NOTIFIER_LANGUAGE


@dataclass(frozen=True)
class ErrorInfo:
    """The error block of a notice.

    The class name is always empty: errors are reported by message only.
    """

    message: str
    backtrace: tuple[BacktraceFrame, ...]  # innermost frame first
    error_class: str = ""


@dataclass(frozen=True)
class RequestInfo:
    """Platform metadata and a snapshot of the client context."""

    cgi_data: dict[str, Any] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ServerInfo:
    """Host the notice originated from."""

    hostname: str
    project_root: str
    environment_name: str = ENVIRONMENT_NAME


@dataclass(frozen=True)
class Notice:
    """The document sent to the error-tracking service for one report.

    Built fresh for every report and never persisted.
    """

    notifier: NotifierInfo
    error: ErrorInfo
    request: RequestInfo
    server: ServerInfo

    def to_payload(self) -> dict[str, Any]:
        """Render the notice into the wire shape expected by the service."""
        return {
            "notifier": {
                "name": self.notifier.name,
                "url": self.notifier.url,
                "language": self.notifier.language,
            },
            "error": {
                "class": self.error.error_class,
                "message": self.error.message,
                "backtrace": [frame.to_dict() for frame in self.error.backtrace],
            },
            "request": {
                "cgi_data": dict(self.request.cgi_data),
                "context": self.request.context,
            },
            "server": {
                "environment_name": self.server.environment_name,
                "hostname": self.server.hostname,
                "project_root": self.server.project_root,
            },
        }


@dataclass(frozen=True)
class DeliveryResponse:
    """Raw outcome of one HTTP delivery, as returned by a transport."""

    status_code: int
    body: bytes

    @property
    def is_success(self) -> bool:
        # 200, 201, 202, etc
        return 200 <= self.status_code < 300
