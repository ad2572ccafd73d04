"""Notice assembly.

Turns an error value plus process metadata into a Notice, and a Notice
into the JSON bytes sent over the wire.
"""

import json
import platform
import socket
import sys
from typing import Any

from .errors import NoticeSerializationError, ResponseParseError
from .models import (
    BacktraceFrame,
    ErrorInfo,
    Notice,
    NotifierInfo,
    RequestInfo,
    ServerInfo,
)


def render_message(error: Any) -> str:
    """Textual description of an error value.

    Exceptions use their own description; anything else falls back to its
    generic string rendering.
    """
    if isinstance(error, BaseException):
        return str(error)
    return "%s" % (error,)


def format_message(format: str, args: tuple[Any, ...]) -> str:
    """Apply %-style args to format without ever raising.

    The template is used verbatim when there are no args, so a literal
    "%" needs no escaping. A template that does not match its args keeps
    both in the message instead of failing the report.
    """
    if not args:
        return format
    try:
        return format % args
    except (TypeError, ValueError):
        return f"{format} {args!r}"


def platform_metadata() -> dict[str, str]:
    """Interpreter and platform details sent as cgi_data."""
    return {
        "PYTHON_ARCH": platform.machine(),
        "PYTHON_OS": sys.platform,
        "PYTHON_VERSION": platform.python_version(),
        "PYTHON_IMPLEMENTATION": platform.python_implementation(),
    }


def current_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return ""


def assemble_notice(
    message: str,
    backtrace: tuple[BacktraceFrame, ...],
    context: dict[str, Any],
    notifier_name: str,
    notifier_url: str,
    project_root: str,
    hostname: str | None = None,
) -> Notice:
    """Build the notice for one report.

    Args:
        message: Rendered error message.
        backtrace: Captured frames, innermost first.
        context: Snapshot of the client context.
        notifier_name: Name of the notifier library.
        notifier_url: Homepage of the notifier library.
        project_root: Detected project root ("" when unknown).
        hostname: Host name; resolved from the OS when omitted.

    Returns:
        A new Notice.
    """
    return Notice(
        notifier=NotifierInfo(name=notifier_name, url=notifier_url),
        error=ErrorInfo(message=message, backtrace=backtrace),
        request=RequestInfo(cgi_data=platform_metadata(), context=context),
        server=ServerInfo(
            hostname=current_hostname() if hostname is None else hostname,
            project_root=project_root,
        ),
    )


def serialize_notice(notice: Notice) -> bytes:
    """Encode a notice as UTF-8 JSON.

    Raises:
        NoticeSerializationError: If any value in the notice (typically a
            context value) is not JSON serializable.
    """
    try:
        return json.dumps(notice.to_payload(), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise NoticeSerializationError(f"notice is not JSON serializable: {e}") from e


def parse_notice_id(body: bytes) -> str:
    """Extract the notice id from the service's JSON reply.

    A JSON object without an ``id`` yields an empty string.

    Raises:
        ResponseParseError: If the body is not a JSON object or the id is
            not a string.
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ResponseParseError(f"invalid JSON in response body: {e}") from e

    if not isinstance(data, dict):
        raise ResponseParseError(
            f"expected a JSON object in response body, got {type(data).__name__}"
        )

    notice_id = data.get("id", "")
    if not isinstance(notice_id, str):
        raise ResponseParseError(
            f"expected string id in response body, got {type(notice_id).__name__}"
        )
    return notice_id
