"""Reporting client for the hbreport notifier.

This module is the only place that combines the core domain logic with a
concrete transport adapter. A Client owns its configuration, its context
and its transport; callers create one per process (or per reporting scope)
and pass it where it is needed.

Report flow:
1. Render the error value into a message
2. Capture the caller's stack and filter file paths
3. Assemble the notice with platform metadata and a context snapshot
4. Serialize the notice to JSON
5. POST it once and interpret the reply
"""

import copy
import logging
from types import TracebackType
from typing import Any

from hbreport.adapters.transport.httpx_transport import HttpxNoticeTransport
from hbreport.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_NOTIFIER_NAME,
    DEFAULT_NOTIFIER_URL,
    DEFAULT_TIMEOUT,
    Settings,
    load_settings,
)
from hbreport.core.backtrace import capture_backtrace, detect_project_root
from hbreport.core.context import Context
from hbreport.core.errors import (
    NoticeSerializationError,
    ReportError,
    UnexpectedStatusError,
)
from hbreport.core.models import Notice
from hbreport.core.notice import (
    assemble_notice,
    format_message,
    parse_notice_id,
    render_message,
    serialize_notice,
)
from hbreport.core.ports import NoticeTransportPort

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


class Client:
    """Sends notices for reported errors to the tracking service."""

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        notifier_name: str = DEFAULT_NOTIFIER_NAME,
        notifier_url: str = DEFAULT_NOTIFIER_URL,
        project_root: str | None = None,
        transport: NoticeTransportPort | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            api_key: Project API key, sent verbatim in the X-API-Key header.
            endpoint: URL notices are posted to.
            notifier_name: Name of the library sending notices.
            notifier_url: Homepage of the library sending notices.
            project_root: Root used to shorten backtrace paths. Detected
                from the call stack when None.
            transport: Transport used for delivery. Defaults to httpx.
            timeout: Deadline for the default transport, in seconds.
        """
        self.api_key = api_key
        self.project_root = detect_project_root() if project_root is None else project_root
        self.context = Context()
        self.endpoint = endpoint
        self.notifier_name = notifier_name
        self.notifier_url = notifier_url
        self.transport = transport or HttpxNoticeTransport(timeout=timeout)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: NoticeTransportPort | None = None,
    ) -> "Client":
        """Create a client from Settings, loading them from the environment if omitted."""
        settings = settings or load_settings()
        return cls(
            settings.api_key,
            endpoint=settings.endpoint,
            notifier_name=settings.notifier_name,
            notifier_url=settings.notifier_url,
            transport=transport,
            timeout=settings.timeout_seconds,
        )

    def __enter__(self) -> "Client":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport's network resources."""
        self.transport.close()

    def report(self, error: Any) -> str:
        """Send a notice for error and return the notice id.

        Exceptions are described by their message; any other value by its
        string rendering. The backtrace starts at the caller of report.

        Args:
            error: Exception or arbitrary value to report.

        Returns:
            Identifier assigned to the notice by the service.

        Raises:
            ReportError: If the notice could not be serialized, sent, or
                acknowledged. Nothing is retried.
        """
        return self._deliver(render_message(error), skip=1)

    def reportf(self, format: str, *args: Any) -> str:
        """Format a message with %-style placeholders and report it.

        Without args the format is sent as is. Args that do not fit the
        format are appended to it rather than raising.

        The backtrace starts at the caller of reportf, exactly as with report.
        """
        return self._deliver(format_message(format, args), skip=1)

    def build_notice(self, message: str) -> Notice:
        """Assemble the notice that would be sent for message, without sending it."""
        return self._build_notice(message, skip=1)

    def recover(self, reraise: bool = False) -> "Recovery":
        """Context manager that reports an exception escaping its block.

        Example:
            with client.recover() as recovery:
                run()
            if recovery.notice_id:
                print(f"Recovered and reported error {recovery.notice_id}")
        """
        return Recovery(self, reraise=reraise)

    def _deliver(self, message: str, skip: int) -> str:
        notice = self._build_notice(message, skip + 1)
        body = serialize_notice(notice)

        logger.debug(
            f"Sending notice to {self.endpoint}",
            extra={"endpoint": self.endpoint, "frames": len(notice.error.backtrace)},
        )
        response = self.transport.send(self.endpoint, body, self._headers())

        if not response.is_success:
            raise UnexpectedStatusError(response.status_code, response.body)

        notice_id = parse_notice_id(response.body)
        logger.debug(f"Notice accepted with id {notice_id!r}")
        return notice_id

    def _build_notice(self, message: str, skip: int) -> Notice:
        backtrace = capture_backtrace(skip + 1, project_root=self.project_root)

        try:
            context = self.context.snapshot()
        except (TypeError, copy.Error) as e:
            raise NoticeSerializationError(f"context cannot be copied: {e}") from e

        return assemble_notice(
            message,
            backtrace=backtrace,
            context=context,
            notifier_name=self.notifier_name,
            notifier_url=self.notifier_url,
            project_root=self.project_root,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            API_KEY_HEADER: self.api_key,
        }


class Recovery:
    """Reports the exception that ends a with-block.

    On successful delivery the exception is swallowed unless reraise is set.
    If delivery fails, the ReportError is raised from the original exception.
    """

    def __init__(self, client: Client, reraise: bool = False):
        self.client = client
        self.reraise = reraise
        self.notice_id: str | None = None
        self.error: BaseException | None = None

    def __enter__(self) -> "Recovery":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        if exc_val is None or not isinstance(exc_val, Exception):
            return False

        self.error = exc_val
        try:
            self.notice_id = self.client._deliver(render_message(exc_val), skip=1)
        except ReportError as e:
            raise e from exc_val

        logger.info(f"Recovered and reported error {self.notice_id}")
        return not self.reraise
