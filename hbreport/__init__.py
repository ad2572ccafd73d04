"""hbreport: report errors to Honeybadger-compatible error tracking services.

Typical use:

    from hbreport import Client

    client = Client("project-api-key")
    client.context.set("user_id", 42)
    notice_id = client.report(error)
"""

from hbreport.client import Client, Recovery
from hbreport.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_NOTIFIER_NAME,
    DEFAULT_NOTIFIER_URL,
    Settings,
    load_settings,
)
from hbreport.core.context import Context
from hbreport.core.errors import (
    DeliveryTransportError,
    NoticeSerializationError,
    ReportError,
    RequestBuildError,
    ResponseParseError,
    UnexpectedStatusError,
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Context",
    "DEFAULT_ENDPOINT",
    "DEFAULT_NOTIFIER_NAME",
    "DEFAULT_NOTIFIER_URL",
    "DeliveryTransportError",
    "NoticeSerializationError",
    "Recovery",
    "ReportError",
    "RequestBuildError",
    "ResponseParseError",
    "Settings",
    "UnexpectedStatusError",
    "load_settings",
    "__version__",
]
