"""Transport adapters for delivering notices to the tracking service."""

from .httpx_transport import HttpxNoticeTransport

__all__ = ["HttpxNoticeTransport"]
