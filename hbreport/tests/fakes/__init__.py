"""Fake implementations of core ports for testing.

- FakeNoticeTransport: Captures delivered notices and returns canned replies
"""

from .transport import FakeNoticeTransport, SentRequest

__all__ = [
    "FakeNoticeTransport",
    "SentRequest",
]
