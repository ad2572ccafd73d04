"""Context store attached to a client.

A context maps string keys to arbitrary values. It is serialized into JSON
and sent along with every notice the owning client reports.
"""

import copy
import threading
from typing import Any


class Context:
    """Mutable key/value metadata owned by a single client.

    Accessors are guarded by a lock so that a report taking a snapshot never
    observes a half-applied mutation from another thread.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for key, or default when the key is absent."""
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Insert or replace the value associated with key."""
        with self._lock:
            self._values[key] = value

    def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is a no-op."""
        with self._lock:
            self._values.pop(key, None)

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the current values.

        Later mutations of the context never leak into a snapshot already
        taken.
        """
        with self._lock:
            return copy.deepcopy(self._values)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __repr__(self) -> str:
        return f"Context({self.snapshot()!r})"
