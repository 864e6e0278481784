"""Per-class cache for resolved bindings.

Design:
- Keyed by record class
- ``weak`` retention uses a WeakKeyDictionary: once a class is otherwise
  unreachable its entry is dropped by the garbage collector. Values must
  not reference the key or the entry can never be collected.
- ``strong`` retention keeps entries for the process lifetime; fine only
  when the set of exported classes is small and fixed.
- No exactly-once guarantee: two threads missing on the same class both
  compute, and the last put wins. Results are equivalent. ``setdefault``
  keeps the first stored entry instead, for values whose identity matters.
"""

from __future__ import annotations

import threading
import weakref
from collections.abc import MutableMapping
from typing import Generic, Literal, TypeVar

V = TypeVar("V")

Retention = Literal["weak", "strong"]


class TypeCache(Generic[V]):
    """Thread-safe class -> value cache."""

    def __init__(self, retention: Retention = "weak") -> None:
        self.retention = retention
        self._entries: MutableMapping[type, V]
        if retention == "weak":
            self._entries = weakref.WeakKeyDictionary()
        else:
            self._entries = {}
        self._lock = threading.Lock()

    def get(self, key: type) -> V | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: type, value: V) -> None:
        with self._lock:
            self._entries[key] = value

    def setdefault(self, key: type, value: V) -> V:
        """Store ``value`` unless an entry exists; return the stored entry."""
        with self._lock:
            return self._entries.setdefault(key, value)

    def discard(self, key: type) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
