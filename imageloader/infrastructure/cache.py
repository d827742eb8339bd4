# imageloader/infrastructure/cache.py
"""
In-memory, path-keyed store for decoded media.

Entries live until they are removed explicitly or the store is cleared: there is no
size bound, TTL or LRU eviction. Callers that need one own the lifecycle themselves.
"""

import logging
import threading
from collections.abc import Hashable
from typing import Generic, TypeVar

app_logger = logging.getLogger("ImageLoader.cache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class CacheStore(Generic[K, V]):
    """
    A thread-safe key -> value table.

    A single lock guards the whole table; values are only ever swapped wholesale,
    never mutated in place. Value lookups (`reverse_lookup`, `contains_value`,
    `remove_value`) are O(n) linear scans comparing with `==`. When several keys hold
    equal values, which one a scan finds first is unspecified.
    """

    def __init__(self, name: str = "cache"):
        self.name = name
        self._entries: dict[K, V] = {}
        self._lock = threading.RLock()

    # --- Key Operations ---
    def get(self, key: K) -> V | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: K, value: V) -> V | None:
        """Inserts or overwrites `key`, returning the previous value if there was one."""
        with self._lock:
            previous = self._entries.get(key)
            self._entries[key] = value
        app_logger.debug(f"[{self.name}] put {_short(key)} (replaced: {previous is not None})")
        return previous

    # Explicit adds and replacements share put()'s overwrite semantics
    add = put
    replace = put

    def remove(self, key: K) -> V | None:
        with self._lock:
            removed = self._entries.pop(key, None)
        if removed is not None:
            app_logger.debug(f"[{self.name}] removed {_short(key)}")
        return removed

    def contains_key(self, key: K) -> bool:
        with self._lock:
            return key in self._entries

    # --- Value Operations ---
    def reverse_lookup(self, value: V) -> K | None:
        """Returns a key whose stored value equals `value`, or None."""
        with self._lock:
            return self._find_key(value)

    def contains_value(self, value: V) -> bool:
        with self._lock:
            return self._find_key(value) is not None

    def remove_value(self, value: V) -> V | None:
        """Removes one entry whose value equals `value` and returns the removed value."""
        with self._lock:
            key = self._find_key(value)
            if key is None:
                return None
            removed = self._entries.pop(key)
        app_logger.debug(f"[{self.name}] removed {_short(key)} by value")
        return removed

    def _find_key(self, value: V) -> K | None:
        # Identity matches are found before content matches
        for key, stored in self._entries.items():
            if stored is value:
                return key
        for key, stored in self._entries.items():
            if stored == value:
                return key
        return None

    # --- Table Operations ---
    def is_empty(self) -> bool:
        with self._lock:
            return not self._entries

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self):
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        app_logger.debug(f"[{self.name}] cleared {count} entries")

    def keys(self) -> list[K]:
        with self._lock:
            return list(self._entries)

    def snapshot(self) -> dict[K, V]:
        """Returns a shallow copy of the whole table."""
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def __repr__(self) -> str:
        return f"CacheStore(name={self.name!r}, size={self.size()})"


def _short(key) -> str:
    # Data URI keys can be megabytes long
    text = str(key)
    return text if len(text) <= 64 else f"{text[:61]}..."
