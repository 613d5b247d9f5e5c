from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any


class QueryCache:
    """
    Per-panel cache of fetched query results.

    Keys are usually ``(resource, startup_id)``. Initial data embedded in the
    startup record seeds a key once; after an invalidation the next read goes
    to the server.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}
        self._seeded: set[Hashable] = set()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = value

    def get_or_fetch(self, key: Hashable, fetcher: Callable[[], Any], *, initial: Any = None) -> Any:
        if key in self._entries:
            return self._entries[key]
        if initial is not None and key not in self._seeded:
            self._seeded.add(key)
            self._entries[key] = initial
            return initial
        value = fetcher()
        self._entries[key] = value
        return value

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)
        self._seeded.add(key)

    def clear(self) -> None:
        self._entries.clear()
