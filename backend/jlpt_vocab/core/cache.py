from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Tuple

VOCAB_LIST_KEY = "vocab-list"
VOCAB_COUNT_KEY = "vocab-count"

# loader() -> (value, complete); incomplete values are served but never stored
Loader = Callable[[], Tuple[Any, bool]]


class QueryCache:
    """
    Cache of read results keyed by query name.
    Writers must call invalidate() after a successful mutation.

    Every invalidate() bumps a generation counter. A load that was started
    before an invalidate() finished is returned to its caller but not kept.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def get_or_load(self, key: str, loader: Loader) -> Any:
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            generation = self._generation

        value, complete = loader()

        with self._lock:
            if complete and generation == self._generation:
                self._entries[key] = value
        return value

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def invalidate(self, *keys: str) -> None:
        with self._lock:
            self._generation += 1
            if not keys:
                self._entries.clear()
                return
            for key in keys:
                self._entries.pop(key, None)


vocab_cache = QueryCache()
