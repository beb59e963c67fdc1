from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import RLock

from cachetools import TTLCache


logger = logging.getLogger("cache")


@dataclass
class NarrativeCache:
    """In-memory cache for results that depend only on the current item pool.

    Entries must be invalidated by the owner whenever the pool changes.
    """

    memory: TTLCache
    lock: RLock

    def get(self, key: str):
        with self.lock:
            value = self.memory.get(key)
        if value is not None:
            logger.debug("cache hit %s", key)
        return value

    def set(self, key: str, value) -> None:
        with self.lock:
            self.memory[key] = value

    def invalidate(self, prefix: str) -> int:
        with self.lock:
            stale = [k for k in list(self.memory.keys()) if k == prefix or k.startswith(prefix + ":")]
            for key in stale:
                self.memory.pop(key, None)
        return len(stale)

    def clear(self) -> None:
        with self.lock:
            self.memory.clear()

    def __len__(self) -> int:
        with self.lock:
            return len(self.memory)


def init_cache(ttl_seconds: int, maxsize: int = 512) -> NarrativeCache:
    return NarrativeCache(memory=TTLCache(maxsize=maxsize, ttl=ttl_seconds), lock=RLock())


def cache_key(*parts: str) -> str:
    return ":".join([p for p in parts if p])


def now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
