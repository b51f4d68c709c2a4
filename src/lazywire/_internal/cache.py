from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lazywire.providers import Provider

logger = logging.getLogger(__name__)

MISSING: Any = object()


class GlobalInstanceCache:
    """Process-wide storage for instances of shared providers.

    Values are either finished instances or pending futures of asynchronous
    constructions. Every write is performed under a lock, so threaded hosts
    observe the check-then-act sequences of the resolver atomically.
    """

    __slots__ = ("_construction_locks", "_construction_locks_lock", "_instances", "_lock")

    def __init__(self) -> None:
        self._instances: dict[Provider[Any], Any] = {}
        self._lock = threading.Lock()
        self._construction_locks: dict[Provider[Any], threading.RLock] = {}
        self._construction_locks_lock = threading.Lock()

    def __contains__(self, provider: Provider[Any]) -> bool:
        return provider in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def get(self, provider: Provider[Any]) -> Any:
        """Return the cached value for ``provider`` or ``MISSING``."""
        return self._instances.get(provider, MISSING)

    def store(self, provider: Provider[Any], instance: Any) -> Any:
        """Store a finished instance unless one is already cached.

        Returns:
            The instance that ended up in the cache. It differs from
            ``instance`` only when another construction stored first.

        """
        with self._lock:
            return self._instances.setdefault(provider, instance)

    def store_pending(self, provider: Provider[Any], future: Any) -> None:
        """Store an in-flight construction, replacing any previous entry.

        Callers hold ``construction_lock(provider)`` and have re-checked the
        cache, so an entry is only replaced after it was evicted or cleared.
        """
        with self._lock:
            self._instances[provider] = future

    def construction_lock(self, provider: Provider[Any]) -> threading.RLock:
        """Return the lock serializing construction of ``provider``.

        Uses double-checked locking to minimize lock contention. The lock is
        reentrant so that a factory resolving its own provider through a
        nested injection context does not deadlock.
        """
        if provider not in self._construction_locks:
            with self._construction_locks_lock:
                return self._construction_locks.setdefault(provider, threading.RLock())
        return self._construction_locks[provider]

    def evict(self, provider: Provider[Any], expected: Any) -> bool:
        """Remove the entry for ``provider`` only if it is still ``expected``."""
        with self._lock:
            if self._instances.get(provider, MISSING) is not expected:
                return False
            del self._instances[provider]
            return True

    def clear(self) -> None:
        with self._lock:
            count = len(self._instances)
            self._instances.clear()
        logger.debug("Global instance cache cleared: evicted=%d", count)


global_instances = GlobalInstanceCache()


def reset_global_cache() -> None:
    """Clear every cached and in-flight instance of shared providers.

    Intended for test isolation. Futures that are still pending keep running,
    but later resolutions construct fresh instances.

    """
    global_instances.clear()
