from contextlib import contextmanager
from threading import Lock
from typing import Dict, Hashable


class KeyedLock:
    """One mutex per key, created on first use."""

    def __init__(self):
        self._locks: Dict[Hashable, Lock] = {}
        self._guard = Lock()

    def _lock_for(self, key: Hashable) -> Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = Lock()
            return lock

    @contextmanager
    def hold(self, key: Hashable):
        lock = self._lock_for(key)
        with lock:
            yield

    def discard(self, key: Hashable) -> None:
        with self._guard:
            self._locks.pop(key, None)


# serializes membership changes of one project within this process
project_membership_locks = KeyedLock()
