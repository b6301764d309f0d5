"""Per-key mutual exclusion for read-modify-write sequences.

Handlers run in FastAPI's threadpool, so two requests touching the same
recipe (or resolving the same new ingredient name) can interleave. A
KeyedLock hands out one lock per key and drops it again once nobody holds
or waits on it.
"""

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class KeyedLock:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._waiters: dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._waiters[key] = self._waiters.get(key, 0) + 1
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._waiters[key] -= 1
                if self._waiters[key] == 0:
                    del self._waiters[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Process-wide registries shared by every request-scoped service
recipe_locks = KeyedLock()
ingredient_locks = KeyedLock()
