"""
In-process exclusive scopes keyed by an identifier (company id, employee id)
"""

from contextlib import contextmanager
from typing import Dict, Hashable, Iterator
import threading


class KeyedLock:
    """
    One mutex per key, created on demand and dropped when no holder or
    waiter remains. Different keys never block each other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}
        self._users: Dict[Hashable, int] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] = self._users.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._users[key] -= 1
                if self._users[key] == 0:
                    del self._users[key]
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Serializes count-then-insert per company
company_locks = KeyedLock()

# Serializes read-last-event-then-append per employee
employee_locks = KeyedLock()
