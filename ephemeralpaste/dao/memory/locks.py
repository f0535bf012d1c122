import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLock:
    """One mutex per key, created on demand and dropped when nobody holds or waits for it

    Holders of different keys never block each other.

    Example:
        >>> locks = KeyedLock()
        >>> with locks('abc12345'):
        ...     pass
        >>> len(locks)
        0
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, tuple[threading.Lock, int]] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def __call__(self, key: str) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, users + 1)

        try:
            with lock:
                yield
        finally:
            with self._guard:
                lock, users = self._locks[key]
                if users == 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)
