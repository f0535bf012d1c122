"""In-process fallback DAO for pastes

Pastes live in a dictionary owned by the DAO instance; nothing survives a
restart. Used when the persistent backend is disabled or unreachable at startup.

NOTE:
    Expiry is lazy. An entry whose `ttl_seconds` has elapsed since it was stored
    is dropped only when `get()` or `update()` next looks at it, or when
    `sweep()` is called explicitly. There is no background sweeper, so memory
    held by pastes nobody reads again is only reclaimed that way or on restart.
"""

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta, UTC
from typing import NamedTuple, Optional

from beartype import beartype

from ephemeralpaste.constants import Backend
from ephemeralpaste.models import PasteModel
from ephemeralpaste.dao.base import PasteBaseDAO
from ephemeralpaste.dao.memory.locks import KeyedLock


logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    paste: PasteModel
    stored_at: datetime
    ttl_seconds: int | None


class PasteMemoryDAO(PasteBaseDAO):
    """Dictionary-backed paste DAO

    Args:
        clock (Optional[Callable[[], datetime]]):
            Source of the current time used for lazy expiry.
            Defaults to the UTC wall clock.
    """

    backend = Backend.MEMORY

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(UTC))
        self._entries: dict[str, _Entry] = {}
        self._mutex = threading.Lock()
        self._locks = KeyedLock()

    def __len__(self) -> int:
        with self._mutex:
            return len(self._entries)

    def _is_stale(self, entry: _Entry, now: datetime) -> bool:
        return entry.ttl_seconds is not None and now - entry.stored_at > timedelta(seconds=entry.ttl_seconds)

    def _live_entry(self, paste_id: str) -> _Entry | None:
        # Caller must hold self._mutex
        entry = self._entries.get(paste_id)
        if entry is not None and self._is_stale(entry, self._clock()):
            del self._entries[paste_id]
            return None
        return entry

    @beartype
    def put(self, paste: PasteModel, ttl_hint: Optional[int] = None) -> 'PasteMemoryDAO':
        with self._mutex:
            self._entries[paste.id] = _Entry(paste, self._clock(), ttl_hint or paste.ttl_seconds)
        return self

    @beartype
    def get(self, paste_id: str) -> PasteModel | None:
        with self._mutex:
            entry = self._live_entry(paste_id)
        return entry.paste if entry is not None else None

    @beartype
    def update(self, paste_id: str, mutator: Callable[[PasteModel], PasteModel]) -> bool:
        with self._mutex:
            entry = self._live_entry(paste_id)
            if entry is None:
                return False
            self._entries[paste_id] = entry._replace(paste=mutator(entry.paste))
        return True

    @beartype
    def delete(self, paste_id: str) -> bool:
        with self._mutex:
            return self._entries.pop(paste_id, None) is not None

    @contextmanager
    def lock(self, paste_id: str) -> Iterator[None]:
        with self._locks(paste_id):
            yield

    def sweep(self) -> int:
        """Drop every entry whose TTL has elapsed.

        Returns:
            int: Number of entries dropped.
        """
        now = self._clock()
        with self._mutex:
            stale = [paste_id for paste_id, entry in self._entries.items() if self._is_stale(entry, now)]
            for paste_id in stale:
                del self._entries[paste_id]

        if stale:
            logger.debug('Swept expired pastes from memory.', extra={'count': len(stale)})
        return len(stale)

    def healthcheck(self) -> bool:
        return True

    def close(self) -> None:
        with self._mutex:
            self._entries.clear()
