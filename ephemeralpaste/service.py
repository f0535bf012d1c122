"""Paste lifecycle: creation and view-limited, time-limited access

The PasteService owns one store backend (chosen at startup) and decides, on
every access, whether a paste may still be served and when it must be deleted.

Responsibilities:
    - Validate input and create pastes;
    - Serve pastes while both the time window and the view limit allow;
    - Delete a paste as soon as either limit is crossed;
    - Make each access to one paste indivisible w.r.t. other accesses to it.

Classes:
    PasteService:
        Lifecycle orchestrator exposing `create()` and `access()`.

Example:
    >>> from ephemeralpaste.dao import PasteMemoryDAO
    >>> with PasteService(PasteMemoryDAO()) as service:
    ...     created = service.create('hello', ttl_seconds=3600, max_views=2)
    ...     service.access(created.id).remaining_views
    ...     service.access(created.id).remaining_views
    ...     service.access(created.id)
    1
    0
    Traceback (most recent call last):
        ...
    ephemeralpaste.exceptions.PasteNotFoundError: Paste not found.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta, UTC
from typing import Optional

from ephemeralpaste.models import CreatedPaste, PasteModel, PasteView
from ephemeralpaste.policy import is_time_expired, is_view_limit_exceeded
from ephemeralpaste.exceptions import BackendUnavailableError, PasteNotFoundError
from ephemeralpaste.dao.base import PasteBaseDAO
from ephemeralpaste.dao.exceptions import DataStoreError
from ephemeralpaste.utils.identifiers import generate_paste_id, normalize_paste_id
from ephemeralpaste.utils.validation import as_integer, validate_paste_input


logger = logging.getLogger(__name__)


def _count_view(stored: PasteModel) -> PasteModel:
    # Applied to the record as read inside the store's transaction, so a
    # concurrent commit (e.g. after a lock timeout) is never overwritten.
    return replace(stored, view_count=stored.view_count + 1)


class PasteService:
    """Create pastes and serve them within their time and view limits

    Attributes:
        dao (PasteBaseDAO):
            Store backend owned by this service. Closed by `close()`.

    Methods:
        create(content, ttl_seconds=None, max_views=None, now=None) -> CreatedPaste:
            Validate input and store a new paste.
            Raises ValidationError on bad input, BackendUnavailableError if the store fails.

        access(paste_id, now=None) -> PasteView:
            Serve a paste once, counting the view.
            Raises PasteNotFoundError if the paste can't be served,
            BackendUnavailableError if the store fails.

        healthcheck() -> bool:
            True if the store backend is reachable.

        close() -> None:
            Close the store backend.
    """

    def __init__(self, dao: PasteBaseDAO, clock: Optional[Callable[[], datetime]] = None):
        self.dao = dao
        self._clock = clock or (lambda: datetime.now(UTC))

    def __enter__(self) -> 'PasteService':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def create(
        self,
        content: str,
        ttl_seconds: Optional[int] = None,
        max_views: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> CreatedPaste:
        """Store a new paste

        Args:
            content (str):
                Paste text, 1 to 1,000,000 characters. Stored unchanged.
            ttl_seconds (Optional[int]):
                Lifetime in seconds, 1 to 31,536,000. None means no time limit.
            max_views (Optional[int]):
                Number of accesses allowed, 1 to 1,000,000. None means unlimited.
            now (Optional[datetime]):
                Creation time. Defaults to the service clock.

        Returns:
            CreatedPaste: id, created_at and expires_at of the new paste.

        Raises:
            ValidationError:
                If any input is out of range. Nothing is stored.
            BackendUnavailableError:
                If the store backend fails to persist the paste.
        """
        validate_paste_input(content, ttl_seconds=ttl_seconds, max_views=max_views)
        ttl_seconds, max_views = as_integer(ttl_seconds), as_integer(max_views)

        created_at = now or self._clock()
        paste = PasteModel(
            id=generate_paste_id(),
            content=content,
            created_at=created_at,
            ttl_seconds=ttl_seconds,
            expires_at=created_at + timedelta(seconds=ttl_seconds) if ttl_seconds is not None else None,
            max_views=max_views,
        )

        try:
            self.dao.put(paste)
        except DataStoreError as e:
            logger.error('Failed to store paste.', extra={'pasteId': paste.id, 'backend': self.dao.backend.value, 'reason': str(e)})
            raise BackendUnavailableError('Failed to create paste.') from e

        logger.info(
            'Paste created.',
            extra={'pasteId': paste.id, 'ttlSeconds': ttl_seconds, 'maxViews': max_views},
        )
        return CreatedPaste(id=paste.id, created_at=paste.created_at, expires_at=paste.expires_at)

    def access(self, paste_id: str, now: Optional[datetime] = None) -> PasteView:
        """Serve a paste once and count the view

        Procedure (steps 2-7 hold the paste's lock, so concurrent accesses to
        the same paste run one after another):
        - Step 1: Reject malformed ids without touching the store
        - Step 2: Load the paste
        - Step 3: Delete it if its time window has passed
        - Step 4: Delete it if its views were already used up
        - Step 5: Persist one more view (incrementing the stored count)
        - Step 6: Compute the remaining views
        - Step 7: Delete it if this was the last permitted view. The content
                  was captured in step 2, so this caller still receives it
        - Step 8: Return the content

        NOTE: A failed write-back in step 5 doesn't fail the access; the
              content is delivered anyway. The lost increment can let one later
              access through beyond the limit. If this access is the last
              permitted one, the paste is deleted regardless.

        Args:
            paste_id (str):
                Paste identifier (8 hexadecimal characters).
            now (Optional[datetime]):
                Reference time for expiry checks. Defaults to the service clock.

        Returns:
            PasteView: content, remaining views and expiry of the paste.

        Raises:
            PasteNotFoundError:
                If the id is malformed, or the paste doesn't exist, expired, or
                has no views left. The causes are deliberately indistinguishable.
            BackendUnavailableError:
                If the store backend can't be reached.
        """
        normalized_id = normalize_paste_id(paste_id)
        if normalized_id is None:
            logger.debug('Rejected malformed paste id.')
            raise PasteNotFoundError('Paste not found.')

        now = now or self._clock()
        try:
            with self.dao.lock(normalized_id):
                return self._consume_view(normalized_id, now)
        except DataStoreError as e:
            logger.error('Failed to access paste.', extra={'pasteId': normalized_id, 'backend': self.dao.backend.value, 'reason': str(e)})
            raise BackendUnavailableError('Failed to access paste.') from e

    def _consume_view(self, paste_id: str, now: datetime) -> PasteView:
        # Caller must hold self.dao.lock(paste_id)
        paste = self.dao.get(paste_id)
        if paste is None:
            raise PasteNotFoundError('Paste not found.')

        if is_time_expired(paste, now):
            self._retire(paste_id, reason='expired')
            raise PasteNotFoundError('Paste not found.')

        if is_view_limit_exceeded(paste):
            self._retire(paste_id, reason='view_limit_exceeded')
            raise PasteNotFoundError('Paste not found.')

        view_count = paste.view_count + 1
        try:
            updated = self.dao.update(paste_id, _count_view)
        except DataStoreError:
            logger.exception('Failed to persist view count. Serving paste anyway.', extra={'pasteId': paste_id, 'viewCount': view_count})
        else:
            if not updated:
                logger.warning('Paste vanished before its view count was persisted.', extra={'pasteId': paste_id})

        remaining_views = paste.max_views - view_count if paste.max_views is not None else None
        view = PasteView(content=paste.content, remaining_views=remaining_views, expires_at=paste.expires_at)

        if paste.max_views is not None and view_count >= paste.max_views:
            self._retire(paste_id, reason='last_view')

        logger.debug('Paste served.', extra={'pasteId': paste_id, 'viewCount': view_count, 'remainingViews': remaining_views})
        return view

    def _retire(self, paste_id: str, reason: str) -> None:
        """Delete a paste that must no longer be served

        A failed delete is logged and not raised: the paste is unservable either
        way, and the next access re-detects the crossed limit and retries.
        """
        try:
            self.dao.delete(paste_id)
        except DataStoreError:
            logger.exception('Failed to delete retired paste.', extra={'pasteId': paste_id, 'reason': reason})
        else:
            logger.info('Paste retired.', extra={'pasteId': paste_id, 'reason': reason})

    def healthcheck(self) -> bool:
        return self.dao.healthcheck()

    def close(self) -> None:
        self.dao.close()
