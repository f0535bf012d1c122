"""Expiry policy for stored pastes.

Both predicates are pure: the reference time is always passed in, so the
outcome of an access can be reproduced exactly in tests.

Functions:
    is_time_expired(paste, now) -> bool
        True once `now` has reached the paste's expiry time.

    is_view_limit_exceeded(paste) -> bool
        True once the paste has served all of its permitted views.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> t0 = datetime(2025, 10, 15, tzinfo=UTC)
    >>> paste = PasteModel(id='abc12345', content='hi', created_at=t0,
    ...                    ttl_seconds=60, expires_at=t0 + timedelta(seconds=60))
    >>> is_time_expired(paste, t0 + timedelta(seconds=59))
    False
    >>> is_time_expired(paste, t0 + timedelta(seconds=60))
    True
"""

from datetime import datetime

from ephemeralpaste.models import PasteModel


def is_time_expired(paste: PasteModel, now: datetime) -> bool:
    return paste.expires_at is not None and now >= paste.expires_at


def is_view_limit_exceeded(paste: PasteModel) -> bool:
    return paste.max_views is not None and paste.view_count >= paste.max_views
