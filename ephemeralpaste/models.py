from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class PasteModel:
    """Represent a stored paste.

    Attributes:
        id (str):
            8-character hexadecimal identifier.
        content (str):
            The text blob exactly as the writer submitted it.
        created_at (datetime):
            Creation time (UTC). Never changes.
        ttl_seconds (Optional[int]):
            Requested lifetime in seconds. Kept alongside the record so a backend
            with native expiry can re-apply it.
        expires_at (Optional[datetime]):
            `created_at + ttl_seconds`. None means no time-based expiry.
        max_views (Optional[int]):
            Number of content-returning accesses allowed. None means unlimited.
        view_count (int):
            Accesses served so far.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> paste = PasteModel(
        ...     id='abc12345',
        ...     content='hello',
        ...     created_at=now,
        ...     ttl_seconds=3600,
        ...     expires_at=now + timedelta(seconds=3600),
        ...     max_views=2,
        ... )
        >>> paste.view_count
        0
    """

    id: str
    content: str
    created_at: datetime
    ttl_seconds: Optional[int] = None
    expires_at: Optional[datetime] = None
    max_views: Optional[int] = None
    view_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary (ISO-8601 timestamps)."""
        return {
            'id': self.id,
            'content': self.content,
            'created_at': self.created_at.isoformat(),
            'ttl_seconds': self.ttl_seconds,
            'expires_at': self.expires_at.isoformat() if self.expires_at is not None else None,
            'max_views': self.max_views,
            'view_count': self.view_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'PasteModel':
        """Build a PasteModel from the output of `to_dict()`."""
        expires_at = data.get('expires_at')
        return cls(
            id=data['id'],
            content=data['content'],
            created_at=datetime.fromisoformat(data['created_at']),
            ttl_seconds=data.get('ttl_seconds'),
            expires_at=datetime.fromisoformat(expires_at) if expires_at is not None else None,
            max_views=data.get('max_views'),
            view_count=int(data.get('view_count', 0)),
        )


# fmt: off
@dataclass(frozen=True)
class CreatedPaste:
    id: str                             # Identifier readers use to access the paste
    created_at: datetime                # Creation time (UTC)
    expires_at: datetime | None = None  # None if the paste has no TTL


@dataclass(frozen=True)
class PasteView:
    content: str                        # Paste content served by this access
    remaining_views: int | None = None  # Accesses left after this one, None if unlimited
    expires_at: datetime | None = None  # None if the paste has no TTL
# fmt: on
