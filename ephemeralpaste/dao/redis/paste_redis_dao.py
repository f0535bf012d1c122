"""Data Access Object (DAO) implementation for managing pastes in Redis

This module provides a Redis-based implementation of PasteBaseDAO for CRUD-like
operations with PasteModel instances.

Responsibilities:
    - Store pastes as JSON documents with a physical expiry;
    - Rewrite pastes atomically while preserving their remaining expiry;
    - Provide per-paste distributed locks;
    - Raise DataStoreError on Redis errors and on undecodable stored values.

Classes:
    PasteRedisDAO:
        DAO for storing and retrieving PasteModel in a Redis datastore.

Example:
    >>> from ephemeralpaste.dao.redis import PasteRedisDAO

    >>> dao = PasteRedisDAO(redis_url="redis://localhost:6379/0", prefix="app:dev")
    >>> dao.put(paste)
    <PasteRedisDAO>

    >>> dao.get("abc12345").content
    'hello'

    >>> with dao.lock("abc12345"):
    ...     dao.update("abc12345", lambda p: replace(p, view_count=p.view_count + 1))
    True
"""

import json
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Optional

import redis
from beartype import beartype

from ephemeralpaste.constants import TTL, Backend, RedisSettings
from ephemeralpaste.models import PasteModel
from ephemeralpaste.dao.base import PasteBaseDAO
from ephemeralpaste.dao.exceptions import DataStoreError
from ephemeralpaste.dao.redis.mixins import RedisClientMixin
from ephemeralpaste.dao.redis.helpers import REDIS_CONNECTION_ERRORS, connection_error_message, handle_redis_connection_error


logger = logging.getLogger(__name__)


def _dumps(paste: PasteModel) -> str:
    return json.dumps(paste.to_dict(), separators=(',', ':'), ensure_ascii=False)


def _loads(blob: str | bytes) -> PasteModel:
    try:
        return PasteModel.from_dict(json.loads(blob))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise DataStoreError(f'Stored paste is not a valid paste document: {e}') from e


class PasteRedisDAO(RedisClientMixin, PasteBaseDAO):
    """Redis-based Data Access Object (DAO) for managing pastes

    This class implements the PasteBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        default_ttl_seconds (int):
            Physical expiry for pastes stored without a TTL.

    Methods:
        put(paste: PasteModel, ttl_hint: Optional[int] = None) -> PasteRedisDAO:
            SET the paste JSON with an expiry of ttl_hint, paste.ttl_seconds or
            default_ttl_seconds (first one set).

        get(paste_id: str) -> PasteModel | None:
            GET and decode the paste JSON.

        update(paste_id: str, mutator) -> bool:
            Rewrite the paste in a WATCH/MULTI transaction, keeping the remaining TTL.

        delete(paste_id: str) -> bool:
            DEL the paste key.

        lock(paste_id: str) -> context manager:
            Hold a redis-py distributed lock on the paste.

    All methods raise DataStoreError on Redis errors; get() and update() also
    raise it when a stored value is not a valid paste document.
    """

    backend = Backend.REDIS

    def __init__(self, *args, default_ttl_seconds: int = TTL.DEFAULT, **kwargs):
        super().__init__(*args, **kwargs)
        self.default_ttl_seconds = default_ttl_seconds

    @handle_redis_connection_error
    @beartype
    def put(self, paste: PasteModel, ttl_hint: Optional[int] = None) -> 'PasteRedisDAO':
        """Store a paste in Redis

        Every paste key carries a physical expiry, so pastes nobody reads again
        are reclaimed by Redis itself.

        Args:
            paste (PasteModel):
                The paste to store.
            ttl_hint (Optional[int]):
                Physical expiry in seconds. Defaults to paste.ttl_seconds, then
                to default_ttl_seconds.

        Returns:
            PasteRedisDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If a Redis command fails (connection issue or server error).

        Example:
            >>> dao.put(paste)
            <PasteRedisDAO>
        """
        ttl = ttl_hint or paste.ttl_seconds or self.default_ttl_seconds
        self.redis.set(self.keys.paste_key(paste.id), _dumps(paste), ex=ttl)
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, paste_id: str) -> PasteModel | None:
        blob = self.redis.get(self.keys.paste_key(paste_id))
        if blob is None:
            return None
        return _loads(blob)

    @handle_redis_connection_error
    @beartype
    def update(self, paste_id: str, mutator: Callable[[PasteModel], PasteModel]) -> bool:
        """Apply `mutator` to a stored paste as a single read-modify-write

        The paste key is WATCHed while its value and remaining TTL are read, and
        the rewrite is queued in MULTI/EXEC. If another client touches the key in
        between, EXEC aborts and redis-py retries the whole callable.

        NOTE: TTL semantics follow Redis:
              - TTL > 0:  rewrite with the same remaining expiry (SET ... EX <ttl>)
              - TTL = -1: key has no expiry, rewrite without one
              Redis 6+ could use SET ... KEEPTTL instead, but reading TTL works
              against every server version.

        Args:
            paste_id (str):
                Id of the paste to rewrite.
            mutator (Callable[[PasteModel], PasteModel]):
                Receives the stored paste, returns its replacement.

        Returns:
            bool: True if updated, False if the paste doesn't exist.

        Raises:
            DataStoreError:
                If a Redis command fails (connection issue or server error).
        """
        key = self.keys.paste_key(paste_id)

        def rewrite(pipe: redis.client.Pipeline) -> bool:
            # Immediate mode (after WATCH): commands return values right away
            blob = pipe.get(key)
            if blob is None:
                return False
            ttl = pipe.ttl(key)
            payload = _dumps(mutator(_loads(blob)))

            pipe.multi()
            if ttl > 0:
                pipe.set(key, payload, ex=ttl)
            else:
                pipe.set(key, payload)
            return True

        return self.redis.transaction(rewrite, key, value_from_callable=True)

    @handle_redis_connection_error
    @beartype
    def delete(self, paste_id: str) -> bool:
        return self.redis.delete(self.keys.paste_key(paste_id)) > 0

    @contextmanager
    def lock(self, paste_id: str) -> Iterator[None]:
        """Hold a distributed lock on one paste for the duration of the block

        The lock expires on its own after RedisSettings.LOCK_TIMEOUT seconds so a
        crashed holder can't wedge the paste forever.

        Raises:
            DataStoreError:
                If Redis fails or the lock isn't acquired within
                RedisSettings.LOCK_BLOCKING_TIMEOUT seconds.
        """
        lock = self.redis.lock(
            self.keys.paste_lock_key(paste_id),
            timeout=RedisSettings.LOCK_TIMEOUT,
            blocking_timeout=RedisSettings.LOCK_BLOCKING_TIMEOUT,
        )
        try:
            acquired = lock.acquire()
        except REDIS_CONNECTION_ERRORS as e:
            raise DataStoreError(connection_error_message(self.redis)) from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f"Failed to acquire lock on paste '{paste_id}': {e}") from e
        if not acquired:
            raise DataStoreError(f"Timed out waiting for lock on paste '{paste_id}'.")

        try:
            yield
        finally:
            try:
                lock.release()
            except redis.exceptions.LockError:
                logger.warning('Paste lock expired before it was released.', extra={'pasteId': paste_id})
            except redis.exceptions.RedisError:
                logger.warning('Failed to release paste lock. It will expire on its own.', extra={'pasteId': paste_id})

    def healthcheck(self) -> bool:
        return self._healthcheck(raise_error=False)

    def close(self) -> None:
        self.redis.close()
