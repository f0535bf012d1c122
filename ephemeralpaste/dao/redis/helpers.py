import functools
import redis
from redis.backoff import AbstractBackoff
from typing import TypeVar, Any
from collections.abc import Callable

from ephemeralpaste.dao.exceptions import DataStoreError


__all__ = ['LinearBackoff', 'connection_error_message', 'handle_redis_connection_error']

F = TypeVar('F', bound=Callable[..., Any])

# Errors meaning "the Redis server can't be reached right now"
REDIS_CONNECTION_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


class LinearBackoff(AbstractBackoff):
    """Backoff growing by `base` seconds per failed attempt, capped at `cap` seconds

    Example:
        >>> backoff = LinearBackoff(cap=0.5, base=0.05)
        >>> [backoff.compute(n) for n in (1, 2, 10, 20)]
        [0.05, 0.1, 0.5, 0.5]
    """

    def __init__(self, cap: float, base: float):
        self._cap = cap
        self._base = base

    def compute(self, failures: int) -> float:
        return min(self._cap, self._base * failures)


def connection_error_message(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    redis_host = info.get('host')
    redis_port = info.get('port')
    redis_db = info.get('db')
    return f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}."


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle Redis errors

    Connectivity errors are reported with the Redis address. Any other error
    from the server (e.g. OOM under maxmemory, READONLY after a failover) is
    reported with the server's own message.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis error.

    Example:
        >>> @handle_redis_connection_error
        ... def get(self, paste_id):
        ...     return self.redis.get(self.keys.paste_key(paste_id))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except REDIS_CONNECTION_ERRORS as e:
            raise DataStoreError(connection_error_message(self.redis)) from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis command failed: {e}') from e

    return wrapper
