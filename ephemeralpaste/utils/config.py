"""Utility functions for application configuration management.

Configuration is read from environment variables once, at service startup,
into an immutable `AppConfig`:

    APP_ENV               application environment (default: 'local')
    APP_NAME              application name; used in the key prefix
    PASTE_BACKEND         'redis' (default) or 'memory'
    USE_MEMORY_STORE      'true' forces the in-memory backend
    REDIS_URL             persistent backend target (default: redis://localhost:6379/0)
    DEFAULT_TTL_SECONDS   physical expiry for pastes without a TTL (default: 86400)

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.

    load_config() -> AppConfig
        Read and validate the store configuration.

Example:
    >>> from ephemeralpaste.utils.config import load_config
    >>> config = load_config()
    >>> config.backend
    <Backend.REDIS: 'redis'>
    >>> config.redis_url
    'redis://localhost:6379/0'
"""

import os
import logging
from dataclasses import dataclass

from ephemeralpaste.constants import ENV, TTL, Backend, RedisSettings
from ephemeralpaste.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    backend: Backend = Backend.REDIS
    redis_url: str = RedisSettings.DEFAULT_URL
    default_ttl_seconds: int = TTL.DEFAULT
    prefix: str | None = None


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'ephemeralpaste'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'ephemeralpaste:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _backend() -> Backend:
    if os.environ.get(ENV.Store.USE_MEMORY_STORE, '').lower() == 'true':
        return Backend.MEMORY

    value = os.environ.get(ENV.Store.BACKEND, Backend.REDIS).lower()
    try:
        return Backend(value)
    except ValueError as e:
        choices = ', '.join(b.value for b in Backend)
        raise BadConfigurationError(f'{ENV.Store.BACKEND} must be one of: {choices} (given value: {value!r}).') from e


def _default_ttl_seconds() -> int:
    value = os.environ.get(ENV.Store.DEFAULT_TTL_SECONDS)
    if value is None:
        return TTL.DEFAULT

    try:
        ttl = int(value)
    except ValueError as e:
        raise BadConfigurationError(f'{ENV.Store.DEFAULT_TTL_SECONDS} must be an integer (given value: {value!r}).') from e
    if ttl < 1:
        raise BadConfigurationError(f'{ENV.Store.DEFAULT_TTL_SECONDS} must be positive (given value: {ttl}).')
    return ttl


def load_config() -> AppConfig:
    """Load the store configuration from the environment

    Returns:
        AppConfig: validated, immutable configuration.

    Raises:
        BadConfigurationError:
            If PASTE_BACKEND names an unknown backend or DEFAULT_TTL_SECONDS
            is not a positive integer.
    """
    config = AppConfig(
        backend=_backend(),
        redis_url=os.environ.get(ENV.Redis.URL) or RedisSettings.DEFAULT_URL,
        default_ttl_seconds=_default_ttl_seconds(),
        prefix=app_prefix(),
    )
    logger.debug(
        'Loaded configuration from environment.',
        extra={'backend': config.backend.value, 'prefix': config.prefix, 'defaultTtlSeconds': config.default_ttl_seconds},
    )
    return config
