"""Store backend selection

The backend is chosen once, when the service starts, and then injected into
the PasteService. Calls never switch backends afterwards.

Functions:
    build_paste_dao(config) -> PasteBaseDAO
        Build the DAO named by the configuration. If Redis is configured but
        doesn't answer a PING, fall back to the in-memory DAO.

Example:
    >>> from ephemeralpaste.utils import load_config
    >>> dao = build_paste_dao(load_config())
    >>> dao.backend
    <Backend.REDIS: 'redis'>
"""

import logging

from ephemeralpaste.constants import Backend
from ephemeralpaste.utils.config import AppConfig
from ephemeralpaste.dao.base import PasteBaseDAO
from ephemeralpaste.dao.memory import PasteMemoryDAO
from ephemeralpaste.dao.redis import PasteRedisDAO


logger = logging.getLogger(__name__)


def build_paste_dao(config: AppConfig) -> PasteBaseDAO:
    if config.backend is Backend.MEMORY:
        logger.warning('Using in-memory paste store (not suitable for production).')
        return PasteMemoryDAO()

    dao = PasteRedisDAO(
        redis_url=config.redis_url,
        prefix=config.prefix,
        default_ttl_seconds=config.default_ttl_seconds,
    )
    if not dao.healthcheck():
        logger.warning(
            'Redis is unreachable. Falling back to in-memory paste store.',
            extra={'redisHost': dao.redis.connection_pool.connection_kwargs.get('host')},
        )
        dao.close()
        return PasteMemoryDAO()

    logger.info('Using Redis paste store.', extra={'prefix': config.prefix})
    return dao
