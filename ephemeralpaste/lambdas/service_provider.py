"""Process-wide PasteService for lambda handlers

A Lambda execution environment is the service's lifetime: the service (and the
store backend it owns) is built on the first invocation after a cold start and
reused by every warm invocation that follows.

Functions:
    get_service() -> PasteService
        Build the service on first use, return the same instance afterwards.

    shutdown_service() -> None
        Close the current service (if any) so the next call builds a new one.
"""

import functools
import logging

from ephemeralpaste.service import PasteService
from ephemeralpaste.dao import build_paste_dao
from ephemeralpaste.utils.config import load_config


logger = logging.getLogger(__name__)


@functools.cache
def get_service() -> PasteService:
    config = load_config()
    service = PasteService(build_paste_dao(config))
    logger.info('Paste service started.', extra={'backend': service.dao.backend.value})
    return service


def shutdown_service() -> None:
    if get_service.cache_info().currsize:
        get_service().close()
        get_service.cache_clear()
        logger.info('Paste service stopped.')
