"""JSON logging for the paste service

Each record is written to stdout as one JSON line. Fields passed through
`extra=` (pasteId, backend, reason, ...) become top-level keys, so log queries
can filter on them directly:

    {"timestamp": "2025-10-15T00:00:00.000Z", "level": "INFO",
     "logger": "ephemeralpaste.service", "message": "Paste created.",
     "pasteId": "3f9a0c1e", "ttlSeconds": 3600, "maxViews": 2}

The lambda packages call `initialize_logging()` from their `__init__.py`.
Paste content is never passed to a logger.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from ephemeralpaste.constants import ENV


DEFAULT_LOG_LEVEL = 'INFO'

# Attributes every LogRecord carries; anything else arrived through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'taskName'}


def _utc_timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class JsonFormatter(logging.Formatter):
    """Render a record, its `extra` fields and any exception as a JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': _utc_timestamp(record.created),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        payload.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            payload['stack'] = self.formatStack(record.stack_info)

        return json.dumps(payload, default=str, ensure_ascii=False)


def log_level() -> str:
    """Return LOG_LEVEL if it names a logging level, DEFAULT_LOG_LEVEL otherwise."""
    level = os.getenv(ENV.App.LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
    return level if level in logging.getLevelNamesMapping() else DEFAULT_LOG_LEVEL


def initialize_logging() -> None:
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            # redis-py's own connection chatter stays out of DEBUG output
            'loggers': {'redis': {'level': 'WARNING'}},
            'root': {'level': log_level(), 'handlers': ['stdout']},
        }
    )
