"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Every line written to stdout (and so to CloudWatch) is one JSON object:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "shortlinks.services.redirect",
    "message": "CLICK_RECORDED",
    "event": "CLICK_RECORDED",
    "shortcode": "abc123"
}

Classes:
    JsonFormatter:
        One JSON object per log line, `extra` fields included.
    EventLogger:
        Fire-and-forget structured event logger injected into core services.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from shortlinks.constants import ENV
from shortlinks.utils.clock import to_iso


# Attributes every LogRecord has; anything else on a record came from `extra`
LOG_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None))) | {'message', 'asctime'}

# Third-party loggers that are too chatty at INFO (AppConfig polling, connection pools)
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': to_iso(datetime.fromtimestamp(record.created, tz=UTC)),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in LOG_RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )


class EventLogger:
    """Structured event logger handed to core services.

    Wraps a stdlib logger so services log `(event_name, data)` pairs without
    reaching for a process-wide singleton. Logging is fire-and-forget: a
    failure while logging never propagates to the caller.

    Example:
        >>> events = EventLogger(logging.getLogger('shortlinks.test'))
        >>> events.log('URL_SHORTENED', shortcode='abc123', longUrl='https://example.com')
    """

    # LogRecord attributes that `extra` is not allowed to overwrite
    _RESERVED = LOG_RECORD_ATTRS

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger if logger is not None else logging.getLogger('shortlinks.events')

    def log(self, event_name: str, level: int = logging.INFO, **data: Any) -> None:
        extra = {(f'data_{key}' if key in self._RESERVED else key): value for key, value in data.items()}
        extra['event'] = event_name
        try:
            self.logger.log(level, event_name, extra=extra)
        except Exception:  # noqa: BLE001
            # Logging must never break the operation being logged
            pass

    def warning(self, event_name: str, **data: Any) -> None:
        self.log(event_name, level=logging.WARNING, **data)
