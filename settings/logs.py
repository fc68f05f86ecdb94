import logging
import sys
import time
from typing import Optional

import ujson

from .config import STAND, env

loggers = {
    'httpx': {
        'level': 'WARNING',
    },
    'httpcore': {
        'level': 'WARNING',
    },
    'environs': {
        'level': 'ERROR',
    },
}


class JSONFormatter(logging.Formatter):
    default_time_format = '%Y-%m-%d %H:%M:%S{ms} %z'
    msec_format = ',%03d'

    def __init__(self, *args, stand: str = STAND, jsondumps_kwargs: Optional[dict] = None, **kwargs):
        """JSON format implementation of logging formatter."""
        super().__init__(*args, **kwargs)
        self._stand = stand
        self._jsondumps_kwargs = jsondumps_kwargs.copy() if jsondumps_kwargs else {}

    def formatTime(self, record, *args) -> str:  # noqa: N802
        """Format TZ-time with milliseconds: 2025-10-09 11:26:07,080 -0300."""
        ct = self.converter(record.created)  # type: ignore
        time_format_with_msec = self.default_time_format.format(ms=self.msec_format % record.msecs)
        return time.strftime(time_format_with_msec, ct)

    def format(self, record: logging.LogRecord) -> str:
        r"""Serialize a log record to one JSON line.

        {"time": "2025-04-28 13:26:51,910 -0300", "name": "app.services", "lvl": "INFO",
         "msg": "Projected 10 of 12 records", "place": "services.get_history_page:61",
         "stand": "prod"}
        """
        record_representation = {
            'time': self.formatTime(record),
            'name': record.name,
            'lvl': record.levelname,
            'msg': record.getMessage(),
            'place': f'{record.module}.{record.funcName}:{record.lineno}',
            'stand': self._stand,
        }

        if record.exc_info:
            record_representation['exc_info'] = self.formatException(record.exc_info)

        return ujson.dumps(record_representation, **self._jsondumps_kwargs)


def create_logger_config(log_level: str, stand: str, loggers: dict):
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'loggers': {
            **loggers,
            '': {
                'level': log_level,
                'handlers': ['console'],
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'generic' if stand == 'local' else 'json',
                'stream': sys.stdout,
            },
        },
        'formatters': {
            'generic': {
                'format': '%(asctime)s (%(name)s)[%(levelname)s] %(message)s',
                'datefmt': '[%Y-%m-%d %H:%M:%S %z]',
                'class': 'logging.Formatter',
            },
            'json': {
                '()': JSONFormatter,
                'stand': stand,
                'jsondumps_kwargs': {
                    'ensure_ascii': False,
                },
            },
        },
    }


class LogsConfig:
    LOG_LEVEL = env.str('LOG_LEVEL', default='DEBUG')
    LOGGING = create_logger_config(log_level=LOG_LEVEL, loggers=loggers, stand=STAND)
