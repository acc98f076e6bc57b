#!/usr/bin/env python
"""
API Server Launcher

Serves `src.main:app` with granian (ASGI). granian's own loggers are routed through
the loguru interceptor, and the access line format is the one
`_parse_http_status_level` maps to a log level.

Run: uv run python -m script.launch_api
"""

from typing import Any, Dict

from granian import Granian
from granian.constants import Interfaces

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


APP_TARGET = 'src.main:app'

# '127.0.0.1 - "GET /line/slots HTTP/1.1" - 200 - 8ms'
ACCESS_LOG_FORMAT = '%(addr)s - "%(method)s %(path)s %(protocol)s" - %(status)d - %(dt_ms).0fms'

GRANIAN_LOG_CONFIG: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'loguru': {'()': 'src.platform.logging.loguru_io_config.InterceptHandler'},
    },
    'root': {'level': 'INFO', 'handlers': ['loguru']},
    'loggers': {
        '_granian': {'level': 'INFO', 'handlers': [], 'propagate': True},
        'granian.access': {'level': 'INFO', 'handlers': [], 'propagate': True},
    },
}


def build_server() -> Granian:
    return Granian(
        APP_TARGET,
        address=settings.API_HOST,
        port=settings.API_PORT,
        interface=Interfaces.ASGI,
        workers=settings.API_WORKERS,
        log_dictconfig=GRANIAN_LOG_CONFIG,
        log_access=True,
        log_access_format=ACCESS_LOG_FORMAT,
    )


def main() -> None:
    Logger.base.info(
        f'🚀 [LINE Booking] granian on {settings.API_HOST}:{settings.API_PORT} '
        f'(workers={settings.API_WORKERS})'
    )
    build_server().serve()


if __name__ == '__main__':
    main()
