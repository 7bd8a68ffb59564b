"""strava_client 用の structlog 設定"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "strava_client"

# httpx / httpcore はリクエストごとに INFO を出すため、DEBUG 以外では抑制する。
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def new_logger(level: str = "INFO", format: str = "json") -> structlog.stdlib.BoundLogger:
    """クライアント全体のログ出力を設定し、ルートの strava_client ロガーを返す。

    level はクライアント配下のロガーに適用する。format が "json" なら 1 行 1 JSON、
    それ以外はコンソール向けの整形出力になる。
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger(LOGGER_NAME).setLevel(log_level)
    transport_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)

    processors = _shared_processors()
    if format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.get_logger(LOGGER_NAME)
