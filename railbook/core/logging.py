"""
Structured logging for the client using structlog.

The console front end owns stdout, so log records go to stderr: JSON when
ENVIRONMENT is production, key=value console lines otherwise. Colours are
only used when stderr is a terminal.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog

from railbook.core.config import get_settings

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "redis")


def _renderer(production: bool, stream: TextIO):
    if production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """
    Route stdlib and structlog records through one stderr handler.
    `level` overrides LOG_LEVEL (the console's --verbose passes DEBUG).
    """
    settings = get_settings()
    stream = stream or sys.stderr
    production = settings.ENVIRONMENT == "production"

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if production:
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(production, stream),
        ],
    ))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.WARNING))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.contextvars.bind_contextvars(app=settings.APP_NAME, version=settings.APP_VERSION)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
