"""
Structlog configuration
"""
import json
import logging
from typing import Any, List

import structlog
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, add_log_level
from structlog.stdlib import ProcessorFormatter

from core.config import settings


def get_renderer() -> Any:
    """Pick the renderer: console in DEBUG, JSON otherwise.
    structlog passes default/sort_keys and friends to the serializer, so it must accept them.
    """
    if settings.DEBUG:
        return ConsoleRenderer(colors=True)

    def _dumps(obj, default=None, **kwargs):
        # Decimal amounts and datetimes fall back to str
        return json.dumps(obj, ensure_ascii=False, default=default or str, **kwargs)

    return JSONRenderer(serializer=_dumps)


def _resolve_level() -> int:
    if settings.LOG_LEVEL:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.DEBUG else logging.INFO


def configure_logging() -> None:
    """Configure structlog and route stdlib logging through the same processors."""
    timestamper = TimeStamper(fmt="iso")

    shared_pre_chain: List[Any] = [
        merge_contextvars,
        add_log_level,
        timestamper,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *shared_pre_chain,
            ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(
        foreign_pre_chain=shared_pre_chain,
        processors=[
            ProcessorFormatter.remove_processors_meta,
            get_renderer(),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level())


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger."""
    return structlog.get_logger(name)


configure_logging()
