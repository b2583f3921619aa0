"""Structured logging setup for the relay gateway.

Modules keep logging through ``logging.getLogger(__name__)``; the root
handler renders every record through structlog, as JSON lines when
``LOG_FORMAT=json`` and as console lines otherwise. Context bound with
``structlog.contextvars.bind_contextvars`` (the correlation ID) is merged
into every record.
"""

import logging
import sys
from typing import IO, List, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor


def _shared_processors() -> List[Processor]:
    return [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "text",
    stream: Optional[IO[str]] = None,
) -> logging.Handler:
    """Route standard library and structlog loggers through one structlog formatter.

    Args:
        log_level: Root logging level name
        log_format: ``json`` for JSON lines, anything else for console output
        stream: Output stream (defaults to stdout)

    Returns:
        The handler installed on the root logger
    """
    shared = _shared_processors()

    if log_format.lower() == "json":
        final: List[Processor] = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(foreign_pre_chain=shared, processors=final)
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level.upper())

    # httpx logs full request URLs at INFO, including the provider key parameter
    logging.getLogger("httpx").setLevel(logging.WARNING)

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return handler
