"""
structlog setup for the ledger service.

structlog events and records from stdlib loggers (uvicorn, aiosqlite)
share one ``ProcessorFormatter`` on the root handler, so both come out in
the same format: colored console lines in development, JSON lines
elsewhere.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from stockledger.config.settings import Settings, get_settings

# Catalog round-trips and SQL are logged by the gateway and stores themselves
_QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "fontTools", "uvicorn.access")


def service_context(settings: Settings) -> Processor:
    """Processor stamping each event with the service name, version and environment."""
    context = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }

    def add_service_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service_context


def configure_logging(settings: Settings | None = None) -> None:
    """Install the structlog pipeline and the root stdout handler."""
    settings = settings or get_settings()
    console = settings.environment == "development"

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        service_context(settings),
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    final: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if console:
        final.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        final += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processors=final)
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(settings.log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
