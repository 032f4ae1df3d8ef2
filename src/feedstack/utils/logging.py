"""Structured logging setup using structlog.

The same shared processor chain (context vars, log level, stack info,
timestamps) feeds either a ConsoleRenderer for local development or a
JSONRenderer when ``APP_ENV`` is ``production``.

Standard-library ``logging`` is routed through the same formatter so that
uvicorn, httpx and redis output looks the same as ours.
"""

import logging
import sys

import structlog

from feedstack.config import settings


def configure_logging(log_level: str | None = None, json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog with environment-appropriate rendering.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR). Defaults to settings.
        json_output: Force JSON output. When False, JSON is used only in production.

    Returns:
        A configured structlog BoundLogger.
    """
    level = (log_level or settings.log_level).upper()
    use_json = json_output or settings.app_env == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    # JSON output needs tracebacks rendered to strings
    renderer_chain: list[structlog.types.Processor]
    if use_json:
        renderer_chain = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderer_chain = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]

    structlog.configure(
        processors=[
            *shared_processors,
            *renderer_chain,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            *renderer_chain,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger.

    If structlog has not been configured yet, configures it with defaults.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        A structlog BoundLogger bound with the given name.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
