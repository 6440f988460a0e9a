"""Structured logging setup using structlog.

TuneMatch logs snake_case events with key-value context (``like_created``,
``match_conflict_resolved``, ``profile_fetch_retry`` ...).  One processor
chain feeds either a coloured console renderer (development) or a JSON
renderer (production).

The environment and level normally come from the resolved configuration
(``app.env`` and the ``logging`` section of ``config/config.yaml``, with
``APP_ENV`` / ``LOG_LEVEL`` overrides already merged in by ``load_config``);
see :func:`configure_logging_from_config`.

Standard-library ``logging`` is routed through the same renderer, and the
chatty ``aiosqlite`` logger (one DEBUG record per statement) is held at
WARNING so store traffic does not drown the service events.
"""

import logging
import os
import sys
from collections.abc import Iterable

import structlog

# Libraries whose stdlib loggers are capped at WARNING.
_QUIET_LOGGERS = ("aiosqlite",)


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    app_env: str | None = None,
    quiet_loggers: Iterable[str] = _QUIET_LOGGERS,
) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
        json_output: Force JSON output regardless of environment.
        app_env: Deployment environment; ``"production"`` selects JSON.
                 Falls back to the ``APP_ENV`` variable when omitted.
        quiet_loggers: Stdlib logger names held at WARNING or above.

    Returns:
        A configured structlog BoundLogger.
    """
    if app_env is None:
        app_env = os.environ.get("APP_ENV", "development")
    use_json = json_output or app_env == "production"
    level = logging.getLevelName(log_level.upper())

    # Shared by structlog loggers and the stdlib bridge below.
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,  # e.g. a bound request or user id
        structlog.processors.add_log_level,  # "level" key
        structlog.processors.StackInfoRenderer(),  # stack_info=True on a call
        structlog.dev.set_exc_info,  # exc_info for logger.exception()
        structlog.processors.TimeStamper(fmt="iso"),  # ISO-8601 timestamps
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        # Below-level calls return before any processor runs.
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()  # repeated configuration must not duplicate output
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return structlog.get_logger()


def configure_logging_from_config(config: dict) -> structlog.BoundLogger:
    """Configure logging from a resolved ``load_config()`` dictionary.

    Reads ``logging.level``, the optional ``logging.json`` flag and
    ``app.env``; missing keys fall back to the :func:`configure_logging`
    defaults.
    """
    logging_section = config.get("logging", {})
    return configure_logging(
        log_level=str(logging_section.get("level", "INFO")),
        json_output=bool(logging_section.get("json", False)),
        app_env=config.get("app", {}).get("env"),
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
