"""Structlog setup for the fund-variation CLI and library entry points."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

import structlog
from structlog.types import Processor

APP_NAME = "fund-variation"

LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

# Third-party loggers that are chatty at debug level.
QUIET_LOGGERS = ("urllib3", "matplotlib")


def _resolve_level(level: str) -> int:
    normalized = level.lower()
    if normalized not in LOG_LEVELS:
        valid = ", ".join(sorted(LOG_LEVELS))
        raise ValueError(f"Unsupported log level {level!r}. Choose one of: {valid}.")
    return LOG_LEVELS[normalized]


def bind_run_context(**context: object) -> None:
    """Replace the context merged into every event of this run.

    ``app`` is always present; ``None`` values are dropped.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        app=APP_NAME, **{key: value for key, value in context.items() if value is not None}
    )


def configure_logging(
    level: str = "info",
    *,
    json_output: bool = False,
    context: Mapping[str, object] | None = None,
) -> None:
    """Route structlog through stdlib logging on stderr.

    Events carry an ISO UTC timestamp, the level, and the run context set by
    :func:`bind_run_context` (e.g. the API base URL chosen on the command
    line). Console output is the default; ``json_output`` switches to one
    sorted JSON object per line.
    """
    level_value = _resolve_level(level)
    logging.basicConfig(level=level_value, format="%(message)s", stream=sys.stderr)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.WARNING))

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_output
        else structlog.dev.ConsoleRenderer(),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    bind_run_context(**(context or {}))


__all__ = ["APP_NAME", "LOG_LEVELS", "QUIET_LOGGERS", "bind_run_context", "configure_logging"]
