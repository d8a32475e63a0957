"""Central logging bootstrap for portpath.

The library never configures logging on import. Applications call
``configure_logging`` (or ``Settings.setup_logging``) once; until then
structlog's defaults apply.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


_LOG_CONFIGURED = False


def configure_logging(level: str = "INFO", json_logs: bool = False, *, force: bool = False) -> None:
    """Configure stdlib logging and structlog once per process."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED and not force:
        return

    log_level = getattr(logging, str(level or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(message)s", force=force)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _LOG_CONFIGURED = True


def get_logger(component: str) -> Any:
    """Return a structlog logger bound to a portpath component name."""
    return structlog.get_logger(component=component)
