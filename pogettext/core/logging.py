"""pogettext structured logging module.

The package is a library, so it never touches the root logger or the global
structlog configuration: records go through a dedicated ``pogettext`` stdlib
logger wrapped with the package's own processor chain.
"""

import logging
import inspect
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger
from .config import settings

LOGGER_NAME = "pogettext"


def _is_test_environment() -> bool:
    """Detect if running in a test environment."""
    return "pytest" in sys.modules


def _build_processors(production: bool) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    # Pretty printing for development, JSON for production
    if production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def configure_logging(level: Optional[str] = None) -> BoundLogger:
    """Configure the package logger and return the root bound logger.

    Args:
        level: Log level name; defaults to ``settings.LOG_LEVEL``.

    Returns:
        A structlog BoundLogger writing to the ``pogettext`` stdlib logger.
    """
    stdlib_logger = logging.getLogger(LOGGER_NAME)
    stdlib_logger.propagate = False

    # Suppress all logging during tests
    if _is_test_environment():
        stdlib_logger.setLevel(logging.CRITICAL + 1)
    else:
        level_name = (level or settings.LOG_LEVEL).upper()
        stdlib_logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not stdlib_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)

    return structlog.wrap_logger(
        stdlib_logger,
        processors=_build_processors(settings.is_production),
        wrapper_class=BoundLogger,
    )


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context."""
    current_frame = inspect.currentframe()
    if current_frame is None:
        return logger

    frame = current_frame.f_back
    module = inspect.getmodule(frame)

    if module:
        module_name = module.__name__

        parts = module_name.split(".")

        context = {
            "component": parts[-1],
            "module_path": module_name,
        }

        return logger.bind(**context)

    return logger.bind(component="unknown")
