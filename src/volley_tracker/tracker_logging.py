"""Structured logging setup for the volleyball tracker."""

import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory

from .config import LogFormat, get_settings

_configured = False


def configure_logging(force: bool = False) -> None:
    """Configure structlog and stdlib logging from settings.

    Safe to call more than once; later calls are ignored unless ``force`` is set.
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper())

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.LOG_FORMAT == LogFormat.JSON:
        processors.append(structlog.processors.JSONRenderer())
    elif settings.LOG_FORMAT == LogFormat.STRUCTURED:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = [logging.StreamHandler(sys.stderr)]
    if settings.LOG_FILE:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.LOG_FILE)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, format="%(message)s", force=True)

    # Silence noisy third-party loggers
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def bind_game_id(game_id: str) -> None:
    """Bind the game id to the logging context for the current session."""
    structlog.contextvars.bind_contextvars(game_id=game_id)


def clear_game_id() -> None:
    """Remove the game id from the logging context."""
    structlog.contextvars.unbind_contextvars("game_id")
