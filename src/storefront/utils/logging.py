"""Logging configuration for the storefront.

stdlib logging owns the sinks (stdout plus rotating files), structlog owns
the event format. Production and staging write JSON lines; every other
environment gets the coloured console renderer.

Handlers log business events by name with keyword context, e.g.
``logger.info("order_placed", order_id=..., total_price=...)``.
"""

import logging
import logging.handlers
import os
import sys
from contextlib import contextmanager
from pathlib import Path

import structlog

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVS = ("production", "staging")

# Third-party loggers held at WARNING regardless of our level
_QUIET_LOGGERS = ("urllib3", "asyncio", "protean", "passlib", "multipart")


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def log_level() -> str:
    """`LOG_LEVEL` if set, otherwise the default for the current environment."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_environment(), "INFO"))


def _file_sink(path: Path, level) -> logging.Handler:
    sink = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    sink.setLevel(level)
    return sink


def _install_sinks(level: str, log_dir: Path) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        stdout,
        _file_sink(log_dir / "storefront.log", level),
        _file_sink(log_dir / "storefront_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in _JSON_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def _processors(environment: str) -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        _renderer(environment),
    ]


def configure_logging(log_dir: str | None = None) -> None:
    """Configure stdlib sinks and the structlog pipeline. Safe to call more than once."""
    _install_sinks(log_level(), Path(log_dir or os.getenv("LOG_DIR", "logs")))

    structlog.configure(
        processors=_processors(current_environment()),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def request_context(**values):
    """Attach `values` to every log event emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**values):
        yield
