"""Logging configuration for the ordering service.

The stdlib root logger gets a console handler and two rotating files
under ``LOG_DIR`` (everything, errors only). structlog sits in front of
it, tags every entry with the service name and renders JSON in
production and staging, coloured console output elsewhere.

Request handlers bind the caller once with :func:`bind_request_context`;
the bound values then ride along on every entry logged while the
request is served.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

import structlog

SERVICE_NAME = "ordering"

_LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Libraries that log every query or request at INFO
_QUIET_LOGGERS = ("protean", "asyncio", "uvicorn.access", "sqlalchemy.engine")

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def log_level_for(environment: str) -> str:
    """``LOG_LEVEL`` wins; otherwise the level configured for the environment, INFO if unknown."""
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENVIRONMENT.get(environment, "INFO")).upper()


def _rotating_file(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | Path | None = None) -> None:
    level = log_level_for(current_environment())
    log_dir = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(log_dir / f"{SERVICE_NAME}.log", level),
        _rotating_file(log_dir / f"{SERVICE_NAME}_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def add_service_name(logger, method_name, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_structlog() -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if current_environment() in ("production", "staging"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | Path | None = None) -> None:
    setup_stdlib_logging(log_dir)
    setup_structlog()


def bind_request_context(method: str, path: str, user_id: str | None = None, role: str | None = None) -> None:
    """Replace the log context with the current request's details.

    Anonymous requests carry no ``user_id``/``role`` keys at all rather
    than ``None`` values.
    """
    structlog.contextvars.clear_contextvars()
    context = {"method": method, "path": path, "user_id": user_id, "role": role}
    structlog.contextvars.bind_contextvars(**{key: value for key, value in context.items() if value is not None})
