"""Logging configuration helpers with Structlog integration.

Key Responsibilities:
    - Configure standard library logging with JSON formatting and field scrubbing
    - Configure Structlog for key-value event logging
    - Expose helpers for binding per-request context (ip, user agent, referer,
      request id)

Collaborators:
    - Upstream: the FastAPI app, the serverless action and the CLI call
      :func:`configure_logging` once at startup
    - Downstream: Relies on ``logging`` and ``structlog``

Side Effects:
    - Configures global logging handlers
    - Binds request context via context variables

Thread Safety:
    - Logging configuration should be invoked once during process startup
    - Context helpers rely on ``contextvars`` and are safe for async use
"""

# ==============================================================================
# IMPORTS
# ==============================================================================

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable, Mapping
from contextvars import ContextVar, Token
from typing import Any, Callable

import structlog

from pxy_redirect.config.settings import LoggingSettings

# ==============================================================================
# CONTEXT VARIABLES
# ==============================================================================

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

# Client libraries that log full request URLs; the heartbeat URL embeds a token.
_QUIET_LOGGERS = ("httpx", "httpcore")

_RESERVED_ATTRIBUTES = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

# ==============================================================================
# FORMATTERS
# ==============================================================================


class JsonFormatter(logging.Formatter):
    """Formats log records as single line JSON objects."""

    def __init__(self, *, scrub_fields: Iterable[str] | None = None) -> None:
        """Initialise formatter with optional sensitive field scrubbing.

        Args:
            scrub_fields: Iterable of field names (case-insensitive) whose values
                should be replaced with ``***`` in log output.
        """
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S%z")
        self._scrub_fields = {field.lower() for field in scrub_fields or ()}

    def _scrub(self, value: object) -> object:
        """Recursively scrub values in dictionaries and lists."""
        if isinstance(value, dict):
            return {
                k: self._scrub(v) if k.lower() not in self._scrub_fields else "***"
                for k, v in value.items()
            }
        if isinstance(value, list):
            return [self._scrub(item) for item in value]
        return value

    def format(self, record: logging.LogRecord) -> str:
        """Serialise a log record into a JSON string."""
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, self.datefmt),
        }

        request_id = _request_id.get()
        if request_id:
            payload["request-id"] = request_id

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRIBUTES:
                continue
            if key.lower() in self._scrub_fields:
                payload[key] = "***"
            else:
                payload[key] = self._scrub(value)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, sort_keys=True, default=str)


# ==============================================================================
# STRUCTLOG PROCESSORS
# ==============================================================================


def _structlog_scrubber(
    scrub_fields: Iterable[str] | None,
) -> Callable[[Any, str, dict[str, Any]], dict[str, Any]]:
    """Create a Structlog processor that replaces configured fields with ``***``."""
    lower_fields = {field.lower() for field in scrub_fields or ()}

    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key in list(event_dict.keys()):
            if key.lower() in lower_fields:
                event_dict[key] = "***"
        return event_dict

    return processor


def _level_value(level: int | str | None) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        return value if isinstance(value, int) else logging.INFO
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    settings: LoggingSettings | None = None,
) -> None:
    """Configure global logging for the application.

    Args:
        level: Optional logging level or level name. When ``settings`` is
            provided this argument is ignored.
        settings: Optional logging settings object providing level and scrub
            configuration.

    Note:
        Calling this function reconfigures the root logger and should therefore
        happen once during application startup.
    """
    scrub_fields: Iterable[str] | None = None
    if settings is not None:
        level = settings.level
        scrub_fields = settings.scrub_fields
    level_value = _level_value(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(scrub_fields=scrub_fields))

    root_logger = logging.getLogger()
    preserved_handlers: list[logging.Handler] = []
    for existing in root_logger.handlers:
        module = getattr(existing.__class__, "__module__", "") or ""
        if module.startswith("_pytest."):
            preserved_handlers.append(existing)

    logging.basicConfig(
        level=level_value,
        handlers=[*preserved_handlers, handler],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level_value, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _structlog_scrubber(scrub_fields),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


# ==============================================================================
# REQUEST CONTEXT HELPERS
# ==============================================================================


def bind_request_context(fields: Mapping[str, str]) -> Token[str | None]:
    """Bind request fields to the current execution context.

    Args:
        fields: Log fields describing the request; ``request-id`` is also
            exposed through :func:`get_request_id`.

    Returns:
        Context variable token that can be used to restore the previous value.
    """
    token = _request_id.set(fields.get("request-id"))
    structlog.contextvars.bind_contextvars(**fields)
    return token


def reset_request_context(token: Token[str | None] | None) -> None:
    """Reset the context bound by :func:`bind_request_context`."""
    if token is not None:
        _request_id.reset(token)
    structlog.contextvars.clear_contextvars()


def get_request_id() -> str | None:
    """Return the currently bound request identifier, if any."""
    return _request_id.get()


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger with the given name."""
    return structlog.get_logger(name)
