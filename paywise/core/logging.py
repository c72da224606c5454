"""Structured logging configuration using structlog.

Events are snake_case names with keyword fields:

    logger.info("budget_snapshot_saved", snapshot_id=snapshot.id)

Development renders colored console lines; every other environment emits one
JSON object per line with the event under "message". Email addresses in an
``email`` field are masked before rendering.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import orjson
import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from paywise.core.config import settings

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

# Libraries that log every statement or request at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "httpx")


def _add_context_vars(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach the current request and user ids, when set."""
    if request_id := request_id_ctx.get():
        event_dict["request_id"] = request_id
    if user_id := user_id_ctx.get():
        event_dict["user_id"] = user_id
    return event_dict


def mask_email(email: str) -> str:
    """Keep the first character of the local part and the domain.

    >>> mask_email("pat@example.com")
    'p***@example.com'
    """
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def _mask_emails(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    email = event_dict.get("email")
    if isinstance(email, str):
        event_dict["email"] = mask_email(email)
    return event_dict


def _orjson_dumps(obj: Any, **kwargs: Any) -> str:
    # Decimal amounts and dates fall back to str
    return orjson.dumps(obj, default=str).decode("utf-8")


def _use_json() -> bool:
    if settings.log_format:
        return settings.log_format.lower() == "json"
    return settings.environment != "development"


def configure_logging() -> None:
    """Configure structlog and stdlib logging for the process."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _add_context_vars,
        _mask_emails,
    ]

    if _use_json():
        processors += [
            structlog.processors.EventRenamer("message"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(serializer=_orjson_dumps),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    if not settings.debug:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually called with __name__."""
    return structlog.get_logger(name)
