"""structlog setup for the estimator service.

Every event carries the request ID set by the middleware and, once a handler
has parsed its body, the scenario being estimated ("CA:single"). Tax
amounts are Decimals; JSON output writes them as strings.
"""

import logging
import sys
from contextvars import ContextVar, Token
from enum import Enum
from typing import Any

import orjson
import structlog
from structlog.types import Processor

from src.core.config import settings

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
scenario_ctx: ContextVar[str | None] = ContextVar("scenario", default=None)


def scenario_label(state_code: str, filing_status: str | Enum) -> str:
    """Label a scenario as "<STATE>:<status>", e.g. "CA:single"."""
    status = filing_status.value if isinstance(filing_status, Enum) else filing_status
    return f"{state_code.strip().upper()}:{status}"


def bind_scenario(state_code: str, filing_status: str | Enum) -> Token[str | None]:
    """Tag subsequent log events in this context with the scenario.

    Returns the token so callers outside a request can restore the previous
    value; the middleware resets it at the end of each request.
    """
    return scenario_ctx.set(scenario_label(state_code, filing_status))


def _add_context_vars(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Attach request_id and scenario when they are set."""
    if request_id := request_id_ctx.get():
        event_dict["request_id"] = request_id
    if scenario := scenario_ctx.get():
        event_dict["scenario"] = scenario
    return event_dict


def _orjson_serializer(obj: Any, **kwargs: Any) -> str:
    # orjson has no Decimal support; str() keeps every digit
    return orjson.dumps(obj, default=str).decode("utf-8")


def configure_logging() -> None:
    """Configure structlog from settings.

    LOG_FORMAT=json or console picks the renderer explicitly. When unset,
    development gets colored console output and every other environment
    gets JSON with the event under "message".
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_context_vars,
    ]

    log_format = settings.log_format.lower() if settings.log_format else None
    use_json = log_format == "json" or (
        log_format is None and settings.environment != "development"
    )

    if use_json:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.EventRenamer("message"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(serializer=_orjson_serializer),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if settings.debug else logging.INFO,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually named after the calling module."""
    return structlog.get_logger(name)
