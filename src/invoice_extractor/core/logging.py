from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

REDACTED_KEYS = frozenset({"api_key", "gemini_api_key", "authorization"})
MAX_FIELD_CHARS = 500


def _redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def _truncate_long_values(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Model replies and base64 payloads can be huge
    for key, value in event_dict.items():
        if key != "exception" and isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
            event_dict[key] = value[:MAX_FIELD_CHARS] + f"...(+{len(value) - MAX_FIELD_CHARS} chars)"
    return event_dict


def setup_structlog(level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structlog on top of stdlib logging.

    JSON lines by default; `json_logs=False` switches to the console renderer
    for local runs.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer: Any = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _redact_secrets,
        _truncate_long_values,
    ]
    if json_logs:
        processors += [structlog.processors.EventRenamer(to="message"), structlog.processors.dict_tracebacks]
    processors.append(renderer)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
        force=True,
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
