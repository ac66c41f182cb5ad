"""Structlog configuration helpers with OpenTelemetry enrichment."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

import structlog

from iyzico.utils.tracing import TraceContext, get_current_trace_ids

_CONFIGURED = False


def _otel_enricher(
    _: Any,
    __: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Inject OpenTelemetry trace identifiers into the log event if available."""

    trace_context: TraceContext = get_current_trace_ids()
    if trace_context.get("trace_id"):
        event_dict.setdefault("trace_id", trace_context["trace_id"])
    if trace_context.get("span_id"):
        event_dict.setdefault("span_id", trace_context["span_id"])
    return event_dict


def resolve_log_level(value: str | int | None, *, default: int = logging.INFO) -> int:
    """Convert a configured level name or number into a logging constant."""

    if isinstance(value, int):
        return value
    if not value or not value.strip():
        return default
    candidate = value.strip()
    if candidate.isdigit():
        return int(candidate)
    mapped = logging.getLevelName(candidate.upper())
    return mapped if isinstance(mapped, int) else default


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure structlog with JSON output and OTEL context."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    numeric_level = resolve_log_level(level)
    logging.basicConfig(format="%(message)s", level=numeric_level)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            _otel_enricher,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the provided name."""

    configure_logging()
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)
