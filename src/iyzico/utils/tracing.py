"""OpenTelemetry helpers for request spans and log correlation."""

from __future__ import annotations

from typing import TypedDict

from opentelemetry import trace

TRACER_NAME = "iyzico"


class TraceContext(TypedDict, total=False):
    trace_id: str
    span_id: str


def get_current_trace_ids() -> TraceContext:
    """Return hex trace/span ids of the active span, or an empty dict outside one."""

    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": trace.format_trace_id(span_context.trace_id),
        "span_id": trace.format_span_id(span_context.span_id),
    }


def get_tracer() -> trace.Tracer:
    """Tracer used for spans around outbound iyzico requests."""

    return trace.get_tracer(TRACER_NAME)
