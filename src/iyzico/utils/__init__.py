"""Utility helpers shared across the client."""

from .query_string import build_query_string
from .tracing import get_current_trace_ids, get_tracer

__all__ = [
    "build_query_string",
    "get_current_trace_ids",
    "get_tracer",
]
