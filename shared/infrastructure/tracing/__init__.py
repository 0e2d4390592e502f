"""Tracing de requisições HTTP (trace_id propagado nos logs)."""
from .context import (
    generate_trace_id,
    set_trace_id,
    get_trace_id,
    clear_trace_context,
)
from .middleware import TraceMiddleware, TRACE_HEADER

__all__ = [
    "generate_trace_id",
    "set_trace_id",
    "get_trace_id",
    "clear_trace_context",
    "TraceMiddleware",
    "TRACE_HEADER",
]
