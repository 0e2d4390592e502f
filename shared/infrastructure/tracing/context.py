"""
Contexto de trace por requisição usando contextvars (seguro para async).
"""
import contextvars
import uuid
from typing import Optional

import structlog

trace_id_var = contextvars.ContextVar("trace_id", default=None)


def generate_trace_id() -> str:
    """Gera trace_id único (UUID4)"""
    return str(uuid.uuid4())


def set_trace_id(trace_id: str) -> None:
    """Define o trace_id atual e o anexa aos logs estruturados."""
    trace_id_var.set(trace_id)
    structlog.contextvars.bind_contextvars(trace_id=trace_id)


def get_trace_id() -> Optional[str]:
    return trace_id_var.get()


def clear_trace_context() -> None:
    """Limpa contexto de trace (útil para cleanup)"""
    trace_id_var.set(None)
    structlog.contextvars.unbind_contextvars("trace_id")
