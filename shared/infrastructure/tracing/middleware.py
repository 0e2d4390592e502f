"""
Middleware para capturar/gerar trace_id e injetar no contexto.
"""
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shared.infrastructure.logging import get_logger
from shared.infrastructure.tracing.context import (
    clear_trace_context,
    generate_trace_id,
    set_trace_id,
)

logger = get_logger("tracing.http")

TRACE_HEADER = "X-Trace-ID"


class TraceMiddleware(BaseHTTPMiddleware):
    """
    Middleware que:
    1. Captura X-Trace-ID do header ou gera novo
    2. Injeta trace_id no contexto do structlog
    3. Loga request received e response sent
    """

    EXCLUDED_PATHS = frozenset({"/metrics", "/api/v1/pushengage/health/simple"})

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        trace_id = request.headers.get(TRACE_HEADER) or generate_trace_id()
        set_trace_id(trace_id)

        start_time = time.time()
        logger.info(
            "request_received",
            path=str(request.url.path),
            method=request.method,
            ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error_type=type(e).__name__,
                error_message=str(e),
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            clear_trace_context()
            raise

        logger.info(
            "response_sent",
            status_code=response.status_code,
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        response.headers[TRACE_HEADER] = trace_id
        clear_trace_context()
        return response
