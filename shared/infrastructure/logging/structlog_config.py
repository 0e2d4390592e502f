"""
Logging estruturado com structlog.

Eventos saem em JSON (ou no console colorido em DEBUG) com timestamp ISO,
nível, trace_id/service vindos dos contextvars e valores sensíveis mascarados.
"""

import logging
import sys
from typing import Any, Optional

import structlog

# Logam cada conexão/consulta em DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "aiosqlite", "sqlalchemy.engine")

# Nunca vão para o log em claro
SENSITIVE_KEYS = frozenset({"api_key", "nonce", "token", "authorization", "x-pe-api-key"})

MASK = "***"


def mask_sensitive(_logger: Any, _method: str, event_dict: dict) -> dict:
    """Processor que mascara credenciais passadas como campos do evento."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        if event_dict[key]:
            event_dict[key] = MASK
    return event_dict


def _renderer(log_level: str):
    if log_level.upper() == "DEBUG":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer(ensure_ascii=False)


def setup_logging(log_level: str = "INFO", service_name: Optional[str] = None) -> None:
    """
    Configura logging estruturado do serviço.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR ou CRITICAL
        service_name: Anexado como ``service`` em todos os eventos
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            mask_sensitive,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer(log_level),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Logger estruturado (use ``__name__``)."""
    return structlog.get_logger(name)
