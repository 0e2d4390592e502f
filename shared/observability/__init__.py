"""Módulo de observabilidade: métricas Prometheus."""
from shared.observability.metrics import (
    setup_metrics,
    pushengage_api_requests_total,
    pushengage_api_request_duration_seconds,
    pushengage_subscriber_sync_total,
)

__all__ = [
    "setup_metrics",
    "pushengage_api_requests_total",
    "pushengage_api_request_duration_seconds",
    "pushengage_subscriber_sync_total",
]
