"""Instrumentação de métricas Prometheus para FastAPI e chamadas à PushEngage."""
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator


# Chamadas de saída para as APIs da PushEngage
pushengage_api_requests_total = Counter(
    "pushengage_api_requests_total",
    "Total de requisições enviadas às APIs da PushEngage",
    ["api", "outcome"],
)
pushengage_api_request_duration_seconds = Histogram(
    "pushengage_api_request_duration_seconds",
    "Duração das requisições às APIs da PushEngage em segundos",
    ["api"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10],
)

# Sync de subscriber ids (endpoint server-side)
pushengage_subscriber_sync_total = Counter(
    "pushengage_subscriber_sync_total",
    "Total de sincronizações de subscriber ids recebidas",
    ["result"],
)


def setup_metrics(app, service_name: str = "unknown"):
    """Configura métricas Prometheus no app FastAPI.

    Expõe /metrics e instrumenta automaticamente todos os endpoints HTTP.
    """
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        excluded_handlers=["/metrics", "/", "/api/v1/pushengage/health/simple"],
        inprogress_name="http_requests_in_progress",
        inprogress_labels=True,
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, include_in_schema=False, tags=["Observability"])
