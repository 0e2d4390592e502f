"""Schemas dos health checks."""
from typing import Literal

from pydantic import BaseModel

HealthStatus = Literal["ok", "degraded", "unhealthy"]


class HealthResponse(BaseModel):
    """Liveness: o processo responde."""
    status: HealthStatus = "ok"
    service: str
    version: str


class DetailedHealthResponse(HealthResponse):
    """Readiness: banco acessível e site conectado à PushEngage.

    ``degraded`` indica banco ok mas site sem credenciais.
    """
    database: Literal["connected", "unavailable"]
    site_connected: bool = False
    private_api_url: str
    rest_api_url: str
