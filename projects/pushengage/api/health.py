"""Endpoints de health check do módulo PushEngage."""

from fastapi import APIRouter, Depends, Request

from shared.db.session import check_database_connection
from shared.infrastructure.config import settings
from shared.presentation.schemas.health import DetailedHealthResponse, HealthResponse
from projects.pushengage.api.dependencies import get_site_options
from projects.pushengage.config import pe_settings
from projects.pushengage.repositories.options import SiteOptions

router = APIRouter()


@router.get("/simple", response_model=HealthResponse)
async def health_simple():
    """Health check simples para load balancers (sem auth)."""
    return HealthResponse(service="pushengage", version=pe_settings.pushengage_version)


@router.get("", response_model=DetailedHealthResponse)
async def health_detailed(
    request: Request,
    options: SiteOptions = Depends(get_site_options),
):
    """Health check com banco e estado da conexão com a PushEngage."""
    db_ok = await check_database_connection(request.app.state.db_engine)
    connected = await options.has_credentials() if db_ok else False

    overall_status = "ok"
    if not db_ok:
        overall_status = "unhealthy"
    elif not connected:
        overall_status = "degraded"

    return DetailedHealthResponse(
        status=overall_status,
        service=settings.app_name,
        version=pe_settings.pushengage_version,
        database="connected" if db_ok else "unavailable",
        site_connected=connected,
        private_api_url=pe_settings.pushengage_api_url,
        rest_api_url=pe_settings.pushengage_rest_api_url,
    )
