"""Endpoints de conexão do site com a PushEngage."""

from fastapi import APIRouter, Depends

from shared.infrastructure.logging import get_logger
from projects.pushengage.api.dependencies import get_pushengage_api, get_site_options
from projects.pushengage.client.pushengage_api import PushEngageAPI
from projects.pushengage.config import pe_settings
from projects.pushengage.repositories.options import SiteOptions
from projects.pushengage.schemas.settings import ConnectSiteRequest, SiteStatusResponse
from projects.pushengage.security.session import SessionUser, require_admin

logger = get_logger(__name__)
router = APIRouter()


@router.get("/status", response_model=SiteStatusResponse)
async def site_status(
    api: PushEngageAPI = Depends(get_pushengage_api),
    options: SiteOptions = Depends(get_site_options),
    user: SessionUser = Depends(require_admin),
):
    """Informa se o site está conectado."""
    site = await options.get_site_settings()
    return SiteStatusResponse(
        connected=await api.is_site_connected(),
        site_id=site.site_id,
        version=pe_settings.pushengage_version,
    )


@router.put("/settings", response_model=SiteStatusResponse)
async def connect_site(
    request: ConnectSiteRequest,
    options: SiteOptions = Depends(get_site_options),
    user: SessionUser = Depends(require_admin),
):
    """Grava site_id e api_key, preservando o resto do documento de settings."""
    current = await options.get_site_settings()
    updated = current.model_copy(update={"site_id": request.site_id, "api_key": request.api_key})
    await options.update_site_settings(updated)

    logger.info("Site conectado", site_id=request.site_id, user_id=user.user_id)
    return SiteStatusResponse(
        connected=updated.has_credentials,
        site_id=updated.site_id,
        version=pe_settings.pushengage_version,
    )
