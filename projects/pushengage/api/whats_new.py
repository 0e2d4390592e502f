"""Endpoints do banner "What's New"."""

from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse

from projects.pushengage.api.dependencies import get_site_options
from projects.pushengage.config import pe_settings
from projects.pushengage.repositories.options import SiteOptions
from projects.pushengage.security.nonce import ADMIN_ACTION, create_nonce, verify_nonce
from projects.pushengage.security.session import SessionUser, get_optional_user, require_admin
from projects.pushengage.services.whats_new import (
    DISMISS_ACTION,
    dismiss_whats_new_notice,
    is_showing,
)

router = APIRouter()


@router.get("")
async def whats_new_state(
    options: SiteOptions = Depends(get_site_options),
    user: SessionUser = Depends(require_admin),
):
    """Estado do banner para o painel admin."""
    settings = await options.get_site_settings()
    return {
        "showing": is_showing(settings),
        "action": DISMISS_ACTION,
        "nonce": create_nonce(ADMIN_ACTION, user.user_id),
        "dismissed_notice": settings.dismissed_whats_new_notice,
        "version": pe_settings.pushengage_version,
    }


@router.post("/dismiss")
async def dismiss(
    nonce: Optional[str] = Form(None),
    options: SiteOptions = Depends(get_site_options),
    user: Optional[SessionUser] = Depends(get_optional_user),
):
    """Dispensa o banner (exige nonce admin e permissão manage_options)."""
    user_id = user.user_id if user else 0
    if not verify_nonce(nonce, ADMIN_ACTION, user_id):
        return JSONResponse(
            status_code=401,
            content={
                "success": False,
                "data": {
                    "message": "Token de segurança inválido.",
                    "code": "invalid_security_token",
                },
            },
        )

    if user is None or not user.can_manage_options:
        return JSONResponse(
            status_code=403,
            content={
                "success": False,
                "data": "Permissão negada. Verifique se você tem a permissão necessária para esta ação.",
            },
        )

    await dismiss_whats_new_notice(options)
    return {"success": True}
