"""
Endpoint de sync de subscriber ids chamado pelo navegador.

Formulário: ``nonce``, ``action``, ``add_id`` e ``remove_id`` opcionais.
Exige sessão autenticada e nonce válido (403 caso contrário).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse

from shared.infrastructure.logging import get_logger
from shared.observability.metrics import pushengage_subscriber_sync_total
from projects.pushengage.api.dependencies import get_subscriber_sync_service
from projects.pushengage.config import pe_settings
from projects.pushengage.security.nonce import (
    SUBSCRIBER_SYNC_ACTION,
    create_nonce,
    verify_nonce,
)
from projects.pushengage.security.session import (
    SessionUser,
    get_current_user,
    get_optional_user,
)
from projects.pushengage.services.subscriber_sync import SubscriberSyncService
from projects.pushengage.sync.client import SYNC_ACTION

logger = get_logger(__name__)
router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "data": message})


@router.post("")
async def sync_subscriber_data(
    nonce: Optional[str] = Form(None),
    action: Optional[str] = Form(None),
    add_id: Optional[str] = Form(None),
    remove_id: Optional[str] = Form(None),
    user: Optional[SessionUser] = Depends(get_optional_user),
    service: SubscriberSyncService = Depends(get_subscriber_sync_service),
):
    """Adiciona/remove subscriber ids do usuário logado."""
    if action and action != SYNC_ACTION:
        return _error(400, "Ação inválida.")

    user_id = user.user_id if user else 0
    if not verify_nonce(nonce, SUBSCRIBER_SYNC_ACTION, user_id):
        pushengage_subscriber_sync_total.labels(result="forbidden").inc()
        logger.warning("Sync recusado: nonce inválido", user_id=user_id)
        return _error(403, "Falha na verificação do nonce.")

    if user is None:
        pushengage_subscriber_sync_total.labels(result="forbidden").inc()
        return _error(403, "Usuário não autenticado.")

    subscriber_ids = await service.sync(user.user_id, add_id, remove_id)
    return {"success": True, "data": {"subscriber_ids": subscriber_ids}}


@router.get("/config")
async def sync_config(
    user: SessionUser = Depends(get_current_user),
    service: SubscriberSyncService = Depends(get_subscriber_sync_service),
):
    """Dados que o cliente precisa para sincronizar: URL, nonce e ids conhecidos."""
    return {
        "ajax_url": pe_settings.pushengage_sync_url,
        "nonce": create_nonce(SUBSCRIBER_SYNC_ACTION, user.user_id),
        "subscriber_ids": await service.get_subscriber_ids(user.user_id),
    }
