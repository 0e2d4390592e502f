"""Endpoints de push notifications (encaminhados à API privada da PushEngage)."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from projects.pushengage.api.dependencies import get_pushengage_api
from projects.pushengage.api.responses import result_response
from projects.pushengage.client.pushengage_api import PushEngageAPI
from projects.pushengage.schemas.notifications import SendNotificationRequest
from projects.pushengage.security.session import SessionUser, require_admin

router = APIRouter()

ORDER_FIELDS = Literal[
    "valid_from",
    "sent_at",
    "sentcount",
    "viewcount",
    "clickcount",
    "failedcount",
    "created_at",
    "notification_id",
]


@router.post("")
async def send_notification(
    request: SendNotificationRequest,
    api: PushEngageAPI = Depends(get_pushengage_api),
    user: SessionUser = Depends(require_admin),
):
    """Envia, agenda ou salva como rascunho uma notificação."""
    result = await api.send_notification(request.model_dump(exclude_none=True))
    return result_response(result, success_status=201)


@router.get("")
async def list_notifications(
    status: Optional[Literal["sent", "draft", "scheduled"]] = Query(None),
    start_sent_at: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    end_sent_at: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    page: Optional[int] = Query(None, ge=1),
    order_by_asc: Optional[ORDER_FIELDS] = Query(None),
    order_by_desc: Optional[ORDER_FIELDS] = Query(None),
    api: PushEngageAPI = Depends(get_pushengage_api),
    user: SessionUser = Depends(require_admin),
):
    """Lista notificações com filtros opcionais."""
    filters = {
        "status": status,
        "start_sent_at": start_sent_at,
        "end_sent_at": end_sent_at,
        "limit": limit,
        "page": page,
        "order_by_asc": order_by_asc,
        "order_by_desc": order_by_desc,
    }
    result = await api.get_notifications({k: v for k, v in filters.items() if v is not None})
    return result_response(result)


@router.get("/{notification_id}")
async def get_notification(
    notification_id: str,
    api: PushEngageAPI = Depends(get_pushengage_api),
    user: SessionUser = Depends(require_admin),
):
    """Busca uma notificação."""
    result = await api.get_notification(notification_id)
    return result_response(result)
