"""Endpoints de segmentos."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from projects.pushengage.api.dependencies import get_pushengage_api
from projects.pushengage.api.responses import result_response
from projects.pushengage.client.pushengage_api import PushEngageAPI
from projects.pushengage.schemas.segments import AddSubscribersRequest, CreateSegmentRequest
from projects.pushengage.security.session import SessionUser, require_admin

router = APIRouter()


@router.get("")
async def list_segments(
    limit: Optional[int] = Query(None, ge=1, le=100),
    page: Optional[int] = Query(None, ge=1),
    segment_name_like: Optional[str] = Query(None),
    expand: Optional[str] = Query(None),
    api: PushEngageAPI = Depends(get_pushengage_api),
    user: SessionUser = Depends(require_admin),
):
    """Lista segmentos."""
    filters = {
        "limit": limit,
        "page": page,
        "segment_name_like": segment_name_like,
        "expand": expand,
    }
    result = await api.get_segments({k: v for k, v in filters.items() if v is not None})
    return result_response(result)


@router.post("")
async def create_segment(
    request: CreateSegmentRequest,
    api: PushEngageAPI = Depends(get_pushengage_api),
    user: SessionUser = Depends(require_admin),
):
    """Cria um segmento."""
    result = await api.create_segment(request.model_dump(exclude_none=True))
    return result_response(result, success_status=201)


@router.post("/{segment_id}/subscribers")
async def add_subscribers_to_segment(
    segment_id: str,
    request: AddSubscribersRequest,
    api: PushEngageAPI = Depends(get_pushengage_api),
    user: SessionUser = Depends(require_admin),
):
    """Adiciona subscribers (hashes) a um segmento."""
    result = await api.add_subscribers_to_segment(request.subscriber_ids, segment_id)
    return result_response(result)
