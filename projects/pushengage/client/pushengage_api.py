"""
Facade tipada sobre o gateway HTTP da PushEngage.

Valida os parâmetros obrigatórios antes de qualquer chamada de rede e
delega ao gateway. Uma instância por processo, criada no lifespan da app
e injetada nas rotas.
"""

from typing import Any, Mapping, Optional, Sequence, Union

from shared.infrastructure.logging import get_logger
from projects.pushengage.client.http_api import PushEngageHttpClient
from projects.pushengage.client.result import (
    API_ERROR,
    EMPTY_NOTIFICATION_ID,
    EMPTY_PARAMS,
    INVALID_REQUEST,
    MISSING_PARAMS,
    ApiResult,
    api_error,
    validation_error,
)
from projects.pushengage.repositories.options import SiteSettings
from projects.pushengage.utils.query import build_query

logger = get_logger(__name__)

NOTIFICATION_REQUIRED_PARAMS = {
    "notification_title": "O título da notificação é obrigatório.",
    "notification_message": "A mensagem da notificação é obrigatória.",
    "notification_url": "A URL da notificação é obrigatória.",
}

SEGMENT_REQUIRED_PARAMS = {
    "segment_name": "O nome do segmento é obrigatório.",
}


class PushEngageAPI:
    """Operações de domínio: notificações e segmentos."""

    def __init__(self, http: PushEngageHttpClient):
        self.http = http
        self.version = http.settings.pushengage_version

    async def _load_settings(self) -> Union[SiteSettings, ApiResult]:
        """Settings do site, ou ApiResult de erro se o store falhar."""
        try:
            return await self.http.options.get_site_settings()
        except Exception as e:
            logger.error("Falha ao carregar settings do site", error=str(e))
            return api_error(API_ERROR, str(e) or type(e).__name__)

    async def is_site_connected(self) -> bool:
        """Retorna True se o site tem site_id e api_key configurados."""
        settings = await self._load_settings()
        return isinstance(settings, SiteSettings) and settings.has_credentials

    async def _site_path(self, resource: str) -> Union[str, ApiResult]:
        settings = await self._load_settings()
        if not isinstance(settings, SiteSettings):
            return settings
        return f"sites/{settings.site_id}/{resource}"

    async def send_notification(self, params: Optional[Mapping[str, Any]]) -> ApiResult:
        """Envia (ou salva como rascunho) uma push notification.

        Obrigatórios: ``notification_title``, ``notification_message`` e
        ``notification_url``. Todos os campos ausentes são reportados juntos.
        ``utm_params`` presente é sempre enviado com ``enabled=True`` e
        ``status`` assume ``sent`` quando omitido.
        """
        if not isinstance(params, Mapping) or not params:
            return api_error(EMPTY_PARAMS, "Os parâmetros da notificação estão vazios.")

        messages = [
            message
            for key, message in NOTIFICATION_REQUIRED_PARAMS.items()
            if not params.get(key)
        ]
        if messages:
            return validation_error(MISSING_PARAMS, messages)

        payload = dict(params)
        if isinstance(payload.get("utm_params"), Mapping):
            payload["utm_params"] = {**payload["utm_params"], "enabled": True}

        if not payload.get("status"):
            payload["status"] = "sent"

        action = "draft" if payload["status"] == "draft" else "sent"
        path = await self._site_path(f"notifications?action={action}")
        if not isinstance(path, str):
            return path

        logger.info("Enviando notificação", action=action, status=payload["status"])
        return await self.http.send_private_api_request(path, method="POST", body=payload)

    async def get_notification(self, notification_id: Any) -> ApiResult:
        """Busca uma notificação pelo ID."""
        if not notification_id:
            return api_error(EMPTY_NOTIFICATION_ID, "O ID da notificação está ausente.")

        path = await self._site_path(f"notifications/{notification_id}")
        if not isinstance(path, str):
            return path
        return await self.http.send_private_api_request(path)

    async def get_notifications(self, params: Optional[Mapping[str, Any]] = None) -> ApiResult:
        """Lista notificações com filtros opcionais.

        Filtros: status, start_sent_at, end_sent_at, limit, page,
        order_by_asc, order_by_desc.
        """
        path = await self._site_path("notifications")
        if not isinstance(path, str):
            return path
        if params:
            path += "?" + build_query(params)
        return await self.http.send_private_api_request(path)

    async def get_segments(self, params: Optional[Mapping[str, Any]] = None) -> ApiResult:
        """Lista segmentos (filtros: limit, page, segment_name_like, expand)."""
        path = await self._site_path("segments")
        if not isinstance(path, str):
            return path
        if params:
            path += "?" + build_query(params)
        return await self.http.send_private_api_request(path)

    async def create_segment(self, params: Optional[Mapping[str, Any]]) -> ApiResult:
        """Cria um segmento. ``segment_name`` é obrigatório."""
        params = params if isinstance(params, Mapping) else {}
        messages = [
            message
            for key, message in SEGMENT_REQUIRED_PARAMS.items()
            if not params.get(key)
        ]
        if messages:
            return validation_error(INVALID_REQUEST, messages)

        path = await self._site_path("segments")
        if not isinstance(path, str):
            return path
        logger.info("Criando segmento", segment_name=params["segment_name"])
        return await self.http.send_private_api_request(path, method="POST", body=dict(params))

    async def add_subscribers_to_segment(
        self,
        subscriber_ids: Sequence[str],
        segment_id: Any,
    ) -> ApiResult:
        """Adiciona subscribers (hashes) a um segmento via API REST pública."""
        messages = []
        if not isinstance(subscriber_ids, (list, tuple)) or not subscriber_ids:
            messages.append("Os IDs dos subscribers são obrigatórios e devem ser uma lista não vazia.")
        if not segment_id:
            messages.append("O ID do segmento é obrigatório.")
        if messages:
            return validation_error(INVALID_REQUEST, messages)

        logger.info(
            "Adicionando subscribers ao segmento",
            segment_id=segment_id,
            count=len(subscriber_ids),
        )
        return await self.http.send_rest_api_request(
            "segments/addSegmentWithHash",
            method="POST",
            body={
                "hashes": list(subscriber_ids),
                "segment_id": segment_id,
            },
        )
