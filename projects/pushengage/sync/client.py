"""
Sync do subscriber id do lado do cliente.

Reconcilia o subscriber id atual (vindo do SDK de push) com o id guardado
localmente e com a lista que o servidor conhece, e dispara no máximo uma
chamada ao endpoint de sync por reconciliação.

Estados: sem cache local (Unsynced) ou cache com um id (Synced(id)).
Falha de sync limpa o cache local, forçando nova reconciliação no próximo ciclo.

Não há guarda de requisição em voo: eventos muito próximos podem disparar
chamadas concorrentes (consistência eventual).
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Union

import httpx
from pydantic import BaseModel, Field

from shared.infrastructure.logging import get_logger
from projects.pushengage.sync.events import SUBSCRIPTION_CHANGE_EVENT, EventBus
from projects.pushengage.sync.storage import KeyValueStorage

logger = get_logger(__name__)

SYNCED_ID_STORAGE_KEY = "pe_wp_synched_sid"
SYNC_ACTION = "pe_subscriber_sync"

# Sentinela: SDK falhou ao informar o id (diferente de None = não inscrito)
_SDK_FAILED = object()


class PushSDK(Protocol):
    async def get_subscriber_id(self) -> Optional[str]: ...


class SyncConfig(BaseModel):
    """Dados entregues pelo servidor: URL de sync, nonce e ids já conhecidos."""
    ajax_url: str
    nonce: str
    subscriber_ids: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class SyncPlan:
    add_id: Optional[str] = None
    remove_id: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.add_id and not self.remove_id


async def fetch_sync_config(http: httpx.AsyncClient, url: str) -> SyncConfig:
    """Busca a configuração de sync do usuário logado."""
    response = await http.get(url)
    response.raise_for_status()
    return SyncConfig.model_validate(response.json())


class SubscriberSynchronizer:
    """Mantém o subscriber id do navegador sincronizado com o servidor."""

    def __init__(
        self,
        sdk: PushSDK,
        storage: KeyValueStorage,
        http: httpx.AsyncClient,
        config: SyncConfig,
        event_bus: Optional[EventBus] = None,
    ):
        self.sdk = sdk
        self.storage = storage
        self.http = http
        self.config = config
        self.event_bus = event_bus

    @property
    def known_ids(self) -> list[str]:
        return self.config.subscriber_ids

    async def init(self) -> None:
        """Reconcilia na inicialização e passa a ouvir mudanças de inscrição."""
        subscriber_id = await self.get_subscriber_id()
        if subscriber_id is not _SDK_FAILED:
            await self.maybe_sync(subscriber_id)

        if self.event_bus is not None:
            self.event_bus.on(SUBSCRIPTION_CHANGE_EVENT, self._on_subscription_change)

    async def _on_subscription_change(self, detail: dict[str, Any]) -> None:
        await self.maybe_sync(detail.get("subscriber_id"))

    async def get_subscriber_id(self) -> Union[Optional[str], object]:
        """Subscriber id atual do SDK (None = não inscrito, ``_SDK_FAILED`` em erro)."""
        try:
            return await self.sdk.get_subscriber_id()
        except Exception as e:
            logger.error("Falha ao obter subscriber id do SDK", error=str(e))
            return _SDK_FAILED

    def plan(self, subscriber_id: Optional[str]) -> SyncPlan:
        """Calcula add/remove e atualiza o cache local."""
        local_id = self.storage.get_item(SYNCED_ID_STORAGE_KEY)
        known = self.known_ids
        add_id = None
        remove_id = None

        if subscriber_id:
            if subscriber_id not in known:
                add_id = subscriber_id

            if local_id:
                if local_id != subscriber_id:
                    self.storage.set_item(SYNCED_ID_STORAGE_KEY, subscriber_id)
                    if local_id in known:
                        remove_id = local_id
            else:
                self.storage.set_item(SYNCED_ID_STORAGE_KEY, subscriber_id)
        elif local_id:
            if local_id in known:
                remove_id = local_id
            self.storage.remove_item(SYNCED_ID_STORAGE_KEY)

        return SyncPlan(add_id=add_id, remove_id=remove_id)

    async def maybe_sync(self, subscriber_id: Optional[str]) -> Optional[SyncPlan]:
        """Reconcilia e, se necessário, envia um único POST de sync.

        Returns:
            O plano enviado, ou None quando não havia nada a sincronizar.
        """
        plan = self.plan(subscriber_id)
        if plan.is_empty:
            return None

        form = {"nonce": self.config.nonce, "action": SYNC_ACTION}
        if plan.add_id:
            form["add_id"] = plan.add_id
        if plan.remove_id:
            form["remove_id"] = plan.remove_id

        try:
            response = await self.http.post(
                self.config.ajax_url,
                data=form,
                headers={"Cache-Control": "no-cache"},
            )
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Falha no sync do subscriber id", error=str(e))
            self.storage.remove_item(SYNCED_ID_STORAGE_KEY)
            return plan

        if not isinstance(result, dict) or not result.get("success"):
            logger.warning("Servidor recusou o sync do subscriber id", status=response.status_code)
            self.storage.remove_item(SYNCED_ID_STORAGE_KEY)
            return plan

        data = result.get("data") or {}
        if isinstance(data, dict) and isinstance(data.get("subscriber_ids"), list):
            self.config.subscriber_ids = [str(sid) for sid in data["subscriber_ids"]]

        logger.debug("Subscriber id sincronizado", add_id=plan.add_id, remove_id=plan.remove_id)
        return plan
