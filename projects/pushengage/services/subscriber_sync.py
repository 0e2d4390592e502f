"""
Sincronização server-side dos subscriber ids de um usuário.

Cada usuário guarda uma lista ordenada (mais antigo primeiro) com no máximo
``pushengage_subscriber_ids_limit`` ids. A lista é removida por completo
quando fica vazia. Read-modify-write sem lock: last-writer-wins.
"""

import re
from typing import Optional

from shared.infrastructure.logging import get_logger
from shared.observability.metrics import pushengage_subscriber_sync_total
from projects.pushengage.config import pe_settings
from projects.pushengage.repositories.user_meta import UserMetaRepository

logger = get_logger(__name__)

SUBSCRIBER_IDS_META_KEY = "pushengage_subscriber_ids"

_TAG_RE = re.compile(r"<[^>]*>")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text_field(value: Optional[str]) -> str:
    """Remove tags, caracteres de controle e espaços redundantes."""
    if not value:
        return ""
    value = _TAG_RE.sub("", str(value))
    value = _CONTROL_RE.sub(" ", value)
    return _WHITESPACE_RE.sub(" ", value).strip()


def apply_sync(
    subscriber_ids: list[str],
    add_id: str = "",
    remove_id: str = "",
    limit: int = 5,
) -> list[str]:
    """Aplica remove/add numa cópia da lista e corta para os ``limit`` mais recentes."""
    ids = list(subscriber_ids)

    if remove_id and remove_id in ids:
        ids = [sid for sid in ids if sid != remove_id]

    if add_id and add_id not in ids:
        ids.append(add_id)

    if len(ids) > limit:
        ids = ids[-limit:]

    return ids


class SubscriberSyncService:
    """Mantém a lista de subscriber ids por usuário."""

    def __init__(self, user_meta: UserMetaRepository, limit: Optional[int] = None):
        self.user_meta = user_meta
        self.limit = limit or pe_settings.pushengage_subscriber_ids_limit

    async def get_subscriber_ids(self, user_id: int) -> list[str]:
        value = await self.user_meta.get(user_id, SUBSCRIBER_IDS_META_KEY)
        if not value or not isinstance(value, list):
            return []
        return [str(sid) for sid in value]

    async def sync(
        self,
        user_id: int,
        add_id: Optional[str] = None,
        remove_id: Optional[str] = None,
    ) -> list[str]:
        """Adiciona/remove ids e persiste a lista resultante."""
        add_id = sanitize_text_field(add_id)
        remove_id = sanitize_text_field(remove_id)

        current = await self.get_subscriber_ids(user_id)
        updated = apply_sync(current, add_id, remove_id, self.limit)

        if not updated:
            await self.user_meta.delete(user_id, SUBSCRIBER_IDS_META_KEY)
        else:
            await self.user_meta.update(user_id, SUBSCRIBER_IDS_META_KEY, updated)

        pushengage_subscriber_sync_total.labels(result="success").inc()
        logger.info(
            "Subscriber ids sincronizados",
            user_id=user_id,
            added=bool(add_id),
            removed=bool(remove_id),
            total=len(updated),
        )
        return updated
