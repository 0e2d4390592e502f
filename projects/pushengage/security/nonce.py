"""
Nonces com janela de tempo para requisições do navegador.

Um nonce é um HMAC-SHA256 de ``tick|action|user_id`` usando o segredo de sessão
como chave, onde ``tick`` avança a cada meia vida do nonce. Um nonce é aceito no
tick atual e no anterior, então vale entre ``lifetime/2`` e ``lifetime`` segundos.
"""

import hashlib
import hmac
import math
import time
from typing import Optional

from projects.pushengage.config import pe_settings

SUBSCRIBER_SYNC_ACTION = "pushengage_subscriber_sync_nonce"
ADMIN_ACTION = "pushengage-nonce"


def nonce_tick(lifetime: Optional[int] = None, now: Optional[float] = None) -> int:
    lifetime = lifetime or pe_settings.pushengage_nonce_lifetime
    now = time.time() if now is None else now
    return math.ceil(now / (lifetime / 2))


def _nonce_for_tick(tick: int, action: str, user_id: int, secret: str) -> str:
    digest = hmac.new(
        secret.encode("utf-8"),
        f"{tick}|{action}|{user_id}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return digest[-12:-2]


def create_nonce(
    action: str,
    user_id: int,
    *,
    secret: Optional[str] = None,
    now: Optional[float] = None,
) -> str:
    """Gera o nonce de ``action`` para o usuário."""
    secret = secret or pe_settings.pushengage_session_secret
    return _nonce_for_tick(nonce_tick(now=now), action, user_id, secret)


def verify_nonce(
    nonce: Optional[str],
    action: str,
    user_id: int,
    *,
    secret: Optional[str] = None,
    now: Optional[float] = None,
) -> int:
    """Valida o nonce.

    Returns:
        1 se gerado na meia vida atual, 2 se na anterior, 0 se inválido.
    """
    if not nonce:
        return 0

    secret = secret or pe_settings.pushengage_session_secret
    tick = nonce_tick(now=now)
    # Comparação em bytes: o nonce vem do cliente e pode ter qualquer caractere
    received = nonce.encode("utf-8", "surrogatepass")

    for age, candidate_tick in ((1, tick), (2, tick - 1)):
        expected = _nonce_for_tick(candidate_tick, action, user_id, secret)
        if hmac.compare_digest(expected.encode("utf-8"), received):
            return age
    return 0
