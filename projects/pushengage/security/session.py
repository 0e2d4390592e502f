"""
Sessão do usuário do site host via JWT (HS256).

O token vem do header ``Authorization: Bearer`` ou do cookie de sessão e
carrega ``sub`` (user id) e ``role``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from shared.infrastructure.logging import get_logger
from projects.pushengage.config import pe_settings

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLE = "administrator"


class SessionUser(BaseModel):
    """Usuário identificado na request."""
    user_id: int
    role: str = "subscriber"

    @property
    def can_manage_options(self) -> bool:
        return self.role == ADMIN_ROLE


def create_session_token(
    user_id: int,
    role: str = "subscriber",
    expires_in: timedelta = timedelta(hours=12),
) -> str:
    """Emite um token de sessão assinado."""
    payload = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, pe_settings.pushengage_session_secret, algorithm="HS256")


def decode_session_token(token: str) -> Optional[SessionUser]:
    """Decodifica o token; retorna None se inválido ou expirado."""
    try:
        payload = jwt.decode(
            token,
            pe_settings.pushengage_session_secret,
            algorithms=["HS256"],
            options={"verify_exp": True},
        )
        return SessionUser(user_id=int(payload["sub"]), role=payload.get("role", "subscriber"))
    except jwt.ExpiredSignatureError:
        logger.warning("Token de sessão expirado")
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        logger.warning("Token de sessão inválido", error=str(e))
    return None


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Optional[SessionUser]:
    """Usuário da sessão, ou None para visitantes anônimos."""
    token = None
    if credentials and credentials.credentials:
        token = credentials.credentials
    else:
        token = request.cookies.get(pe_settings.pushengage_session_cookie)

    if not token:
        return None
    return decode_session_token(token)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> SessionUser:
    """Exige uma sessão válida."""
    user = await get_optional_user(request, credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Autenticação necessária",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> SessionUser:
    """Exige sessão com permissão ``manage_options``."""
    user = await get_current_user(request, credentials)
    if not user.can_manage_options:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Permissão negada. Verifique se você tem a permissão necessária para esta ação.",
        )
    return user
