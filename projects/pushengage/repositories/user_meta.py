"""Repositório de metadados por usuário."""

from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from projects.pushengage.models import PushEngageUserMeta


class UserMetaRepository:
    """get/update/delete de user meta, uma sessão por operação."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, user_id: int, meta_key: str) -> Optional[Any]:
        async with self._session_maker() as session:
            result = await session.execute(
                select(PushEngageUserMeta.meta_value).where(
                    PushEngageUserMeta.user_id == user_id,
                    PushEngageUserMeta.meta_key == meta_key,
                )
            )
            return result.scalar_one_or_none()

    async def update(self, user_id: int, meta_key: str, value: Any) -> None:
        async with self._session_maker() as session:
            result = await session.execute(
                select(PushEngageUserMeta).where(
                    PushEngageUserMeta.user_id == user_id,
                    PushEngageUserMeta.meta_key == meta_key,
                )
            )
            meta = result.scalar_one_or_none()
            if meta is None:
                session.add(
                    PushEngageUserMeta(user_id=user_id, meta_key=meta_key, meta_value=value)
                )
            else:
                meta.meta_value = value
            await session.commit()

    async def delete(self, user_id: int, meta_key: str) -> None:
        async with self._session_maker() as session:
            await session.execute(
                delete(PushEngageUserMeta).where(
                    PushEngageUserMeta.user_id == user_id,
                    PushEngageUserMeta.meta_key == meta_key,
                )
            )
            await session.commit()
