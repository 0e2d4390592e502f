"""
Sessão e engine assíncronos do SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from shared.infrastructure.config import settings
from shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base declarativa para todos os modelos."""


def build_engine(database_url: Optional[str] = None, **kwargs) -> AsyncEngine:
    """Cria engine async. Usado pela aplicação e pelos testes."""
    return create_async_engine(
        database_url or settings.database_url,
        echo=settings.database_echo,
        **kwargs,
    )


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False)


engine = build_engine()


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Cria as tabelas declaradas (idempotente)."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_database_connection(bind: AsyncEngine = engine) -> bool:
    """Verifica conectividade com o banco."""
    try:
        async with bind.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Falha ao conectar ao banco", error=str(e))
        return False
