"""
Credential store do site: site_id, api_key e flags de configuração.

As settings são lidas e gravadas como um documento único
(option ``pushengage_settings``); não existe update parcial de campos.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.infrastructure.logging import get_logger
from projects.pushengage.models import PushEngageOption

logger = get_logger(__name__)

SETTINGS_OPTION = "pushengage_settings"


class SiteSettings(BaseModel):
    """Settings do site conectado à PushEngage."""

    model_config = ConfigDict(extra="allow")

    site_id: Optional[str] = None
    api_key: Optional[str] = None
    version: Optional[str] = None
    dismissed_whats_new_notice: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.site_id) and bool(self.api_key)


class SiteOptions:
    """Acesso às settings do site persistidas no banco."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get_site_settings(self) -> SiteSettings:
        """Carrega e valida as settings. Retorna registro vazio se não houver."""
        async with self._session_maker() as session:
            result = await session.execute(
                select(PushEngageOption).where(PushEngageOption.name == SETTINGS_OPTION)
            )
            option = result.scalar_one_or_none()

        if option is None or not isinstance(option.value, dict):
            return SiteSettings()

        try:
            return SiteSettings.model_validate(option.value)
        except ValidationError as e:
            logger.warning("Settings inválidas no banco, ignorando", error=str(e))
            return SiteSettings()

    async def has_credentials(self) -> bool:
        settings = await self.get_site_settings()
        return settings.has_credentials

    async def update_site_settings(self, settings: SiteSettings) -> SiteSettings:
        """Substitui o documento inteiro de settings."""
        document = settings.model_dump(mode="json")
        async with self._session_maker() as session:
            option = await session.get(PushEngageOption, SETTINGS_OPTION)
            if option is None:
                session.add(PushEngageOption(name=SETTINGS_OPTION, value=document))
            else:
                option.value = document
            await session.commit()

        logger.info("Settings do site atualizadas", site_id=settings.site_id)
        return settings
