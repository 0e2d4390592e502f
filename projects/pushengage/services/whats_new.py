"""Banner "What's New" do painel admin."""

from shared.infrastructure.logging import get_logger
from projects.pushengage.config import pe_settings
from projects.pushengage.repositories.options import SiteOptions, SiteSettings

logger = get_logger(__name__)

DISMISS_ACTION = "pe_dismiss_whats_new_notice"


def is_showing(settings: SiteSettings) -> bool:
    """O banner aparece até ser dispensado."""
    return not settings.dismissed_whats_new_notice


async def dismiss_whats_new_notice(options: SiteOptions) -> SiteSettings:
    """Dispensa o banner para a versão atual do plugin."""
    settings = await options.get_site_settings()
    updated = settings.model_copy(
        update={
            "version": pe_settings.pushengage_version,
            "dismissed_whats_new_notice": True,
        }
    )
    await options.update_site_settings(updated)
    logger.info("Banner What's New dispensado", version=updated.version)
    return updated
