from projects.pushengage.repositories.options import SiteOptions, SiteSettings, SETTINGS_OPTION
from projects.pushengage.repositories.user_meta import UserMetaRepository

__all__ = ["SiteOptions", "SiteSettings", "SETTINGS_OPTION", "UserMetaRepository"]
