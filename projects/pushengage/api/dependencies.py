"""
Dependencias FastAPI do módulo PushEngage.

Os serviços são criados uma vez por processo (em ``create_app``) e lidos de
``app.state`` em cada request.
"""

from fastapi import Request

from projects.pushengage.client.pushengage_api import PushEngageAPI
from projects.pushengage.repositories.options import SiteOptions
from projects.pushengage.services.subscriber_sync import SubscriberSyncService


async def get_pushengage_api(request: Request) -> PushEngageAPI:
    """Retorna a facade PushEngage do app.state."""
    return request.app.state.pushengage_api


async def get_site_options(request: Request) -> SiteOptions:
    """Retorna o credential store do app.state."""
    return request.app.state.site_options


async def get_subscriber_sync_service(request: Request) -> SubscriberSyncService:
    """Retorna o serviço de sync de subscribers do app.state."""
    return request.app.state.subscriber_sync
