"""
Router da API v1 do serviço PushEngage.
"""

from fastapi import APIRouter

from projects.pushengage.api.router import pushengage_router

# Router principal
pushengage_api_router = APIRouter()

pushengage_api_router.include_router(
    pushengage_router,
    prefix="/pushengage",
)
