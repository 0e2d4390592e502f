"""Router principal do módulo PushEngage."""

from fastapi import APIRouter

from projects.pushengage.api import (
    health,
    notifications,
    segments,
    service_worker,
    site_settings,
    subscriber_sync,
    whats_new,
)

# Router público (health checks e service worker)
public_router = APIRouter()
public_router.include_router(health.router, prefix="/health", tags=["PushEngage - Health"])
public_router.include_router(service_worker.router, tags=["PushEngage - Service Worker"])

# Rotas com sessão (admin ou usuário logado)
authenticated_router = APIRouter()
authenticated_router.include_router(site_settings.router, tags=["PushEngage - Site"])
authenticated_router.include_router(notifications.router, prefix="/notifications", tags=["PushEngage - Notifications"])
authenticated_router.include_router(segments.router, prefix="/segments", tags=["PushEngage - Segments"])
authenticated_router.include_router(subscriber_sync.router, prefix="/subscriber-sync", tags=["PushEngage - Subscriber Sync"])
authenticated_router.include_router(whats_new.router, prefix="/whats-new", tags=["PushEngage - What's New"])

pushengage_router = APIRouter()
pushengage_router.include_router(public_router)
pushengage_router.include_router(authenticated_router)
