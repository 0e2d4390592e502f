"""
PushEngage Gateway - Entry point do serviço FastAPI.

Os serviços (credential store, gateway HTTP, facade, sync de subscribers) são
criados uma vez por processo e guardados em ``app.state``.
"""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from shared.db.session import (
    build_session_maker,
    check_database_connection,
    create_tables,
    engine as default_engine,
)
from shared.infrastructure.config import settings
from shared.infrastructure.logging import get_logger, setup_logging
from shared.infrastructure.tracing import TraceMiddleware
from shared.observability import setup_metrics
from app.pushengage_router import pushengage_api_router
from projects.pushengage.client.http_api import PushEngageHttpClient
from projects.pushengage.client.pushengage_api import PushEngageAPI
from projects.pushengage.config import pe_settings
from projects.pushengage.repositories.options import SiteOptions
from projects.pushengage.repositories.user_meta import UserMetaRepository
from projects.pushengage.services.subscriber_sync import SubscriberSyncService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gerencia o ciclo de vida do serviço.
    """
    logger.info(
        "Iniciando PushEngage Gateway",
        version=settings.app_version,
        environment=settings.environment,
    )

    db_ok = await check_database_connection(app.state.db_engine)
    if not db_ok:
        logger.error("Falha na conexao com o banco de dados")
    else:
        await create_tables(app.state.db_engine)
        logger.info("Conexao com banco de dados estabelecida")

    yield

    logger.info("Encerrando PushEngage Gateway")
    await app.state.pushengage_http.close()
    await app.state.db_engine.dispose()


def create_app(
    db_engine: Optional[AsyncEngine] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    metrics: bool = True,
) -> FastAPI:
    """Monta a aplicação e os serviços de processo."""
    db_engine = db_engine or default_engine
    session_maker = build_session_maker(db_engine)

    app = FastAPI(
        title=settings.app_name,
        description="""
        Integração com a PushEngage.

        ## Funcionalidades

        * **Notifications**: envio, rascunho e consulta de push notifications
        * **Segments**: criação, listagem e inclusão de subscribers
        * **Subscriber Sync**: ids de inscrição por usuário logado
        * **Service Worker**: bootstrap do service worker da PushEngage
        """,
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    site_options = SiteOptions(session_maker)
    http = PushEngageHttpClient(site_options, pe_settings, transport=transport)

    app.state.db_engine = db_engine
    app.state.site_options = site_options
    app.state.pushengage_http = http
    app.state.pushengage_api = PushEngageAPI(http)
    app.state.subscriber_sync = SubscriberSyncService(UserMetaRepository(session_maker))

    if metrics:
        setup_metrics(app, service_name="pushengage")

    app.add_middleware(TraceMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pushengage_api_router, prefix="/api/v1")

    @app.get("/", tags=["Root"])
    async def root():
        """Endpoint raiz - informacoes basicas do servico."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs" if settings.debug else "disabled",
        }

    return app


setup_logging(settings.log_level, service_name="pushengage")
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.pushengage_main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
