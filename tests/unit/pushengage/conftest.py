import json

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from shared.db.session import build_engine, build_session_maker, create_tables
from projects.pushengage.repositories.options import SiteSettings


class FakeOptions:
    """Credential store em memória."""

    def __init__(self, settings=None):
        self.settings = settings or SiteSettings()
        self.updates = []

    async def get_site_settings(self):
        return self.settings

    async def has_credentials(self):
        return self.settings.has_credentials

    async def update_site_settings(self, settings):
        self.updates.append(settings)
        self.settings = settings
        return settings


class RecordingTransport(httpx.MockTransport):
    """MockTransport que guarda as requests recebidas."""

    def __init__(self, body=None, status_code=200, raw=None, exc=None):
        self.requests = []
        self.body = body if body is not None else {"status": 200, "data": {}}
        self.status_code = status_code
        self.raw = raw
        self.exc = exc
        super().__init__(self._handle)

    def _handle(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode())


@pytest.fixture
def connected_options():
    return FakeOptions(SiteSettings(site_id="4242", api_key="secret-key"))


@pytest.fixture
def disconnected_options():
    return FakeOptions()


@pytest_asyncio.fixture
async def db_engine():
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine):
    return build_session_maker(db_engine)
