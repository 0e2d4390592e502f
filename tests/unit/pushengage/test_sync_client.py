from urllib.parse import parse_qs

import httpx
import pytest

from projects.pushengage.sync.client import (
    SYNCED_ID_STORAGE_KEY,
    SubscriberSynchronizer,
    SyncConfig,
    SyncPlan,
    fetch_sync_config,
)
from projects.pushengage.sync.events import SUBSCRIPTION_CHANGE_EVENT, EventBus
from projects.pushengage.sync.storage import JsonFileStorage, MemoryStorage

from tests.unit.pushengage.conftest import RecordingTransport


class _FakeSDK:
    def __init__(self, subscriber_id=None, error=None):
        self.subscriber_id = subscriber_id
        self.error = error

    async def get_subscriber_id(self):
        if self.error is not None:
            raise self.error
        return self.subscriber_id


class _SyncServer(RecordingTransport):
    """Endpoint de sync que aplica add/remove numa lista em memória."""

    def __init__(self, subscriber_ids=None):
        self.subscriber_ids = list(subscriber_ids or [])
        super().__init__()

    def _handle(self, request):
        self.requests.append(request)
        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        if form.get("remove_id") in self.subscriber_ids:
            self.subscriber_ids.remove(form["remove_id"])
        if form.get("add_id") and form["add_id"] not in self.subscriber_ids:
            self.subscriber_ids.append(form["add_id"])
        return httpx.Response(
            200, json={"success": True, "data": {"subscriber_ids": self.subscriber_ids}}
        )


def _form(request):
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def _synchronizer(transport, sdk=None, storage=None, known=None, event_bus=None):
    config = SyncConfig(
        ajax_url="https://blog.test/api/v1/pushengage/subscriber-sync",
        nonce="abc123",
        subscriber_ids=known or [],
    )
    return SubscriberSynchronizer(
        sdk or _FakeSDK(),
        storage if storage is not None else MemoryStorage(),
        httpx.AsyncClient(transport=transport),
        config,
        event_bus=event_bus,
    )


class TestPlan:
    def test_new_subscriber_is_added_and_cached(self):
        storage = MemoryStorage()
        sync = _synchronizer(RecordingTransport(), storage=storage)

        assert sync.plan("A") == SyncPlan(add_id="A")
        assert storage.get_item(SYNCED_ID_STORAGE_KEY) == "A"

    def test_known_and_cached_subscriber_needs_nothing(self):
        storage = MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"})
        sync = _synchronizer(RecordingTransport(), storage=storage, known=["A"])

        assert sync.plan("A").is_empty

    def test_known_but_not_cached_only_fills_cache(self):
        storage = MemoryStorage()
        sync = _synchronizer(RecordingTransport(), storage=storage, known=["A"])

        assert sync.plan("A").is_empty
        assert storage.get_item(SYNCED_ID_STORAGE_KEY) == "A"

    def test_changed_subscriber_replaces_previous(self):
        storage = MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"})
        sync = _synchronizer(RecordingTransport(), storage=storage, known=["A"])

        assert sync.plan("B") == SyncPlan(add_id="B", remove_id="A")
        assert storage.get_item(SYNCED_ID_STORAGE_KEY) == "B"

    def test_changed_subscriber_not_known_by_server_is_not_removed(self):
        storage = MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"})
        sync = _synchronizer(RecordingTransport(), storage=storage)

        assert sync.plan("B") == SyncPlan(add_id="B")

    def test_unsubscribe_removes_known_id_and_clears_cache(self):
        storage = MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"})
        sync = _synchronizer(RecordingTransport(), storage=storage, known=["A"])

        assert sync.plan(None) == SyncPlan(remove_id="A")
        assert storage.get_item(SYNCED_ID_STORAGE_KEY) is None

    def test_unsubscribe_of_unknown_id_only_clears_cache(self):
        storage = MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"})
        sync = _synchronizer(RecordingTransport(), storage=storage)

        assert sync.plan(None).is_empty
        assert storage.get_item(SYNCED_ID_STORAGE_KEY) is None


@pytest.mark.asyncio
async def test_maybe_sync_posts_form_once_and_is_idempotent():
    server = _SyncServer()
    sync = _synchronizer(server)

    plan = await sync.maybe_sync("A")
    again = await sync.maybe_sync("A")

    assert plan == SyncPlan(add_id="A")
    assert again is None
    assert len(server.requests) == 1
    assert _form(server.requests[0]) == {
        "nonce": "abc123",
        "action": "pe_subscriber_sync",
        "add_id": "A",
    }
    assert sync.known_ids == ["A"]


@pytest.mark.asyncio
async def test_maybe_sync_without_changes_makes_no_call():
    server = _SyncServer(["A"])
    sync = _synchronizer(server, storage=MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"}), known=["A"])

    assert await sync.maybe_sync("A") is None
    assert server.requests == []


@pytest.mark.asyncio
async def test_subscriber_change_sends_add_and_remove_together():
    server = _SyncServer(["A"])
    sync = _synchronizer(server, storage=MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"}), known=["A"])

    await sync.maybe_sync("B")

    assert len(server.requests) == 1
    assert _form(server.requests[0])["add_id"] == "B"
    assert _form(server.requests[0])["remove_id"] == "A"
    assert server.subscriber_ids == ["B"]


@pytest.mark.asyncio
async def test_transport_failure_clears_cache_and_retries_next_time():
    storage = MemoryStorage()
    sync = _synchronizer(RecordingTransport(exc=httpx.ConnectError("offline")), storage=storage)

    await sync.maybe_sync("A")

    assert storage.get_item(SYNCED_ID_STORAGE_KEY) is None

    server = _SyncServer()
    sync.http = httpx.AsyncClient(transport=server)
    await sync.maybe_sync("A")

    assert len(server.requests) == 1
    assert storage.get_item(SYNCED_ID_STORAGE_KEY) == "A"


@pytest.mark.asyncio
async def test_refused_sync_clears_cache():
    storage = MemoryStorage()
    transport = RecordingTransport(
        body={"success": False, "data": "Falha na verificação do nonce."}, status_code=403
    )
    sync = _synchronizer(transport, storage=storage)

    await sync.maybe_sync("A")

    assert len(transport.requests) == 1
    assert storage.get_item(SYNCED_ID_STORAGE_KEY) is None


@pytest.mark.asyncio
async def test_non_json_response_clears_cache():
    storage = MemoryStorage()
    sync = _synchronizer(RecordingTransport(raw=b"0"), storage=storage)

    await sync.maybe_sync("A")

    assert storage.get_item(SYNCED_ID_STORAGE_KEY) is None


@pytest.mark.asyncio
async def test_init_syncs_and_listens_for_subscription_changes():
    server = _SyncServer()
    bus = EventBus()
    sync = _synchronizer(server, sdk=_FakeSDK("A"), event_bus=bus)

    await sync.init()
    await bus.emit(SUBSCRIPTION_CHANGE_EVENT, {"subscriber_id": None})

    assert len(server.requests) == 2
    assert _form(server.requests[0])["add_id"] == "A"
    assert _form(server.requests[1])["remove_id"] == "A"
    assert server.subscriber_ids == []


@pytest.mark.asyncio
async def test_init_with_sdk_failure_does_not_sync():
    server = _SyncServer()
    bus = EventBus()
    storage = MemoryStorage({SYNCED_ID_STORAGE_KEY: "A"})
    sync = _synchronizer(
        server, sdk=_FakeSDK(error=RuntimeError("sdk indisponível")), storage=storage,
        known=["A"], event_bus=bus,
    )

    await sync.init()

    assert server.requests == []
    assert storage.get_item(SYNCED_ID_STORAGE_KEY) == "A"


@pytest.mark.asyncio
async def test_event_bus_keeps_running_after_failing_handler():
    bus = EventBus()
    calls = []

    async def failing(detail):
        raise RuntimeError("falhou")

    async def recording(detail):
        calls.append(detail)

    bus.on("evento", failing)
    bus.on("evento", recording)
    await bus.emit("evento", {"subscriber_id": "A"})
    bus.off("evento", recording)
    await bus.emit("evento", {"subscriber_id": "B"})

    assert calls == [{"subscriber_id": "A"}]


@pytest.mark.asyncio
async def test_fetch_sync_config():
    transport = RecordingTransport(
        body={"ajax_url": "/sync", "nonce": "n1", "subscriber_ids": ["A", "B"]}
    )

    async with httpx.AsyncClient(transport=transport, base_url="https://blog.test") as http:
        config = await fetch_sync_config(http, "/api/v1/pushengage/subscriber-sync/config")

    assert config == SyncConfig(ajax_url="/sync", nonce="n1", subscriber_ids=["A", "B"])


def test_json_file_storage_persists_between_instances(tmp_path):
    path = tmp_path / "client" / "storage.json"

    JsonFileStorage(path).set_item(SYNCED_ID_STORAGE_KEY, "A")

    assert JsonFileStorage(path).get_item(SYNCED_ID_STORAGE_KEY) == "A"
    JsonFileStorage(path).remove_item(SYNCED_ID_STORAGE_KEY)
    assert JsonFileStorage(path).get_item(SYNCED_ID_STORAGE_KEY) is None
