import pytest

from projects.pushengage.repositories.user_meta import UserMetaRepository
from projects.pushengage.services.subscriber_sync import (
    SUBSCRIBER_IDS_META_KEY,
    SubscriberSyncService,
    apply_sync,
    sanitize_text_field,
)


class _FakeUserMeta:
    def __init__(self, initial=None):
        self.values = dict(initial or {})
        self.deleted = []

    async def get(self, user_id, meta_key):
        return self.values.get((user_id, meta_key))

    async def update(self, user_id, meta_key, value):
        self.values[(user_id, meta_key)] = value

    async def delete(self, user_id, meta_key):
        self.deleted.append((user_id, meta_key))
        self.values.pop((user_id, meta_key), None)


def test_apply_sync_appends_and_keeps_latest_five():
    ids = ["s1", "s2", "s3", "s4", "s5"]

    assert apply_sync(ids, add_id="s6") == ["s2", "s3", "s4", "s5", "s6"]
    assert ids == ["s1", "s2", "s3", "s4", "s5"]


def test_apply_sync_does_not_duplicate():
    assert apply_sync(["a", "b"], add_id="a") == ["a", "b"]


def test_apply_sync_removes_then_adds():
    assert apply_sync(["a", "b", "c"], add_id="d", remove_id="b") == ["a", "c", "d"]


def test_apply_sync_respects_custom_limit():
    assert apply_sync(["a", "b"], add_id="c", limit=2) == ["b", "c"]


def test_sanitize_text_field_strips_markup_and_whitespace():
    assert sanitize_text_field("  <b>abc</b>\n") == "abc"
    assert sanitize_text_field(None) == ""


@pytest.mark.asyncio
async def test_sync_stores_updated_list():
    repo = _FakeUserMeta({(1, SUBSCRIBER_IDS_META_KEY): ["old"]})
    service = SubscriberSyncService(repo, limit=5)

    result = await service.sync(1, add_id="new")

    assert result == ["old", "new"]
    assert repo.values[(1, SUBSCRIBER_IDS_META_KEY)] == ["old", "new"]


@pytest.mark.asyncio
async def test_sync_deletes_meta_when_list_becomes_empty():
    repo = _FakeUserMeta({(1, SUBSCRIBER_IDS_META_KEY): ["only"]})
    service = SubscriberSyncService(repo, limit=5)

    result = await service.sync(1, remove_id="only")

    assert result == []
    assert repo.deleted == [(1, SUBSCRIBER_IDS_META_KEY)]
    assert (1, SUBSCRIBER_IDS_META_KEY) not in repo.values


@pytest.mark.asyncio
async def test_get_subscriber_ids_ignores_corrupt_value():
    repo = _FakeUserMeta({(1, SUBSCRIBER_IDS_META_KEY): "nao-e-lista"})

    assert await SubscriberSyncService(repo).get_subscriber_ids(1) == []


@pytest.mark.asyncio
async def test_sync_with_database_repository(session_maker):
    service = SubscriberSyncService(UserMetaRepository(session_maker), limit=5)

    for index in range(1, 7):
        await service.sync(7, add_id=f"sid-{index}")

    assert await service.get_subscriber_ids(7) == [f"sid-{i}" for i in range(2, 7)]
    assert await service.get_subscriber_ids(8) == []

    for index in range(2, 7):
        await service.sync(7, remove_id=f"sid-{index}")

    assert await UserMetaRepository(session_maker).get(7, SUBSCRIBER_IDS_META_KEY) is None
