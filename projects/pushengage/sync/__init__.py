"""Sync do subscriber id do lado do cliente."""
from projects.pushengage.sync.client import (
    SYNCED_ID_STORAGE_KEY,
    SubscriberSynchronizer,
    SyncConfig,
    SyncPlan,
    fetch_sync_config,
)
from projects.pushengage.sync.events import SUBSCRIPTION_CHANGE_EVENT, EventBus
from projects.pushengage.sync.storage import JsonFileStorage, MemoryStorage

__all__ = [
    "SYNCED_ID_STORAGE_KEY",
    "SubscriberSynchronizer",
    "SyncConfig",
    "SyncPlan",
    "fetch_sync_config",
    "SUBSCRIPTION_CHANGE_EVENT",
    "EventBus",
    "JsonFileStorage",
    "MemoryStorage",
]
