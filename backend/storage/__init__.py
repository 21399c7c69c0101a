"""Persistence of the last flight snapshot between runs."""

from storage.snapshot_store import (
    JsonFileSnapshotStore,
    SupabaseSnapshotStore,
    get_snapshot_store,
)

__all__ = [
    "JsonFileSnapshotStore",
    "SupabaseSnapshotStore",
    "get_snapshot_store",
]
