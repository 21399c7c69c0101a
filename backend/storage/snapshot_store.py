"""
Snapshot stores: read the previous flight snapshot, write the current one.

Two backends share the same load/save contract:
- JsonFileSnapshotStore: a JSON file keyed by flight id
- SupabaseSnapshotStore: a single row in the flight_snapshots table, overwritten each run
"""

import json
import os
import tempfile
from typing import Any, Optional

from config.settings import NotifierSettings
from models.flight import Snapshot, SnapshotValidationError, coerce_snapshot, snapshot_to_json
from shared.db import get_supabase_client

SNAPSHOT_TABLE = "flight_snapshots"
SNAPSHOT_ROW_ID = "latest"


class JsonFileSnapshotStore:
    """Stores the snapshot as a pretty-printed JSON file"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[Snapshot]:
        """
        Read the previous snapshot.

        Returns:
            Snapshot, or None if no file exists yet (first run)

        Raises:
            SnapshotValidationError: If the file is not a JSON object of records
        """
        if not os.path.exists(self.path):
            return None

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise SnapshotValidationError(
                    f"Snapshot file {self.path} is not valid JSON: {e}"
                ) from e

        return coerce_snapshot(raw)

    def save(self, snapshot: Snapshot) -> None:
        """Write the snapshot atomically (temp file in the same directory, then replace)."""
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(
            dir=directory, prefix=".flight_data_", suffix=".json.tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot_to_json(snapshot), f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class SupabaseSnapshotStore:
    """Stores the latest snapshot as a single row in Supabase"""

    def __init__(
        self,
        supabase: Any = None,
        table: str = SNAPSHOT_TABLE,
        row_id: str = SNAPSHOT_ROW_ID,
    ):
        self.supabase = supabase or get_supabase_client()
        self.table = table
        self.row_id = row_id

    def load(self) -> Optional[Snapshot]:
        response = (
            self.supabase.table(self.table)
            .select("data")
            .eq("id", self.row_id)
            .limit(1)
            .execute()
        )

        if not response.data:
            return None

        return coerce_snapshot(response.data[0].get("data"))

    def save(self, snapshot: Snapshot) -> None:
        # Overwrite the one row so the table never grows
        self.supabase.table(self.table).upsert(
            {"id": self.row_id, "data": snapshot_to_json(snapshot)},
            on_conflict="id",
            returning="minimal",
        ).execute()


def get_snapshot_store(settings: NotifierSettings):
    """Pick the snapshot store configured by SNAPSHOT_BACKEND."""
    if settings.snapshot_backend == "supabase":
        return SupabaseSnapshotStore()
    return JsonFileSnapshotStore(settings.flight_data_file)
