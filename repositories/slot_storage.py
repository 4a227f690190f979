"""
Durable keyed storage slots (persistence).

The application keeps two independent slots:
- STATE_SLOT: the full snapshot JSON text,
- AUTH_SLOT: the "authenticated" session flag.

Each slot is overwritten as a whole; readers never observe a partial write.
Two backends are provided: a Supabase table and a directory of local files.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

STATE_SLOT = "h-agua-state"
AUTH_SLOT = "h-agua-auth"

# Supabase table holding the slots. Keep this aligned with your database schema:
#   create table app_slots (
#       key text primary key,
#       value text not null,
#       updated_at_utc timestamptz not null
#   );
_DEFAULT_SLOTS_TABLE: str = "app_slots"


class SlotStorage(Protocol):
    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class SupabaseSlotStorage:
    """Slots stored as rows of a Supabase table, one row per key."""

    def __init__(self, client: Any, table: str = _DEFAULT_SLOTS_TABLE) -> None:
        self._client = client
        self._table = table

    def read(self, key: str) -> Optional[str]:
        response = (
            self._client.table(self._table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )

        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to read slot {key}: {error}")

        rows = getattr(response, "data", None) or []
        if not rows:
            return None
        return str(rows[0]["value"])

    def write(self, key: str, value: str) -> None:
        payload = {
            "key": key,
            "value": value,
            "updated_at_utc": datetime.now(timezone.utc).isoformat(),
        }
        response = self._client.table(self._table).upsert(payload).execute()

        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to write slot {key}: {error}")

    def delete(self, key: str) -> None:
        response = self._client.table(self._table).delete().eq("key", key).execute()

        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to delete slot {key}: {error}")


class FileSlotStorage:
    """Slots stored as UTF-8 files named after the key inside `directory`."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        # Write to a temp file in the same directory, then swap it in.
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", dir=self._directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
        logger.debug("Wrote slot %s (%d chars)", key, len(value))

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
