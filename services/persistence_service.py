"""
Persistence gateway.

Handles:
- Bootstrap: load the saved snapshot, or seed the starter catalog when none exists
- Save: whole-snapshot overwrite of the state slot after every mutation
- Export: JSON backup bytes plus a dated download filename
- Restore: all-or-nothing decode of an externally supplied backup, written
  over the saved snapshot without reading it (recovers a corrupt slot)
- Session flag: the "authenticated" slot, independent of business data
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Union

from config.settings import Settings
from domain.seed import starter_state
from domain.state import AppState
from domain.time import utc_now
from repositories.client import create_supabase_client
from repositories.slot_storage import (
    AUTH_SLOT,
    STATE_SLOT,
    FileSlotStorage,
    SlotStorage,
    SupabaseSlotStorage,
)
from repositories.snapshot_codec import SnapshotError, document_to_state, dumps_state, loads_state

logger = logging.getLogger(__name__)

BACKUP_FILENAME_PREFIX = "h-agua-backup"


class RestoreError(SnapshotError):
    """Raised when a backup cannot be restored. The live store is left unchanged."""


@dataclass(frozen=True, slots=True)
class BackupFile:
    filename: str
    content: bytes
    media_type: str = "application/json"


def backup_filename(day: date) -> str:
    return f"{BACKUP_FILENAME_PREFIX}-{day.isoformat()}.json"


class PersistenceGateway:
    """Reads and writes snapshots through a SlotStorage backend."""

    def __init__(self, storage: SlotStorage) -> None:
        self._storage = storage

    def load(self) -> AppState:
        """
        Return the saved snapshot, or the starter state when nothing was saved.

        The starter state is persisted right away. A saved snapshot that
        cannot be decoded raises SnapshotError instead of being reseeded over.
        """

        text = self._storage.read(STATE_SLOT)
        if text is None:
            logger.info("No saved snapshot found; seeding starter catalog")
            state = starter_state()
            self.save(state)
            return state

        state = loads_state(text)
        logger.info(
            "Loaded snapshot: %d clients, %d products, %d sales, %d deliveries",
            len(state.clients),
            len(state.products),
            len(state.sales),
            len(state.deliveries),
        )
        return state

    def save(self, state: AppState) -> None:
        self._storage.write(STATE_SLOT, dumps_state(state))

    def export(self, state: AppState, *, today: Optional[date] = None) -> BackupFile:
        """Serialize `state` as a downloadable backup."""

        day = today or utc_now().date()
        return BackupFile(
            filename=backup_filename(day),
            content=dumps_state(state).encode("utf-8"),
        )

    def parse_backup(self, payload: Union[str, bytes, Mapping[str, Any]]) -> AppState:
        """
        Decode a backup without touching storage.

        Accepts JSON text/bytes or an already decoded document. Anything that
        is not JSON, lacks `clients`/`products` lists or holds malformed
        records raises RestoreError.
        """

        try:
            if isinstance(payload, (str, bytes)):
                return loads_state(payload)
            return document_to_state(payload)
        except SnapshotError as e:
            raise RestoreError(f"Arquivo de backup inválido: {e}") from e

    def restore(self, payload: Union[str, bytes, Mapping[str, Any]]) -> AppState:
        """
        Validate a backup and write it over the saved snapshot.

        The saved snapshot is never read, so this also recovers a state slot
        that no longer decodes. Raises RestoreError (nothing written) when the
        backup is invalid.
        """

        state = self.parse_backup(payload)
        self.save(state)
        logger.info("Wrote restored snapshot to storage")
        return state

    # ------------------------------------------------------------------
    # Session flag
    # ------------------------------------------------------------------

    def is_authenticated(self) -> bool:
        return self._storage.read(AUTH_SLOT) == "true"

    def set_authenticated(self, value: bool) -> None:
        if value:
            self._storage.write(AUTH_SLOT, "true")
        else:
            self._storage.delete(AUTH_SLOT)


def build_gateway(settings: Settings) -> PersistenceGateway:
    """Gateway over the storage backend selected in `settings`."""

    if settings.storage_backend == "supabase":
        client = create_supabase_client(settings.supabase_url, settings.supabase_key)
        storage: SlotStorage = SupabaseSlotStorage(client, settings.supabase_slots_table)
    else:
        storage = FileSlotStorage(settings.data_dir)
    logger.info("Using %s storage backend", settings.storage_backend)
    return PersistenceGateway(storage)
