"""
Tests for `repositories/slot_storage.py`.

Covers contract rules:
- A slot that was never written reads as None.
- Writes overwrite the whole slot; no temp files are left behind.
- Deleting a missing slot is not an error.
- The Supabase backend reads, upserts and deletes one row per key and
  surfaces response errors as RuntimeError.
"""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from repositories.slot_storage import AUTH_SLOT, STATE_SLOT, FileSlotStorage, SupabaseSlotStorage


def test_file_slots_start_empty(tmp_path: Path) -> None:
    storage = FileSlotStorage(tmp_path / "nested" / "slots")

    assert storage.read(STATE_SLOT) is None
    assert storage.read(AUTH_SLOT) is None


def test_file_slot_write_overwrites(tmp_path: Path) -> None:
    storage = FileSlotStorage(tmp_path)

    storage.write(STATE_SLOT, '{"clients": []}')
    storage.write(STATE_SLOT, '{"clients": [], "products": []}')

    assert storage.read(STATE_SLOT) == '{"clients": [], "products": []}'
    assert sorted(p.name for p in tmp_path.iterdir()) == [f"{STATE_SLOT}.json"]


def test_file_slots_are_independent(tmp_path: Path) -> None:
    storage = FileSlotStorage(tmp_path)
    storage.write(STATE_SLOT, "state")
    storage.write(AUTH_SLOT, "true")

    storage.delete(AUTH_SLOT)
    storage.delete(AUTH_SLOT)

    assert storage.read(AUTH_SLOT) is None
    assert storage.read(STATE_SLOT) == "state"


def test_file_slot_keeps_unicode(tmp_path: Path) -> None:
    storage = FileSlotStorage(tmp_path)

    storage.write(STATE_SLOT, "Água 💧")

    assert FileSlotStorage(tmp_path).read(STATE_SLOT) == "Água 💧"


class _FakeQuery:
    def __init__(self, table: "_FakeTable", action: str, payload: Any = None) -> None:
        self._table = table
        self._action = action
        self._payload = payload
        self._key: Optional[str] = None

    def eq(self, column: str, value: str) -> "_FakeQuery":
        assert column == "key"
        self._key = value
        return self

    def limit(self, n: int) -> "_FakeQuery":
        return self

    def execute(self) -> SimpleNamespace:
        if self._table.error:
            return SimpleNamespace(data=None, error=self._table.error)

        rows = self._table.rows
        if self._action == "select":
            data = [{"value": rows[self._key]}] if self._key in rows else []
            return SimpleNamespace(data=data, error=None)
        if self._action == "upsert":
            rows[self._payload["key"]] = self._payload["value"]
            self._table.upserts.append(self._payload)
            return SimpleNamespace(data=[self._payload], error=None)
        rows.pop(self._key, None)
        return SimpleNamespace(data=[], error=None)


class _FakeTable:
    def __init__(self) -> None:
        self.rows: Dict[str, str] = {}
        self.upserts: List[Dict[str, Any]] = []
        self.error: Optional[str] = None

    def select(self, columns: str) -> _FakeQuery:
        return _FakeQuery(self, "select")

    def upsert(self, payload: Dict[str, Any]) -> _FakeQuery:
        return _FakeQuery(self, "upsert", payload)

    def delete(self) -> _FakeQuery:
        return _FakeQuery(self, "delete")


class _FakeSupabase:
    def __init__(self) -> None:
        self.tables: Dict[str, _FakeTable] = {}

    def table(self, name: str) -> _FakeTable:
        return self.tables.setdefault(name, _FakeTable())


def test_supabase_slot_round_trip() -> None:
    client = _FakeSupabase()
    storage = SupabaseSlotStorage(client)

    assert storage.read(STATE_SLOT) is None

    storage.write(STATE_SLOT, "one")
    storage.write(STATE_SLOT, "two")
    assert storage.read(STATE_SLOT) == "two"

    upsert = client.tables["app_slots"].upserts[-1]
    assert upsert["key"] == STATE_SLOT
    assert upsert["updated_at_utc"].endswith("+00:00")

    storage.delete(STATE_SLOT)
    assert storage.read(STATE_SLOT) is None


def test_supabase_slot_uses_configured_table() -> None:
    client = _FakeSupabase()

    SupabaseSlotStorage(client, table="store_slots").write(AUTH_SLOT, "true")

    assert client.tables["store_slots"].rows == {AUTH_SLOT: "true"}


def test_supabase_errors_are_raised() -> None:
    client = _FakeSupabase()
    storage = SupabaseSlotStorage(client)
    client.table("app_slots").error = "permission denied"

    with pytest.raises(RuntimeError, match="permission denied"):
        storage.read(STATE_SLOT)
    with pytest.raises(RuntimeError):
        storage.write(STATE_SLOT, "x")
    with pytest.raises(RuntimeError):
        storage.delete(STATE_SLOT)
