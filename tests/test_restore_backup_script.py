"""
Tests for `scripts/restore_backup.py`.

Covers contract rules:
- A valid backup replaces the saved snapshot, even one that no longer decodes.
- --dry-run validates without writing.
- An invalid backup exits with code 2 and leaves storage untouched.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from domain.state import AppState
from repositories.slot_storage import STATE_SLOT, FileSlotStorage
from scripts.restore_backup import main
from services.persistence_service import PersistenceGateway


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    directory = tmp_path / "data"
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("DATA_DIR", str(directory))
    return directory


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["restore_backup.py", *args])
    return main()


def _backup_file(tmp_path: Path, state: AppState) -> Path:
    backup = PersistenceGateway(FileSlotStorage(tmp_path / "export")).export(state)
    path = tmp_path / backup.filename
    path.write_bytes(backup.content)
    return path


def test_restore_over_corrupt_snapshot(
    tmp_path: Path, data_dir: Path, state: AppState, monkeypatch: pytest.MonkeyPatch
) -> None:
    storage = FileSlotStorage(data_dir)
    storage.write(STATE_SLOT, "{broken")

    assert _run(monkeypatch, str(_backup_file(tmp_path, state))) == 0

    assert PersistenceGateway(storage).load() == state


def test_dry_run_writes_nothing(
    tmp_path: Path, data_dir: Path, state: AppState, monkeypatch: pytest.MonkeyPatch
) -> None:
    storage = FileSlotStorage(data_dir)
    storage.write(STATE_SLOT, "{broken")

    assert _run(monkeypatch, str(_backup_file(tmp_path, state)), "--dry-run") == 0

    assert storage.read(STATE_SLOT) == "{broken"


def test_invalid_backup_exits_2(tmp_path: Path, data_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text('{"foo": 1}', encoding="utf-8")

    assert _run(monkeypatch, str(bad)) == 2

    assert FileSlotStorage(data_dir).read(STATE_SLOT) is None
