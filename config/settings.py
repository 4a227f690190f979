"""
Application settings.

Values come from environment variables; a `.env` file in the project root is
loaded first if present.

- STORAGE_BACKEND: "file" (default) or "supabase"
- DATA_DIR: directory used by the file backend (default: ./data)
- SUPABASE_URL / SUPABASE_KEY: required when STORAGE_BACKEND=supabase
- SUPABASE_SLOTS_TABLE: table holding the storage slots (default: app_slots)
- GEMINI_API_KEY / GEMINI_MODEL: advisory assistant
- SYNC_INTERVAL_SECONDS / SYNC_PULSE_SECONDS: sync indicator timing
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent


@dataclass(frozen=True, slots=True)
class Settings:
    storage_backend: str = "file"
    data_dir: Path = PROJECT_ROOT / "data"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_slots_table: str = "app_slots"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-3-flash-preview"
    sync_interval_seconds: float = 30.0
    sync_pulse_seconds: float = 2.0


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Read Settings from the environment (after loading the .env file)."""

    load_dotenv(dotenv_path=env_file or PROJECT_ROOT / ".env")

    backend = os.getenv("STORAGE_BACKEND", "file").strip().lower()
    if backend not in ("file", "supabase"):
        raise RuntimeError(
            f"Invalid STORAGE_BACKEND: {backend!r}. Use 'file' or 'supabase'."
        )

    return Settings(
        storage_backend=backend,
        data_dir=Path(os.getenv("DATA_DIR") or PROJECT_ROOT / "data"),
        supabase_url=os.getenv("SUPABASE_URL"),
        supabase_key=os.getenv("SUPABASE_KEY"),
        supabase_slots_table=os.getenv("SUPABASE_SLOTS_TABLE", "app_slots"),
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-3-flash-preview"),
        sync_interval_seconds=float(os.getenv("SYNC_INTERVAL_SECONDS", "30")),
        sync_pulse_seconds=float(os.getenv("SYNC_PULSE_SECONDS", "2")),
    )
