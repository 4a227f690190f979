"""
Supabase client initialization.

This module contains *only* the database connection setup. The client is
built on demand so the rest of the application can run on the local file
backend without any Supabase credentials.

Settings used (see config/settings.py):
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
"""

from __future__ import annotations

from typing import Optional

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]


def create_supabase_client(url: Optional[str], key: Optional[str]) -> Client:
    """Return an official Supabase client for `url` / `key`."""

    if not url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )

    if not key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    return create_client(url, key)


__all__ = ["create_supabase_client"]
