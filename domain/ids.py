"""
Domain: entity identifiers.

Identifiers are opaque strings of the form "<prefix>-<uuid4 hex>". A uuid4
suffix keeps ids unique for the lifetime of the store, across restarts and
restores, so an id is never reused after its entity is deleted.
"""

from __future__ import annotations

from uuid import uuid4

CLIENT_PREFIX = "c"
PRODUCT_PREFIX = "p"
SALE_PREFIX = "s"
DELIVERY_PREFIX = "d"


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex}"
