"""
Domain: Client (customer) records.

Clients are created by an explicit add, edited explicitly, and touched
implicitly by a sale commit, which bumps purchase_count by one.
purchase_count never decreases outside of an explicit edit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .time import require_utc_timestamp


class ClientType(str, Enum):
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"


@dataclass(frozen=True, slots=True)
class Client:
    """
    Customer of the store.

    `address` is the default delivery address; a sale may still be delivered
    somewhere else.
    """

    client_id: str
    name: str
    phone: str = ""
    address: str = ""
    type: ClientType = ClientType.RESIDENTIAL
    purchase_count: int = 0
    last_purchase: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.purchase_count < 0:
            raise ValueError("purchase_count must be >= 0")
        if self.last_purchase is not None:
            require_utc_timestamp("last_purchase", self.last_purchase)
