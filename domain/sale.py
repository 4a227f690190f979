"""
Domain: Sale records.

Sales are immutable once committed: no update or delete exists for them.
Client and product names and unit prices are copied into the sale at commit
time, so a sale keeps reading correctly after the client or product is
renamed or removed.

Building a sale together with its delivery and the stock/client side effects
lives in domain/checkout.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from .time import require_utc_timestamp


class PaymentMethod(str, Enum):
    CASH = "CASH"
    PIX = "PIX"
    CARD = "CARD"
    DEBT = "DEBT"  # fiado, paid later


@dataclass(frozen=True, slots=True)
class SaleItem:
    """One cart line, with name and unit price as they were at sale time."""

    product_id: str
    name: str
    quantity: int
    price: Decimal

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True, slots=True)
class Sale:
    """
    Immutable record of a committed sale.

    `total` is stored as given by the caller; it is not recomputed from the
    items here.
    """

    sale_id: str
    client_id: str
    client_name: str
    items: Tuple[SaleItem, ...]
    total: Decimal
    payment_method: PaymentMethod
    date: datetime
    delivery_id: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("date", self.date)

    def items_total(self) -> Decimal:
        """Sum of quantity x price over the items."""

        return sum((item.subtotal for item in self.items), Decimal("0"))
