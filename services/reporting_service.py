"""
Read-only views over a snapshot.

Handles:
- Dashboard summary (revenue, counts, open deliveries)
- Low-stock report (stock at or below the reorder threshold)
- Delivery listing filtered by status
- Catalog order text handed to the messaging collaborator
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional
from urllib.parse import quote

from domain.delivery import Delivery, DeliveryStatus
from domain.product import Product
from domain.state import AppState

ORDER_PHONE = "558592592012"


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    client_count: int
    sales_count: int
    total_revenue: Decimal
    open_deliveries: int
    low_stock_count: int


def low_stock_products(state: AppState) -> List[Product]:
    return [p for p in state.products if p.is_low_stock]


def deliveries_with_status(state: AppState, status: Optional[DeliveryStatus] = None) -> List[Delivery]:
    """All deliveries (most recent first), or only those with `status`."""

    if status is None:
        return list(state.deliveries)
    return [d for d in state.deliveries if d.status is DeliveryStatus(status)]


def dashboard_summary(state: AppState) -> DashboardSummary:
    open_statuses = (DeliveryStatus.PENDING, DeliveryStatus.IN_ROUTE)
    return DashboardSummary(
        client_count=len(state.clients),
        sales_count=len(state.sales),
        total_revenue=sum((s.total for s in state.sales), Decimal("0")),
        open_deliveries=sum(1 for d in state.deliveries if d.status in open_statuses),
        low_stock_count=len(low_stock_products(state)),
    )


def order_message(product: Product) -> Optional[str]:
    """
    Text asking the store for one product, or None when it is out of stock.
    """

    if product.stock <= 0:
        return None
    return f"Olá H Água! Gostaria de pedir: {product.name} (R$ {product.price:.2f})"


def order_link(product: Product, phone: str = ORDER_PHONE) -> Optional[str]:
    """wa.me share link carrying `order_message(product)`."""

    message = order_message(product)
    if message is None:
        return None
    return f"https://wa.me/{phone}?text={quote(message, safe='')}"
