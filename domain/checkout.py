"""
Domain: sale commit workflow.

Composes into one snapshot transition:
- a new Sale (client name copied at commit time),
- its Delivery (PENDING, no deliverer yet),
- a stock decrement for every line item,
- a purchase_count increment on the client.

All four effects are in the returned snapshot, or none of them are (a call
with an empty cart returns the input snapshot untouched).

Leniency, matching the point-of-sale flow this serves:
- An unknown client still gets a sale, under the name "Cliente", and no
  purchase count is bumped.
- `total` is stored as given; it is not checked against the items.
- Stock is decremented without a floor, so overselling drives stock
  negative. adjust_stock (domain/state.py) clamps at zero instead.
- Lines for unknown products are kept on the sale but move no stock.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional, Sequence, Tuple

from .delivery import ADDRESS_FALLBACK, Delivery, DeliveryStatus
from .ids import DELIVERY_PREFIX, SALE_PREFIX, new_id
from .sale import PaymentMethod, Sale, SaleItem
from .state import AppState
from .time import require_utc_timestamp

CLIENT_NAME_FALLBACK = "Cliente"


@dataclass(frozen=True, slots=True)
class SaleRequest:
    """Cart submitted by the point of sale."""

    client_id: str
    items: Tuple[SaleItem, ...]
    total: Decimal
    payment_method: PaymentMethod
    address: Optional[str] = None


def _quantities_by_product(items: Sequence[SaleItem]) -> Dict[str, int]:
    totals: Dict[str, int] = defaultdict(int)
    for item in items:
        totals[item.product_id] += item.quantity
    return totals


def commit_sale(state: AppState, request: SaleRequest, *, now: datetime) -> Tuple[AppState, Optional[Sale]]:
    """
    Commit `request` against `state`.

    Returns the next snapshot and the new Sale (None when the cart is empty).
    The Sale and its Delivery are prepended to their lists.
    """

    require_utc_timestamp("now", now)

    if not request.items:
        return state, None

    client = state.find_client(request.client_id)
    sale_id = new_id(SALE_PREFIX)
    delivery_id = new_id(DELIVERY_PREFIX)
    client_name = client.name if client is not None else CLIENT_NAME_FALLBACK

    sale = Sale(
        sale_id=sale_id,
        client_id=request.client_id,
        client_name=client_name,
        items=tuple(request.items),
        total=request.total,
        payment_method=PaymentMethod(request.payment_method),
        date=now,
        delivery_id=delivery_id,
    )

    delivery = Delivery(
        delivery_id=delivery_id,
        sale_id=sale_id,
        client_id=request.client_id,
        client_name=client_name,
        address=request.address or (client.address if client is not None else "") or ADDRESS_FALLBACK,
        status=DeliveryStatus.PENDING,
        scheduled_for=now,
    )

    sold = _quantities_by_product(request.items)
    products = tuple(
        replace(p, stock=p.stock - sold[p.product_id]) if p.product_id in sold else p
        for p in state.products
    )
    clients = tuple(
        replace(c, purchase_count=c.purchase_count + 1) if c.client_id == request.client_id else c
        for c in state.clients
    )

    next_state = replace(
        state,
        clients=clients,
        products=products,
        sales=(sale,) + state.sales,
        deliveries=(delivery,) + state.deliveries,
    )
    return next_state, sale
