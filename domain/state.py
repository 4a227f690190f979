"""
Domain: application state snapshot and entity store operations.

An AppState is an immutable value holding every entity collection. Each
operation takes a snapshot plus explicit input and returns the next snapshot;
previously returned snapshots are never modified.

Contract rules implemented here:
- add_client prepends (most recent first); add_product appends.
- Missing optional fields default silently (leniency at the core boundary).
- update_* / remove_* / adjust_stock with an unknown id are no-ops and return
  the very same snapshot object.
- adjust_stock clamps stock at zero. Sale commits do not clamp
  (domain/checkout.py).
- Removing a client or product never cascades into sales or deliveries.

Sale commits live in domain/checkout.py, delivery transitions in
domain/lifecycle.py, the deliverer registry in domain/deliverers.py.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from .client import Client, ClientType
from .delivery import Delivery
from .ids import CLIENT_PREFIX, PRODUCT_PREFIX, new_id
from .product import Product, ProductCategory
from .sale import Sale


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    DELIVERER = "DELIVERER"
    SALES = "SALES"


@dataclass(frozen=True, slots=True)
class CurrentUser:
    name: str
    role: UserRole


@dataclass(frozen=True, slots=True)
class AppState:
    """Complete, immutable value of all entity collections at one instant."""

    clients: Tuple[Client, ...] = ()
    products: Tuple[Product, ...] = ()
    sales: Tuple[Sale, ...] = ()
    deliveries: Tuple[Delivery, ...] = ()
    deliverers: Tuple[str, ...] = ()
    current_user: Optional[CurrentUser] = None

    def find_client(self, client_id: str) -> Optional[Client]:
        return next((c for c in self.clients if c.client_id == client_id), None)

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.product_id == product_id), None)

    def find_sale(self, sale_id: str) -> Optional[Sale]:
        return next((s for s in self.sales if s.sale_id == sale_id), None)

    def find_delivery(self, delivery_id: str) -> Optional[Delivery]:
        return next((d for d in self.deliveries if d.delivery_id == delivery_id), None)


# ----------------------------------------------------------------------------
# Clients
# ----------------------------------------------------------------------------

def add_client(
    state: AppState,
    *,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    type: Optional[ClientType] = None,
) -> Tuple[AppState, Client]:
    """Create a client with a fresh id and put it first in the list."""

    client = Client(
        client_id=new_id(CLIENT_PREFIX),
        name=name or "Novo Cliente",
        phone=phone or "",
        address=address or "",
        type=ClientType(type) if type else ClientType.RESIDENTIAL,
        purchase_count=0,
    )
    return replace(state, clients=(client,) + state.clients), client


def update_client(state: AppState, client: Client) -> AppState:
    """Replace the client with the same id. Unknown id: no-op."""

    if state.find_client(client.client_id) is None:
        return state
    return replace(
        state,
        clients=tuple(client if c.client_id == client.client_id else c for c in state.clients),
    )


def remove_client(state: AppState, client_id: str) -> AppState:
    if state.find_client(client_id) is None:
        return state
    return replace(state, clients=tuple(c for c in state.clients if c.client_id != client_id))


# ----------------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------------

def add_product(
    state: AppState,
    *,
    name: Optional[str] = None,
    category: Optional[ProductCategory] = None,
    price: Optional[Decimal] = None,
    stock: Optional[int] = None,
    min_stock: Optional[int] = None,
    icon: Optional[str] = None,
) -> Tuple[AppState, Product]:
    """Create a product with a fresh id and append it to the catalog."""

    product = Product(
        product_id=new_id(PRODUCT_PREFIX),
        name=name or "Novo Produto",
        category=ProductCategory(category) if category else ProductCategory.WATER,
        price=Decimal(str(price)) if price is not None else Decimal("0"),
        stock=stock if stock is not None else 0,
        min_stock=min_stock if min_stock is not None else 5,
        icon=icon or "📦",
    )
    return replace(state, products=state.products + (product,)), product


def update_product(state: AppState, product: Product) -> AppState:
    """Replace the product with the same id. Unknown id: no-op."""

    if state.find_product(product.product_id) is None:
        return state
    return replace(
        state,
        products=tuple(product if p.product_id == product.product_id else p for p in state.products),
    )


def remove_product(state: AppState, product_id: str) -> AppState:
    if state.find_product(product_id) is None:
        return state
    return replace(state, products=tuple(p for p in state.products if p.product_id != product_id))


def adjust_stock(state: AppState, product_id: str, delta: int) -> AppState:
    """Set stock to max(0, stock + delta). Unknown id: no-op."""

    if state.find_product(product_id) is None:
        return state
    return replace(
        state,
        products=tuple(
            replace(p, stock=max(0, p.stock + delta)) if p.product_id == product_id else p
            for p in state.products
        ),
    )
