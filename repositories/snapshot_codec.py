"""
Snapshot codec (persistence).

Converts an AppState to and from the JSON document kept in durable storage
and handed out as a backup file:

    { clients: [...], products: [...], sales: [...], deliveries: [...],
      deliverers: [...], currentUser: {name, role} | null }

Field names are camelCase. Money is written as JSON numbers, timestamps as
ISO-8601 UTC text. Temporal fields (Sale.date, Delivery.scheduledFor,
Delivery.completedAt, Client.lastPurchase) are parsed back into datetimes on
every decode. Optional fields that are unset are left out of the document.

This module does not enforce business rules; it only maps records.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Union

from domain.client import Client, ClientType
from domain.delivery import Delivery, DeliveryStatus
from domain.product import Product, ProductCategory
from domain.sale import PaymentMethod, Sale, SaleItem
from domain.state import AppState, CurrentUser, UserRole
from domain.time import parse_utc_timestamp, to_iso_utc


class SnapshotError(Exception):
    """Raised when a stored or supplied snapshot cannot be decoded."""


def _number(value: Decimal) -> float:
    return float(value)


def _decimal(value: Any) -> Decimal:
    return Decimal(str(value))


def _integer(value: Any) -> int:
    """Whole JSON number as int. Fractions, booleans and text are malformed."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a whole number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"expected a whole number, got {value!r}")
    return int(value)


# ----------------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------------

def _client_to_row(client: Client) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "id": client.client_id,
        "name": client.name,
        "phone": client.phone,
        "address": client.address,
        "type": client.type.value,
        "purchaseCount": client.purchase_count,
    }
    if client.last_purchase is not None:
        row["lastPurchase"] = to_iso_utc(client.last_purchase, name="last_purchase")
    return row


def _product_to_row(product: Product) -> Dict[str, Any]:
    return {
        "id": product.product_id,
        "name": product.name,
        "category": product.category.value,
        "price": _number(product.price),
        "stock": product.stock,
        "minStock": product.min_stock,
        "icon": product.icon,
    }


def _sale_to_row(sale: Sale) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "id": sale.sale_id,
        "clientId": sale.client_id,
        "clientName": sale.client_name,
        "items": [
            {
                "productId": item.product_id,
                "name": item.name,
                "quantity": item.quantity,
                "price": _number(item.price),
            }
            for item in sale.items
        ],
        "total": _number(sale.total),
        "paymentMethod": sale.payment_method.value,
        "date": to_iso_utc(sale.date, name="date"),
    }
    if sale.delivery_id is not None:
        row["deliveryId"] = sale.delivery_id
    return row


def _delivery_to_row(delivery: Delivery) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "id": delivery.delivery_id,
        "saleId": delivery.sale_id,
        "clientId": delivery.client_id,
        "clientName": delivery.client_name,
        "address": delivery.address,
        "status": delivery.status.value,
        "scheduledFor": to_iso_utc(delivery.scheduled_for, name="scheduled_for"),
    }
    if delivery.deliverer_name is not None:
        row["delivererName"] = delivery.deliverer_name
    if delivery.completed_at is not None:
        row["completedAt"] = to_iso_utc(delivery.completed_at, name="completed_at")
    return row


def state_to_document(state: AppState) -> Dict[str, Any]:
    """Build the JSON-ready document for `state`."""

    return {
        "clients": [_client_to_row(c) for c in state.clients],
        "products": [_product_to_row(p) for p in state.products],
        "sales": [_sale_to_row(s) for s in state.sales],
        "deliveries": [_delivery_to_row(d) for d in state.deliveries],
        "deliverers": list(state.deliverers),
        "currentUser": (
            {"name": state.current_user.name, "role": state.current_user.role.value}
            if state.current_user is not None
            else None
        ),
    }


def dumps_state(state: AppState) -> str:
    """Human-readable JSON text for `state` (used for storage and backups)."""

    return json.dumps(state_to_document(state), indent=2, ensure_ascii=False)


# ----------------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------------

def _row_to_client(row: Mapping[str, Any]) -> Client:
    return Client(
        client_id=str(row["id"]),
        name=str(row.get("name", "")),
        phone=str(row.get("phone") or ""),
        address=str(row.get("address") or ""),
        type=ClientType(row.get("type") or ClientType.RESIDENTIAL.value),
        purchase_count=_integer(row.get("purchaseCount", 0)),
        last_purchase=parse_utc_timestamp(row["lastPurchase"]) if row.get("lastPurchase") else None,
    )


def _row_to_product(row: Mapping[str, Any]) -> Product:
    return Product(
        product_id=str(row["id"]),
        name=str(row.get("name", "")),
        category=ProductCategory(row.get("category") or ProductCategory.OTHER.value),
        price=_decimal(row.get("price", 0)),
        stock=_integer(row.get("stock", 0)),
        min_stock=_integer(row.get("minStock", 0)),
        icon=str(row.get("icon", "")),
    )


def _row_to_sale(row: Mapping[str, Any]) -> Sale:
    return Sale(
        sale_id=str(row["id"]),
        client_id=str(row["clientId"]),
        client_name=str(row.get("clientName", "")),
        items=tuple(
            SaleItem(
                product_id=str(item["productId"]),
                name=str(item.get("name", "")),
                quantity=_integer(item["quantity"]),
                price=_decimal(item["price"]),
            )
            for item in row.get("items", [])
        ),
        total=_decimal(row["total"]),
        payment_method=PaymentMethod(row["paymentMethod"]),
        date=parse_utc_timestamp(row["date"]),
        delivery_id=str(row["deliveryId"]) if row.get("deliveryId") else None,
    )


def _row_to_delivery(row: Mapping[str, Any]) -> Delivery:
    return Delivery(
        delivery_id=str(row["id"]),
        sale_id=str(row["saleId"]),
        client_id=str(row["clientId"]),
        client_name=str(row.get("clientName", "")),
        address=str(row.get("address", "")),
        status=DeliveryStatus(row["status"]),
        scheduled_for=parse_utc_timestamp(row["scheduledFor"]),
        deliverer_name=str(row["delivererName"]) if row.get("delivererName") else None,
        completed_at=parse_utc_timestamp(row["completedAt"]) if row.get("completedAt") else None,
    )


def _current_user(value: Optional[Mapping[str, Any]]) -> Optional[CurrentUser]:
    if not value:
        return None
    return CurrentUser(name=str(value["name"]), role=UserRole(value["role"]))


def _require_list(document: Mapping[str, Any], key: str) -> List[Any]:
    value = document.get(key)
    if not isinstance(value, list):
        raise SnapshotError(f"Snapshot is missing a '{key}' list")
    return value


def document_to_state(document: Any) -> AppState:
    """
    Rebuild an AppState from a decoded JSON document.

    `clients` and `products` must be present. `sales` and `deliveries` default
    to empty, and so does `deliverers`, which older snapshots do not have.

    Raises SnapshotError on anything that cannot be mapped.
    """

    if not isinstance(document, Mapping):
        raise SnapshotError("Snapshot must be a JSON object")

    clients = _require_list(document, "clients")
    products = _require_list(document, "products")

    try:
        return AppState(
            clients=tuple(_row_to_client(row) for row in clients),
            products=tuple(_row_to_product(row) for row in products),
            sales=tuple(_row_to_sale(row) for row in document.get("sales") or []),
            deliveries=tuple(_row_to_delivery(row) for row in document.get("deliveries") or []),
            deliverers=tuple(str(name) for name in document.get("deliverers") or []),
            current_user=_current_user(document.get("currentUser")),
        )
    except (KeyError, TypeError, ValueError, ArithmeticError) as e:
        raise SnapshotError(f"Malformed snapshot record: {e}") from e


def loads_state(text: Union[str, bytes]) -> AppState:
    """Parse JSON text into an AppState. Raises SnapshotError."""

    try:
        document = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
    return document_to_state(document)
