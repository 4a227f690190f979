"""
Tests for `services/reporting_service.py`.

Covers contract rules:
- A product is low on stock when stock <= min_stock.
- Dashboard counts and revenue come from the snapshot as stored.
- Delivery listing keeps snapshot order and filters by status.
- Out-of-stock products have no order message.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from urllib.parse import unquote

from domain.checkout import SaleRequest, commit_sale
from domain.delivery import DeliveryStatus
from domain.lifecycle import set_delivery_status
from domain.sale import PaymentMethod, SaleItem
from domain.state import AppState, update_product
from services.reporting_service import (
    ORDER_PHONE,
    dashboard_summary,
    deliveries_with_status,
    low_stock_products,
    order_link,
    order_message,
)


def _sell(state: AppState, now, total: str) -> AppState:
    request = SaleRequest(
        client_id="c1",
        items=(SaleItem("p1", "Água 20L", 1, Decimal("5.00")),),
        total=Decimal(total),
        payment_method=PaymentMethod.PIX,
    )
    next_state, _ = commit_sale(state, request, now=now)
    return next_state


def test_low_stock_boundary(state: AppState) -> None:
    product = state.products[0]

    at_threshold = update_product(state, replace(product, stock=product.min_stock))
    above = update_product(state, replace(product, stock=product.min_stock + 1))

    assert low_stock_products(at_threshold) == [at_threshold.products[0]]
    assert low_stock_products(above) == []


def test_dashboard_summary(state: AppState, now) -> None:
    sold = _sell(_sell(state, now, "5.00"), now, "7.50")
    cancelled = set_delivery_status(sold, sold.deliveries[0].delivery_id, DeliveryStatus.CANCELLED, now=now)

    summary = dashboard_summary(cancelled)

    assert summary.client_count == 1
    assert summary.sales_count == 2
    assert summary.total_revenue == Decimal("12.50")
    assert summary.open_deliveries == 1
    assert summary.low_stock_count == 0


def test_dashboard_of_empty_store() -> None:
    summary = dashboard_summary(AppState())

    assert summary.total_revenue == Decimal("0")
    assert summary.sales_count == 0


def test_deliveries_with_status(state: AppState, now) -> None:
    sold = _sell(_sell(state, now, "5.00"), now, "5.00")
    newest, oldest = sold.deliveries
    routed = set_delivery_status(sold, oldest.delivery_id, DeliveryStatus.IN_ROUTE, "Carlos", now=now)

    assert [d.delivery_id for d in deliveries_with_status(routed)] == [newest.delivery_id, oldest.delivery_id]
    assert [d.delivery_id for d in deliveries_with_status(routed, DeliveryStatus.PENDING)] == [newest.delivery_id]
    assert [d.delivery_id for d in deliveries_with_status(routed, DeliveryStatus.IN_ROUTE)] == [oldest.delivery_id]
    assert deliveries_with_status(routed, DeliveryStatus.DELIVERED) == []


def test_order_message(state: AppState) -> None:
    product = state.products[0]

    assert order_message(product) == "Olá H Água! Gostaria de pedir: Água 20L (R$ 5.00)"

    link = order_link(product)
    assert link.startswith(f"https://wa.me/{ORDER_PHONE}?text=")
    assert unquote(link.split("text=", 1)[1]) == order_message(product)
    assert " " not in link


def test_out_of_stock_has_no_order_message(state: AppState) -> None:
    sold_out = replace(state.products[0], stock=0)

    assert order_message(sold_out) is None
    assert order_link(sold_out) is None
