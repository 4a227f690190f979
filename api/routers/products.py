"""
Products API Endpoints.

Catalog maintenance, direct stock adjustments and the low-stock report.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_controller
from api.models import OrderMessageResponse, ProductCreate, ProductResponse, ProductUpdate, StockAdjustment
from domain.product import Product
from services.reporting_service import low_stock_products, order_link, order_message
from services.store_service import StoreController

router = APIRouter()


@router.get(
    "/products",
    response_model=List[ProductResponse],
    summary="List Products",
    description="The catalog in insertion order."
)
def list_products(controller: StoreController = Depends(get_controller)):
    return [ProductResponse.from_domain(p) for p in controller.state.products]


@router.get(
    "/products/low-stock",
    response_model=List[ProductResponse],
    summary="Low Stock Report",
    description="Products whose stock is at or below their reorder threshold."
)
def list_low_stock(controller: StoreController = Depends(get_controller)):
    return [ProductResponse.from_domain(p) for p in low_stock_products(controller.state)]


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=201,
    summary="Add Product"
)
def create_product(request: ProductCreate, controller: StoreController = Depends(get_controller)):
    product = controller.add_product(
        name=request.name,
        category=request.category,
        price=request.price,
        stock=request.stock,
        min_stock=request.min_stock,
        icon=request.icon,
    )
    return ProductResponse.from_domain(product)


@router.put(
    "/products/{product_id}",
    response_model=List[ProductResponse],
    summary="Edit Product",
    description="Replace a product record. Editing an unknown id is a no-op."
)
def update_product(product_id: str, request: ProductUpdate, controller: StoreController = Depends(get_controller)):
    product = Product(
        product_id=product_id,
        name=request.name,
        category=request.category,
        price=request.price,
        stock=request.stock,
        min_stock=request.min_stock,
        icon=request.icon,
    )
    state = controller.update_product(product)
    return [ProductResponse.from_domain(p) for p in state.products]


@router.delete(
    "/products/{product_id}",
    status_code=204,
    summary="Remove Product"
)
def delete_product(product_id: str, controller: StoreController = Depends(get_controller)):
    controller.remove_product(product_id)


@router.post(
    "/products/{product_id}/stock",
    response_model=ProductResponse,
    summary="Adjust Stock",
    description="Add `delta` to the stock. The result never goes below zero."
)
def adjust_stock(product_id: str, request: StockAdjustment, controller: StoreController = Depends(get_controller)):
    state = controller.adjust_stock(product_id, request.delta)
    product = state.find_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")
    return ProductResponse.from_domain(product)


@router.get(
    "/products/{product_id}/order-message",
    response_model=OrderMessageResponse,
    summary="Catalog Order Message",
    description="Order text and share link for the messaging app. Empty for out-of-stock products."
)
def get_order_message(product_id: str, controller: StoreController = Depends(get_controller)):
    product = controller.state.find_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product not found: {product_id}")

    message = order_message(product)
    return OrderMessageResponse(
        product_id=product_id,
        available=message is not None,
        message=message,
        link=order_link(product),
    )
