"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.client import Client, ClientType
from domain.delivery import Delivery, DeliveryStatus
from domain.product import Product, ProductCategory
from domain.sale import PaymentMethod, Sale

# Money is stored as a JSON number; amounts within these bounds survive that
# conversion exactly.
MONEY_DIGITS = 12
MONEY_PLACES = 2


# ============================================================================
# Client Models
# ============================================================================

class ClientCreate(BaseModel):
    """New client. Every field is optional; unset fields get defaults."""
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    type: Optional[ClientType] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Maria Silva",
                "phone": "85992592012",
                "address": "Rua 108, 400 - Conj. Esperança",
                "type": "RESIDENTIAL"
            }
        }


class ClientUpdate(BaseModel):
    """Full replacement of a client record."""
    name: str
    phone: str = ""
    address: str = ""
    type: ClientType = ClientType.RESIDENTIAL
    purchase_count: int = Field(0, ge=0)
    last_purchase: Optional[datetime] = None


class ClientResponse(BaseModel):
    id: str
    name: str
    phone: str
    address: str
    type: ClientType
    purchase_count: int
    last_purchase: Optional[datetime] = None

    @classmethod
    def from_domain(cls, client: Client) -> "ClientResponse":
        return cls(
            id=client.client_id,
            name=client.name,
            phone=client.phone,
            address=client.address,
            type=client.type,
            purchase_count=client.purchase_count,
            last_purchase=client.last_purchase,
        )


# ============================================================================
# Product Models
# ============================================================================

class ProductCreate(BaseModel):
    """New catalog product. min_stock defaults to 5."""
    name: Optional[str] = None
    category: Optional[ProductCategory] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    stock: Optional[int] = None
    min_stock: Optional[int] = Field(None, ge=0)
    icon: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Água 20L",
                "category": "WATER",
                "price": "14.99",
                "stock": 10,
                "min_stock": 2
            }
        }


class ProductUpdate(BaseModel):
    """Full replacement of a product record."""
    name: str
    category: ProductCategory = ProductCategory.WATER
    price: Decimal = Field(Decimal("0"), ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    stock: int = 0
    min_stock: int = Field(5, ge=0)
    icon: str = "📦"


class ProductResponse(BaseModel):
    id: str
    name: str
    category: ProductCategory
    price: Decimal
    stock: int
    min_stock: int
    icon: str
    low_stock: bool

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.product_id,
            name=product.name,
            category=product.category,
            price=product.price,
            stock=product.stock,
            min_stock=product.min_stock,
            icon=product.icon,
            low_stock=product.is_low_stock,
        )


class StockAdjustment(BaseModel):
    """Relative stock change; the result is clamped at zero."""
    delta: int


# ============================================================================
# Sale Models
# ============================================================================

class SaleItemModel(BaseModel):
    product_id: str
    name: str = ""
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)


class SaleItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    price: Decimal


class SaleCreate(BaseModel):
    """Cart submitted by the point of sale."""
    client_id: str
    items: List[SaleItemModel] = Field(
        ...,
        min_length=1,
        description="Cart lines; names and prices are stored as given"
    )
    total: Decimal = Field(..., ge=0, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    payment_method: PaymentMethod
    address: Optional[str] = Field(
        None,
        description="Delivery address; defaults to the client's stored address"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "c1",
                "items": [
                    {"product_id": "p1", "name": "Naturagua (mineral)", "quantity": 2, "price": "14.99"}
                ],
                "total": "29.98",
                "payment_method": "PIX",
                "address": "Rua 108, 400 - Conj. Esperança"
            }
        }


class SaleResponse(BaseModel):
    id: str
    client_id: str
    client_name: str
    items: List[SaleItemResponse]
    total: Decimal
    payment_method: PaymentMethod
    date: datetime
    delivery_id: Optional[str] = None

    @classmethod
    def from_domain(cls, sale: Sale) -> "SaleResponse":
        return cls(
            id=sale.sale_id,
            client_id=sale.client_id,
            client_name=sale.client_name,
            items=[
                SaleItemResponse(product_id=i.product_id, name=i.name, quantity=i.quantity, price=i.price)
                for i in sale.items
            ],
            total=sale.total,
            payment_method=sale.payment_method,
            date=sale.date,
            delivery_id=sale.delivery_id,
        )


# ============================================================================
# Delivery Models
# ============================================================================

class DeliveryStatusUpdate(BaseModel):
    status: DeliveryStatus
    deliverer_name: Optional[str] = Field(
        None,
        description="Required when moving to IN_ROUTE"
    )

    class Config:
        json_schema_extra = {
            "example": {"status": "IN_ROUTE", "deliverer_name": "Carlos"}
        }


class DeliveryResponse(BaseModel):
    id: str
    sale_id: str
    client_id: str
    client_name: str
    address: str
    status: DeliveryStatus
    deliverer_name: Optional[str] = None
    scheduled_for: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, delivery: Delivery) -> "DeliveryResponse":
        return cls(
            id=delivery.delivery_id,
            sale_id=delivery.sale_id,
            client_id=delivery.client_id,
            client_name=delivery.client_name,
            address=delivery.address,
            status=delivery.status,
            deliverer_name=delivery.deliverer_name,
            scheduled_for=delivery.scheduled_for,
            completed_at=delivery.completed_at,
        )


class DelivererCreate(BaseModel):
    name: str


class DeliverersResponse(BaseModel):
    deliverers: List[str]


# ============================================================================
# Dashboard / Catalog Models
# ============================================================================

class DashboardResponse(BaseModel):
    client_count: int
    sales_count: int
    total_revenue: Decimal
    open_deliveries: int
    low_stock_count: int


class SyncStatusResponse(BaseModel):
    is_syncing: bool


class OrderMessageResponse(BaseModel):
    product_id: str
    available: bool
    message: Optional[str] = None
    link: Optional[str] = None


# ============================================================================
# Backup / Session Models
# ============================================================================

class RestoreResponse(BaseModel):
    message: str
    clients: int
    products: int
    sales: int
    deliveries: int


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    authenticated: bool


# ============================================================================
# Assistant Models
# ============================================================================

class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)


class AskResponse(BaseModel):
    answer: str


class DemandResponse(BaseModel):
    summary: str
    suggestions: List[str]


class PromotionResponse(BaseModel):
    title: str
    description: str


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: Optional[str] = None
    status_code: int

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Invalid request",
                "detail": "Delivery d-1 cannot move from DELIVERED to IN_ROUTE",
                "status_code": 409
            }
        }
