"""
Domain: Product catalog entries with stock levels.

Stock is mutated by explicit edits, by direct stock adjustments (clamped at
zero) and by sale commits (not clamped, see domain/checkout.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class ProductCategory(str, Enum):
    WATER = "WATER"
    GAS = "GAS"
    PACK = "PACK"
    OTHER = "OTHER"


@dataclass(frozen=True, slots=True)
class Product:
    product_id: str
    name: str
    category: ProductCategory = ProductCategory.WATER
    price: Decimal = Decimal("0")
    stock: int = 0
    min_stock: int = 5
    icon: str = "📦"

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if self.min_stock < 0:
            raise ValueError("min_stock must be >= 0")

    @property
    def is_low_stock(self) -> bool:
        """True when the product reached its reorder threshold."""

        return self.stock <= self.min_stock
