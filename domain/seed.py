"""
Domain: starter data used when no snapshot has ever been saved.
"""

from __future__ import annotations

from decimal import Decimal

from .client import Client, ClientType
from .product import Product, ProductCategory
from .state import AppState, CurrentUser, UserRole

STARTER_PRODUCTS = (
    # mineral water
    Product("p1", "Naturagua (mineral)", ProductCategory.WATER, Decimal("14.99"), 50, 10, "💧"),
    Product("p2", "Límpida (mineral)", ProductCategory.WATER, Decimal("13.99"), 40, 10, "💧"),
    Product("p3", "Neblina (mineral)", ProductCategory.WATER, Decimal("13.99"), 35, 8, "💧"),
    Product("p4", "Serra Grande (mineral)", ProductCategory.WATER, Decimal("13.99"), 30, 8, "💧"),
    # water with added salts
    Product("p5", "Realfina (adicionada)", ProductCategory.WATER, Decimal("5.99"), 100, 20, "🧂"),
    Product("p6", "Plurágua (adicionada)", ProductCategory.WATER, Decimal("5.99"), 80, 15, "🧂"),
    Product("p7", "Ouro Azul (adicionada)", ProductCategory.WATER, Decimal("7.99"), 60, 12, "🧂"),
    # fees and gas
    Product("p8", "Caderneta (Taxa)", ProductCategory.OTHER, Decimal("0.50"), 999, 0, "📔"),
    Product("p9", "Gás P13", ProductCategory.GAS, Decimal("115.00"), 15, 5, "🔥"),
)

STARTER_CLIENTS = (
    Client("c1", "Maria Silva", "85992592012", "Rua 108, 400 - Conj. Esperança", ClientType.RESIDENTIAL, 15),
    Client("c2", "Padaria Sol", "85988776655", "Rua das Flores, 10", ClientType.COMMERCIAL, 42),
    Client("c3", "João Pereira", "85977665544", "Av. Contorno, 500", ClientType.RESIDENTIAL, 2),
)

DEFAULT_USER = CurrentUser(name="Admin H Água", role=UserRole.ADMIN)


def starter_state() -> AppState:
    return AppState(
        clients=STARTER_CLIENTS,
        products=STARTER_PRODUCTS,
        sales=(),
        deliveries=(),
        deliverers=(),
        current_user=DEFAULT_USER,
    )
