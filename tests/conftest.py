"""
Pytest configuration and shared fixtures.

This file adds the project root to the Python path so that tests can import
from the domain, repositories, services and api packages.
"""

import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

# Add the project root to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.client import Client, ClientType  # noqa: E402
from domain.product import Product, ProductCategory  # noqa: E402
from domain.state import AppState  # noqa: E402
from repositories.slot_storage import FileSlotStorage  # noqa: E402
from services.persistence_service import PersistenceGateway  # noqa: E402
from services.store_service import StoreController  # noqa: E402

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_state() -> AppState:
    """One client c1 at "Rua X" and one product p1 (stock 10, price 5.00)."""

    return AppState(
        clients=(Client("c1", "Maria", "85900000000", "Rua X", ClientType.RESIDENTIAL, 0),),
        products=(Product("p1", "Água 20L", ProductCategory.WATER, Decimal("5.00"), 10, 2, "💧"),),
    )


@pytest.fixture
def state() -> AppState:
    return make_state()


@pytest.fixture
def storage(tmp_path: Path) -> FileSlotStorage:
    return FileSlotStorage(tmp_path / "slots")


@pytest.fixture
def gateway(storage: FileSlotStorage) -> PersistenceGateway:
    return PersistenceGateway(storage)


@pytest.fixture
def controller(gateway: PersistenceGateway, state: AppState) -> StoreController:
    return StoreController(gateway, state, clock=lambda: FIXED_NOW)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW
