"""
Store controller: the single owner of the live snapshot.

Handles:
- Holding the current AppState and handing it out read-only
- Serializing mutations (one writer at a time, applied in call order)
- Saving every changed snapshot before it becomes visible
- Delegating backup export/restore and the session flag to the gateway

Each mutation runs a pure domain transition on the current snapshot, saves the
result, then swaps the reference. If the transition raises (rejected delivery
transition, invalid backup) or the save fails, the live snapshot is unchanged.
No-op transitions skip the save.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Tuple, TypeVar, Union

from domain import deliverers, lifecycle, state as store
from domain.checkout import SaleRequest, commit_sale
from domain.client import Client, ClientType
from domain.delivery import Delivery, DeliveryStatus, InvalidDeliveryTransition
from domain.product import Product, ProductCategory
from domain.sale import Sale
from domain.state import AppState
from domain.time import utc_now
from services.persistence_service import BackupFile, PersistenceGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreController:
    """
    Injectable state container.

    Readers use `state`; only holders of the controller may request
    mutations. `clock` supplies UTC timestamps for sales and deliveries.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        initial_state: AppState,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._gateway = gateway
        self._state = initial_state
        self._clock = clock
        self._lock = threading.RLock()

    @classmethod
    def bootstrap(cls, gateway: PersistenceGateway, *, clock: Callable[[], datetime] = utc_now) -> "StoreController":
        """Create a controller from whatever the gateway has saved (or the starter data)."""

        return cls(gateway, gateway.load(), clock=clock)

    @property
    def state(self) -> AppState:
        return self._state

    def _commit(self, transition: Callable[[AppState], Tuple[AppState, T]]) -> T:
        with self._lock:
            current = self._state
            next_state, result = transition(current)
            if next_state is not current:
                self._gateway.save(next_state)
                self._state = next_state
            return result

    def _apply(self, transition: Callable[[AppState], AppState]) -> AppState:
        def step(current: AppState) -> Tuple[AppState, AppState]:
            next_state = transition(current)
            return next_state, next_state

        return self._commit(step)

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def add_client(
        self,
        *,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        type: Optional[ClientType] = None,
    ) -> Client:
        client = self._commit(
            lambda s: store.add_client(s, name=name, phone=phone, address=address, type=type)
        )
        logger.info("Added client %s (%s)", client.client_id, client.name)
        return client

    def update_client(self, client: Client) -> AppState:
        return self._apply(lambda s: store.update_client(s, client))

    def remove_client(self, client_id: str) -> AppState:
        return self._apply(lambda s: store.remove_client(s, client_id))

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def add_product(
        self,
        *,
        name: Optional[str] = None,
        category: Optional[ProductCategory] = None,
        price: Optional[Decimal] = None,
        stock: Optional[int] = None,
        min_stock: Optional[int] = None,
        icon: Optional[str] = None,
    ) -> Product:
        product = self._commit(
            lambda s: store.add_product(
                s,
                name=name,
                category=category,
                price=price,
                stock=stock,
                min_stock=min_stock,
                icon=icon,
            )
        )
        logger.info("Added product %s (%s)", product.product_id, product.name)
        return product

    def update_product(self, product: Product) -> AppState:
        return self._apply(lambda s: store.update_product(s, product))

    def remove_product(self, product_id: str) -> AppState:
        return self._apply(lambda s: store.remove_product(s, product_id))

    def adjust_stock(self, product_id: str, delta: int) -> AppState:
        return self._apply(lambda s: store.adjust_stock(s, product_id, delta))

    # ------------------------------------------------------------------
    # Sales and deliveries
    # ------------------------------------------------------------------

    def commit_sale(self, request: SaleRequest) -> Optional[Sale]:
        """Commit a sale with its delivery. Returns None for an empty cart."""

        sale = self._commit(lambda s: commit_sale(s, request, now=self._clock()))
        if sale is None:
            logger.warning("Ignored sale for client %s: cart is empty", request.client_id)
        else:
            logger.info(
                "Committed sale %s for %s: %d item(s), total %s, delivery %s",
                sale.sale_id,
                sale.client_name,
                len(sale.items),
                sale.total,
                sale.delivery_id,
            )
        return sale

    def set_delivery_status(
        self,
        delivery_id: str,
        status: DeliveryStatus,
        deliverer_name: Optional[str] = None,
    ) -> Optional[Delivery]:
        """
        Move a delivery to `status` and return it (None if the id is unknown).

        Raises InvalidDeliveryTransition when the change is rejected.
        """

        try:
            next_state = self._apply(
                lambda s: lifecycle.set_delivery_status(
                    s, delivery_id, status, deliverer_name, now=self._clock()
                )
            )
        except InvalidDeliveryTransition as e:
            logger.warning("Rejected delivery transition: %s", e)
            raise

        delivery = next_state.find_delivery(delivery_id)
        if delivery is not None:
            logger.info("Delivery %s is now %s", delivery_id, delivery.status.value)
        return delivery

    def add_deliverer(self, name: str) -> AppState:
        return self._apply(lambda s: deliverers.add_deliverer(s, name))

    def remove_deliverer(self, name: str) -> AppState:
        return self._apply(lambda s: deliverers.remove_deliverer(s, name))

    # ------------------------------------------------------------------
    # Backup and session
    # ------------------------------------------------------------------

    def export_backup(self) -> BackupFile:
        return self._gateway.export(self._state, today=self._clock().date())

    def restore(self, payload: Union[str, bytes, Mapping[str, Any]]) -> AppState:
        """
        Replace the whole store with a backup.

        Raises RestoreError (store unchanged) when the backup is invalid.
        """

        restored = self._gateway.parse_backup(payload)
        next_state = self._apply(lambda s: restored)
        logger.info(
            "Restored backup: %d clients, %d products, %d sales",
            len(restored.clients),
            len(restored.products),
            len(restored.sales),
        )
        return next_state

    @property
    def is_authenticated(self) -> bool:
        return self._gateway.is_authenticated()

    def login(self) -> None:
        self._gateway.set_authenticated(True)

    def logout(self) -> None:
        self._gateway.set_authenticated(False)
