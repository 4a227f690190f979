"""
Domain: Delivery jobs and their lifecycle.

State machine:

    PENDING ──> IN_ROUTE ──> DELIVERED
       │         │  ▲
       │         │  └── reassignment (IN_ROUTE -> IN_ROUTE)
       └─────────┴────> CANCELLED

DELIVERED and CANCELLED are terminal. Nothing moves back to PENDING.

Contract rules implemented here:
- Entering IN_ROUTE requires a non-empty deliverer name.
- Only an IN_ROUTE delivery can become DELIVERED.
- Entering DELIVERED stamps completed_at. DELIVERED and CANCELLED keep the
  assigned deliverer; a name passed with them is ignored.
- deliverer_name and completed_at are only ever set by a transition.

A Delivery is created together with its Sale (domain/checkout.py); it has no
independent creation path.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional

from .time import require_utc_timestamp


class DeliveryStatus(str, Enum):
    PENDING = "PENDING"
    IN_ROUTE = "IN_ROUTE"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED)


ALLOWED_TRANSITIONS: Dict[DeliveryStatus, FrozenSet[DeliveryStatus]] = {
    DeliveryStatus.PENDING: frozenset({DeliveryStatus.IN_ROUTE, DeliveryStatus.CANCELLED}),
    DeliveryStatus.IN_ROUTE: frozenset(
        {DeliveryStatus.IN_ROUTE, DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED}
    ),
    DeliveryStatus.DELIVERED: frozenset(),
    DeliveryStatus.CANCELLED: frozenset(),
}

ADDRESS_FALLBACK = "Endereço não informado"


class InvalidDeliveryTransition(ValueError):
    """Raised when a requested status change is not allowed for a delivery."""


@dataclass(frozen=True, slots=True)
class Delivery:
    """
    Delivery job spawned by exactly one Sale.

    client_name and deliverer_name are copies taken when the delivery was
    created or assigned. They are not refreshed when the client is renamed or
    the deliverer is removed from the registry.
    """

    delivery_id: str
    sale_id: str
    client_id: str
    client_name: str
    address: str
    status: DeliveryStatus
    scheduled_for: datetime
    deliverer_name: Optional[str] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("scheduled_for", self.scheduled_for)
        if self.completed_at is not None:
            require_utc_timestamp("completed_at", self.completed_at)
            if self.status is not DeliveryStatus.DELIVERED:
                raise ValueError("completed_at is only set on DELIVERED deliveries")

    def advance(
        self,
        status: DeliveryStatus,
        *,
        now: datetime,
        deliverer_name: Optional[str] = None,
    ) -> "Delivery":
        """
        Return a new Delivery moved to `status`.

        `deliverer_name` is only read when moving to IN_ROUTE. Raises
        InvalidDeliveryTransition if the edge is not allowed or if IN_ROUTE is
        requested without a deliverer name.
        """

        if status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidDeliveryTransition(
                f"Delivery {self.delivery_id} cannot move from {self.status.value} to {status.value}"
            )

        if status is DeliveryStatus.IN_ROUTE:
            if not deliverer_name or not deliverer_name.strip():
                raise InvalidDeliveryTransition(
                    f"Delivery {self.delivery_id} needs a deliverer to go IN_ROUTE"
                )
            return replace(self, status=status, deliverer_name=deliverer_name)

        if status is DeliveryStatus.DELIVERED:
            require_utc_timestamp("now", now)
            return replace(self, status=status, completed_at=now)

        return replace(self, status=status)
