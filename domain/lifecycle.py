"""
Domain: delivery lifecycle controller.

Applies a status change to one delivery inside a snapshot. Going IN_ROUTE
also registers the deliverer name so an ad-hoc name becomes reusable. Both
effects land in the same returned snapshot.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from .deliverers import add_deliverer
from .delivery import DeliveryStatus
from .state import AppState


def set_delivery_status(
    state: AppState,
    delivery_id: str,
    status: DeliveryStatus,
    deliverer_name: Optional[str] = None,
    *,
    now: datetime,
) -> AppState:
    """
    Move delivery `delivery_id` to `status`.

    Unknown delivery id: no-op, the same snapshot is returned.
    Disallowed transition: InvalidDeliveryTransition is raised and the input
    snapshot stays as it was.
    """

    current = state.find_delivery(delivery_id)
    if current is None:
        return state

    updated = current.advance(DeliveryStatus(status), now=now, deliverer_name=deliverer_name)
    next_state = replace(
        state,
        deliveries=tuple(updated if d.delivery_id == delivery_id else d for d in state.deliveries),
    )
    if updated.status is DeliveryStatus.IN_ROUTE and updated.deliverer_name:
        next_state = add_deliverer(next_state, updated.deliverer_name)
    return next_state
