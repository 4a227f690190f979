"""
Deliveries API Endpoints.

Listing and status transitions. Deliveries are only created by committing a
sale; DELIVERED and CANCELLED are final.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_controller
from api.models import DeliveryResponse, DeliveryStatusUpdate, ErrorResponse
from domain.delivery import DeliveryStatus, InvalidDeliveryTransition
from services.reporting_service import deliveries_with_status
from services.store_service import StoreController

router = APIRouter()


@router.get(
    "/deliveries",
    response_model=List[DeliveryResponse],
    summary="List Deliveries",
    description="Deliveries, most recent first, optionally filtered by status."
)
def list_deliveries(
    status: Optional[DeliveryStatus] = None,
    controller: StoreController = Depends(get_controller),
):
    return [DeliveryResponse.from_domain(d) for d in deliveries_with_status(controller.state, status)]


@router.post(
    "/deliveries/{delivery_id}/status",
    response_model=DeliveryResponse,
    responses={409: {"model": ErrorResponse}},
    summary="Change Delivery Status"
)
def set_delivery_status(
    delivery_id: str,
    request: DeliveryStatusUpdate,
    controller: StoreController = Depends(get_controller),
):
    """
    Move a delivery along its lifecycle.

    **Rules:**
    - IN_ROUTE needs `deliverer_name`; the name is added to the deliverer list
    - DELIVERED only from IN_ROUTE; it stamps `completed_at` and keeps the deliverer
    - Nothing leaves DELIVERED or CANCELLED, nothing goes back to PENDING

    Rejected transitions return 409 and leave the delivery unchanged.
    """
    try:
        delivery = controller.set_delivery_status(delivery_id, request.status, request.deliverer_name)
    except InvalidDeliveryTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    if delivery is None:
        raise HTTPException(status_code=404, detail=f"Delivery not found: {delivery_id}")
    return DeliveryResponse.from_domain(delivery)
