"""
Deliverers API Endpoints.

Registry of deliverer names (exact, case-sensitive match).
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_controller
from api.models import DelivererCreate, DeliverersResponse
from services.store_service import StoreController

router = APIRouter()


@router.get("/deliverers", response_model=DeliverersResponse, summary="List Deliverers")
def list_deliverers(controller: StoreController = Depends(get_controller)):
    return DeliverersResponse(deliverers=list(controller.state.deliverers))


@router.post(
    "/deliverers",
    response_model=DeliverersResponse,
    summary="Add Deliverer",
    description="Register a name. Empty or already registered names are ignored."
)
def add_deliverer(request: DelivererCreate, controller: StoreController = Depends(get_controller)):
    state = controller.add_deliverer(request.name)
    return DeliverersResponse(deliverers=list(state.deliverers))


@router.delete(
    "/deliverers/{name}",
    response_model=DeliverersResponse,
    summary="Remove Deliverer",
    description="Unregister a name. Deliveries already assigned keep it."
)
def remove_deliverer(name: str, controller: StoreController = Depends(get_controller)):
    state = controller.remove_deliverer(name)
    return DeliverersResponse(deliverers=list(state.deliverers))
