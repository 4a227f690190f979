"""
Clients API Endpoints.

Create, edit and remove customers. Unknown ids on edit/remove are ignored.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_controller
from api.models import ClientCreate, ClientResponse, ClientUpdate
from domain.client import Client
from services.store_service import StoreController

router = APIRouter()


@router.get(
    "/clients",
    response_model=List[ClientResponse],
    summary="List Clients",
    description="All clients, most recently added first."
)
def list_clients(controller: StoreController = Depends(get_controller)):
    return [ClientResponse.from_domain(c) for c in controller.state.clients]


@router.post(
    "/clients",
    response_model=ClientResponse,
    status_code=201,
    summary="Add Client"
)
def create_client(request: ClientCreate, controller: StoreController = Depends(get_controller)):
    """
    Add a client. A missing name becomes "Novo Cliente"; other missing
    fields default to empty strings, type RESIDENTIAL and 0 purchases.
    """
    client = controller.add_client(
        name=request.name,
        phone=request.phone,
        address=request.address,
        type=request.type,
    )
    return ClientResponse.from_domain(client)


@router.get(
    "/clients/{client_id}",
    response_model=ClientResponse,
    summary="Get Client"
)
def get_client(client_id: str, controller: StoreController = Depends(get_controller)):
    client = controller.state.find_client(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail=f"Client not found: {client_id}")
    return ClientResponse.from_domain(client)


@router.put(
    "/clients/{client_id}",
    response_model=List[ClientResponse],
    summary="Edit Client",
    description="Replace a client record. Editing an unknown id is a no-op."
)
def update_client(client_id: str, request: ClientUpdate, controller: StoreController = Depends(get_controller)):
    try:
        client = Client(
            client_id=client_id,
            name=request.name,
            phone=request.phone,
            address=request.address,
            type=request.type,
            purchase_count=request.purchase_count,
            last_purchase=request.last_purchase,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = controller.update_client(client)
    return [ClientResponse.from_domain(c) for c in state.clients]


@router.delete(
    "/clients/{client_id}",
    status_code=204,
    summary="Remove Client",
    description="Remove a client. Sales and deliveries keep the client's name."
)
def delete_client(client_id: str, controller: StoreController = Depends(get_controller)):
    controller.remove_client(client_id)
