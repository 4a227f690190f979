"""
Sales API Endpoints.

Committing a sale also creates its delivery, decrements stock for every line
and bumps the client's purchase count, all in one store transition.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_controller
from api.models import SaleCreate, SaleResponse
from domain.checkout import SaleRequest
from domain.sale import SaleItem
from services.store_service import StoreController

router = APIRouter()


@router.get(
    "/sales",
    response_model=List[SaleResponse],
    summary="List Sales",
    description="All committed sales, most recent first."
)
def list_sales(controller: StoreController = Depends(get_controller)):
    return [SaleResponse.from_domain(s) for s in controller.state.sales]


@router.post(
    "/sales",
    response_model=SaleResponse,
    status_code=201,
    summary="Commit Sale"
)
def commit_sale(request: SaleCreate, controller: StoreController = Depends(get_controller)):
    """
    Commit a sale.

    **Effects (applied together):**
    1. New sale with the client's current name copied in
    2. New PENDING delivery to `address`, else the client's address
    3. Stock decremented by each line's quantity (may go negative)
    4. Client purchase count + 1

    `total` is stored as sent; it is not recomputed from the items.
    """
    sale_request = SaleRequest(
        client_id=request.client_id,
        items=tuple(
            SaleItem(product_id=i.product_id, name=i.name, quantity=i.quantity, price=i.price)
            for i in request.items
        ),
        total=request.total,
        payment_method=request.payment_method,
        address=request.address,
    )

    sale = controller.commit_sale(sale_request)
    if sale is None:
        raise HTTPException(status_code=400, detail="Sale must contain items")
    return SaleResponse.from_domain(sale)


@router.get(
    "/sales/{sale_id}",
    response_model=SaleResponse,
    summary="Get Sale"
)
def get_sale(sale_id: str, controller: StoreController = Depends(get_controller)):
    sale = controller.state.find_sale(sale_id)
    if sale is None:
        raise HTTPException(status_code=404, detail=f"Sale not found: {sale_id}")
    return SaleResponse.from_domain(sale)
