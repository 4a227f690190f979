"""
Backup API Endpoints.

Download the full store as JSON and restore it from a previous download.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_controller
from api.models import ErrorResponse, RestoreResponse
from services.persistence_service import RestoreError
from services.store_service import StoreController

router = APIRouter()


@router.get(
    "/backup/export",
    summary="Download Backup",
    description="Full store snapshot as a JSON file named after the current day.",
    response_class=Response
)
def export_backup(controller: StoreController = Depends(get_controller)):
    backup = controller.export_backup()
    return Response(
        content=backup.content,
        media_type=backup.media_type,
        headers={
            "Content-Disposition": f"attachment; filename={backup.filename}"
        }
    )


@router.post(
    "/backup/restore",
    response_model=RestoreResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Restore Backup"
)
async def restore_backup(request: Request, controller: StoreController = Depends(get_controller)):
    """
    Replace the whole store with the JSON document in the request body.

    The document must at least hold `clients` and `products` lists. An
    invalid backup returns 400 and the current store is kept as it was.
    The restore itself runs in the threadpool, like the synchronous endpoints.
    """
    body = await request.body()
    try:
        state = await run_in_threadpool(controller.restore, body)
    except RestoreError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return RestoreResponse(
        message="Dados restaurados com sucesso!",
        clients=len(state.clients),
        products=len(state.products),
        sales=len(state.sales),
        deliveries=len(state.deliveries),
    )
