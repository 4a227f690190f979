"""
Dashboard API Endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_controller, get_sync_indicator
from api.models import DashboardResponse, SyncStatusResponse
from services.reporting_service import dashboard_summary
from services.store_service import StoreController
from services.sync_indicator import SyncIndicator

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse, summary="Dashboard Summary")
def get_dashboard(controller: StoreController = Depends(get_controller)):
    summary = dashboard_summary(controller.state)
    return DashboardResponse(
        client_count=summary.client_count,
        sales_count=summary.sales_count,
        total_revenue=summary.total_revenue,
        open_deliveries=summary.open_deliveries,
        low_stock_count=summary.low_stock_count,
    )


@router.get("/sync", response_model=SyncStatusResponse, summary="Sync Indicator")
def get_sync_status(indicator: SyncIndicator = Depends(get_sync_indicator)):
    return SyncStatusResponse(is_syncing=indicator.is_syncing)
