"""
FastAPI dependencies.

The store controller, advisory service and sync indicator are created once
by the application (api/main.py) and kept on `app.state`. Routers receive
them through these functions, so tests can build an app around their own
instances.
"""

from fastapi import Request

from services.advisory_service import AdvisoryService
from services.store_service import StoreController
from services.sync_indicator import SyncIndicator


def get_controller(request: Request) -> StoreController:
    return request.app.state.controller


def get_advisor(request: Request) -> AdvisoryService:
    return request.app.state.advisor


def get_sync_indicator(request: Request) -> SyncIndicator:
    return request.app.state.sync_indicator
