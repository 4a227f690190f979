"""
Session API Endpoints.

Only flips the stored "authenticated" flag; credential checking belongs to
an external collaborator. Logging out never touches business data.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_controller
from api.models import LoginRequest, SessionResponse
from services.store_service import StoreController

router = APIRouter()


@router.get("/session", response_model=SessionResponse, summary="Session Status")
def get_session(controller: StoreController = Depends(get_controller)):
    return SessionResponse(authenticated=controller.is_authenticated)


@router.post("/session/login", response_model=SessionResponse, summary="Log In")
def login(request: LoginRequest, controller: StoreController = Depends(get_controller)):
    controller.login()
    return SessionResponse(authenticated=True)


@router.post("/session/logout", response_model=SessionResponse, summary="Log Out")
def logout(controller: StoreController = Depends(get_controller)):
    controller.logout()
    return SessionResponse(authenticated=False)
