"""
Assistant API Endpoints.

Best-effort advice over a read-only snapshot. These endpoints always answer
200; when the assistant is unavailable the reply is a fixed fallback.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_advisor, get_controller
from api.models import AskRequest, AskResponse, DemandResponse, PromotionResponse
from services.advisory_service import AdvisoryService
from services.store_service import StoreController

router = APIRouter()


@router.post("/assistant/ask", response_model=AskResponse, summary="Ask the Assistant")
def ask(
    request: AskRequest,
    controller: StoreController = Depends(get_controller),
    advisor: AdvisoryService = Depends(get_advisor),
):
    return AskResponse(answer=advisor.ask(request.question, controller.state))


@router.get("/assistant/demand", response_model=DemandResponse, summary="Demand Prediction")
def predict_demand(
    controller: StoreController = Depends(get_controller),
    advisor: AdvisoryService = Depends(get_advisor),
):
    prediction = advisor.predict_demand(controller.state)
    return DemandResponse(summary=prediction.summary, suggestions=prediction.suggestions)


@router.get("/assistant/promotions", response_model=List[PromotionResponse], summary="Promotion Ideas")
def suggest_promotions(
    controller: StoreController = Depends(get_controller),
    advisor: AdvisoryService = Depends(get_advisor),
):
    return [
        PromotionResponse(title=p.title, description=p.description)
        for p in advisor.suggest_promotions(controller.state)
    ]
