"""
Tests for `services/advisory_service.py`.

Covers contract rules:
- The assistant never raises: missing key, connection errors, HTTP errors
  and unparseable replies all produce the fixed fallbacks.
- Structured replies are parsed into DemandPrediction / Promotion values.
- The snapshot passed in is never modified.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from domain.state import AppState
from services.advisory_service import (
    ASK_EMPTY_REPLY,
    ASK_FALLBACK,
    DEMAND_FALLBACK_SUGGESTIONS,
    DEMAND_FALLBACK_SUMMARY,
    AdvisoryService,
    DemandPrediction,
    Promotion,
)


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text or json.dumps(body)

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeSession:
    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def _reply(text: str) -> FakeResponse:
    return FakeResponse(body={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def test_ask_returns_model_text(state: AppState) -> None:
    session = FakeSession(_reply("Você tem 10 unidades de Água 20L."))
    advisor = AdvisoryService("key", model="test-model", session=session)

    answer = advisor.ask("Quanto tenho de água?", state)

    assert answer == "Você tem 10 unidades de Água 20L."
    call = session.calls[0]
    assert "test-model:generateContent" in call["url"]
    assert call["headers"]["x-goog-api-key"] == "key"
    assert call["json"]["contents"][0]["parts"][0]["text"] == "Quanto tenho de água?"
    assert "Água 20L: 10" in call["json"]["systemInstruction"]["parts"][0]["text"]


def test_ask_without_api_key_falls_back(state: AppState) -> None:
    session = FakeSession(_reply("unused"))

    assert AdvisoryService(None, session=session).ask("Oi", state) == ASK_FALLBACK
    assert session.calls == []


def test_ask_with_empty_reply(state: AppState) -> None:
    advisor = AdvisoryService("key", session=FakeSession(_reply("")))

    assert advisor.ask("Oi", state) == ASK_EMPTY_REPLY


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("offline")),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse(status_code=500, text="internal")),
        FakeSession(FakeResponse(status_code=200, body=None, text="<html>")),
        FakeSession(FakeResponse(body={"candidates": []})),
        FakeSession(FakeResponse(body={"candidates": [{"content": {"parts": None}}]})),
        FakeSession(FakeResponse(body={"candidates": [{"content": {"parts": ["plain text"]}}]})),
        FakeSession(FakeResponse(body={"candidates": [{"content": None}]})),
        FakeSession(FakeResponse(body=["unexpected"])),
    ],
)
def test_ask_failures_fall_back(state: AppState, session: FakeSession) -> None:
    assert AdvisoryService("key", session=session).ask("Oi", state) == ASK_FALLBACK


def test_predict_demand_parses_structured_reply(state: AppState) -> None:
    body = json.dumps({"predictionSummary": "Alta demanda no fim de semana", "stockSuggestions": ["Repor Água 20L"]})
    session = FakeSession(_reply(body))

    prediction = AdvisoryService("key", session=session).predict_demand(state)

    assert prediction == DemandPrediction("Alta demanda no fim de semana", ["Repor Água 20L"])
    assert session.calls[0]["json"]["generationConfig"]["responseMimeType"] == "application/json"


@pytest.mark.parametrize("text", ["not json", json.dumps({"predictionSummary": "só resumo"})])
def test_predict_demand_falls_back(state: AppState, text: str) -> None:
    prediction = AdvisoryService("key", session=FakeSession(_reply(text))).predict_demand(state)

    assert prediction.summary == DEMAND_FALLBACK_SUMMARY
    assert prediction.suggestions == list(DEMAND_FALLBACK_SUGGESTIONS)


def test_structured_calls_fall_back_on_malformed_parts(state: AppState) -> None:
    session = FakeSession(FakeResponse(body={"candidates": [{"content": {"parts": None}}]}))
    advisor = AdvisoryService("key", session=session)

    assert advisor.predict_demand(state).summary == DEMAND_FALLBACK_SUMMARY
    assert advisor.suggest_promotions(state) == []


def test_suggest_promotions(state: AppState) -> None:
    body = json.dumps([
        {"title": "Combo Família", "description": "2 galões com desconto"},
        {"title": "Gás + Água", "description": "Leve os dois"},
    ])
    session = FakeSession(_reply(body))

    promotions = AdvisoryService("key", session=session).suggest_promotions(state)

    assert promotions == [
        Promotion("Combo Família", "2 galões com desconto"),
        Promotion("Gás + Água", "Leve os dois"),
    ]
    assert "Água 20L" in session.calls[0]["json"]["contents"][0]["parts"][0]["text"]


def test_suggest_promotions_falls_back_to_empty(state: AppState) -> None:
    session = FakeSession(error=requests.ConnectionError("offline"))

    assert AdvisoryService("key", session=session).suggest_promotions(state) == []
    assert AdvisoryService("key", session=FakeSession(_reply("[{}]"))).suggest_promotions(state) == []


def test_advice_does_not_modify_state(state: AppState) -> None:
    before = state
    advisor = AdvisoryService("key", session=FakeSession(_reply("ok")))

    advisor.ask("Oi", state)
    advisor.predict_demand(state)
    advisor.suggest_promotions(state)

    assert state == before
