"""
Advisory assistant (Gemini generateContent over HTTP).

Consumes a read-only snapshot and returns text or structured suggestions.
Every call is best-effort: network errors, HTTP errors, missing API key and
unparseable replies are logged and turned into a fixed fallback value. No
call ever raises into the caller and none of them mutates state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from domain.state import AppState
from domain.time import to_iso_utc

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

ASK_FALLBACK = "Erro ao conectar com a inteligência artificial."
ASK_EMPTY_REPLY = "Desculpe, não consegui processar sua pergunta."
DEMAND_FALLBACK_SUMMARY = "Não foi possível gerar a previsão no momento."
DEMAND_FALLBACK_SUGGESTIONS = ("Mantenha o estoque conforme a média histórica.",)

_DEMAND_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "predictionSummary": {"type": "STRING"},
        "stockSuggestions": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["predictionSummary", "stockSuggestions"],
}

_PROMOTIONS_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "description": {"type": "STRING"},
        },
        "required": ["title", "description"],
    },
}


class AdvisoryError(Exception):
    """Internal: a call failed and the fallback must be used."""


@dataclass(frozen=True, slots=True)
class DemandPrediction:
    summary: str
    suggestions: List[str]


@dataclass(frozen=True, slots=True)
class Promotion:
    title: str
    description: str


def _assistant_context(state: AppState) -> str:
    stock = ", ".join(f"{p.name}: {p.stock}" for p in state.products)
    return (
        "Você é o assistente inteligente da H Água, uma revenda de água e gás.\n"
        "Dados Atuais:\n"
        f"- Clientes: {len(state.clients)}\n"
        f"- Produtos em estoque: {stock}\n"
        f"- Vendas totais: {len(state.sales)}\n"
        f"- Entregas hoje: {len(state.deliveries)}\n"
        "Responda de forma curta, prestativa e profissional."
    )


def _sales_history(state: AppState) -> List[Dict[str, Any]]:
    return [
        {
            "date": to_iso_utc(s.date, name="date"),
            "total": float(s.total),
            "items": [f"{i.name} x{i.quantity}" for i in s.items],
        }
        for s in state.sales
    ]


def _stock_listing(state: AppState) -> List[Dict[str, Any]]:
    return [
        {
            "name": p.name,
            "category": p.category.value,
            "price": float(p.price),
            "stock": p.stock,
            "minStock": p.min_stock,
        }
        for p in state.products
    ]


class AdvisoryService:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-3-flash-preview",
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 20.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._session = session or requests.Session()
        self._timeout = timeout

    def _generate(
        self,
        prompt: str,
        system_instruction: str,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> str:
        if not self._api_key:
            raise AdvisoryError("GEMINI_API_KEY is not configured")

        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "systemInstruction": {"parts": [{"text": system_instruction}]},
        }
        if response_schema is not None:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }

        headers = {
            "x-goog-api-key": self._api_key,
            "Content-Type": "application/json",
        }

        try:
            response = self._session.post(
                GEMINI_URL.format(model=self._model),
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise AdvisoryError(f"Gemini connection error: {e}") from e

        if response.status_code != 200:
            raise AdvisoryError(f"Gemini request failed. Status: {response.status_code}, Body: {response.text}")

        try:
            data = response.json()
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(str(part.get("text", "")) for part in parts)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise AdvisoryError(f"Gemini returned an unexpected body: {e}") from e

    def ask(self, question: str, state: AppState) -> str:
        """Free-form question about the business."""

        try:
            text = self._generate(question, _assistant_context(state))
        except AdvisoryError as e:
            logger.warning("Assistant unavailable: %s", e)
            return ASK_FALLBACK
        return text or ASK_EMPTY_REPLY

    def predict_demand(self, state: AppState) -> DemandPrediction:
        """Demand forecast for the next 7 days based on the sales history."""

        history = json.dumps(_sales_history(state), ensure_ascii=False)
        try:
            text = self._generate(
                "Analise este histórico de vendas e preveja a demanda para os próximos 7 dias. "
                "Retorne sugestões de estoque.",
                f"Histórico: {history}. Gere um resumo em JSON com campos: "
                "predictionSummary (string), stockSuggestions (array de strings).",
                _DEMAND_SCHEMA,
            )
            data = json.loads(text)
            return DemandPrediction(
                summary=str(data["predictionSummary"]),
                suggestions=[str(s) for s in data["stockSuggestions"]],
            )
        except (AdvisoryError, ValueError, KeyError, TypeError) as e:
            logger.warning("Demand prediction unavailable: %s", e)
            return DemandPrediction(
                summary=DEMAND_FALLBACK_SUMMARY,
                suggestions=list(DEMAND_FALLBACK_SUGGESTIONS),
            )

    def suggest_promotions(self, state: AppState) -> List[Promotion]:
        """Three promotion ideas for slow-moving stock or combos."""

        listing = json.dumps(_stock_listing(state), ensure_ascii=False)
        try:
            text = self._generate(
                f"Sugira 3 promoções baseadas nos dados de estoque: {listing}",
                "Crie promoções criativas para aumentar vendas de produtos parados ou combos.",
                _PROMOTIONS_SCHEMA,
            )
            return [
                Promotion(title=str(item["title"]), description=str(item["description"]))
                for item in json.loads(text)
            ]
        except (AdvisoryError, ValueError, KeyError, TypeError) as e:
            logger.warning("Promotion suggestions unavailable: %s", e)
            return []
