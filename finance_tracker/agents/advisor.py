"""
AI Financial Advisor

A thin wrapper around Gemini that turns the user's recent transactions
into a short, encouraging health check and one saving tip.

BOUNDARIES:
- Sees only what the session already loaded; never reads the store
- Never writes anything
- Never raises: any failure yields a fixed fallback message
"""

import json
from collections.abc import Sequence
from typing import Any, Optional

import google.generativeai as genai

from finance_tracker.config import get_settings
from finance_tracker.log import get_logger
from finance_tracker.models.transaction import Transaction

NO_ADVICE_MESSAGE = "Could not generate advice at this time."
UNAVAILABLE_MESSAGE = "Unable to connect to AI advisor. Please check your API key."

logger = get_logger(__name__)


class FinancialAdvisor:
    """
    Generates advice text from a transaction list.

    ``model`` can be any object with an async ``generate_content_async``
    returning something with a ``text`` attribute; by default a Gemini
    model is configured from settings.
    """

    def __init__(self, model: Optional[Any] = None, transaction_limit: Optional[int] = None):
        self._model = model
        self._limit = transaction_limit or get_settings().app.advice_transaction_limit

    def _get_model(self) -> Any:
        if self._model is None:
            settings = get_settings().gemini
            genai.configure(api_key=settings.api_key)
            self._model = genai.GenerativeModel(
                model_name=settings.model_name,
                generation_config={
                    "temperature": settings.temperature,
                    "max_output_tokens": settings.max_tokens,
                },
            )
        return self._model

    def build_prompt(self, transactions: Sequence[Transaction]) -> str:
        # Most recent first; cap the payload so long histories stay fast
        recent = [
            t.model_dump(mode="json", by_alias=True, exclude_none=True)
            for t in transactions[:self._limit]
        ]
        return f"""Act as a financial advisor. Here is a list of my recent transactions:
{json.dumps(recent, ensure_ascii=False)}

Please provide a brief, 3-bullet point summary of my financial health and one actionable tip to save money.
Keep it encouraging and concise."""

    async def get_advice(self, transactions: Sequence[Transaction]) -> str:
        try:
            model = self._get_model()
            response = await model.generate_content_async(self.build_prompt(transactions))
            text = (response.text or "").strip()
        except Exception as e:
            logger.error("advice_generation_failed", error=str(e))
            return UNAVAILABLE_MESSAGE

        return text or NO_ADVICE_MESSAGE
