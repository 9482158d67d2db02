"""Tests for the AI financial advisor (stubbed model, no API calls)."""

import asyncio
import json
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from finance_tracker.agents import NO_ADVICE_MESSAGE, UNAVAILABLE_MESSAGE, FinancialAdvisor
from finance_tracker.models.transaction import Transaction, TransactionType


class StubModel:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def transactions(count):
    return [
        Transaction(
            id=f"tx-{i}",
            date=date(2024, 1, 1),
            type=TransactionType.EXPENSE,
            category="Food",
            amount=Decimal(i + 1),
        )
        for i in range(count)
    ]


class TestFinancialAdvisor:
    """Tests for advice generation."""

    def test_returns_model_text(self):
        model = StubModel(text="  Spend less on food.  ")
        advisor = FinancialAdvisor(model=model, transaction_limit=50)
        assert asyncio.run(advisor.get_advice(transactions(3))) == "Spend less on food."
        assert len(model.prompts) == 1

    def test_prompt_is_capped_to_recent_transactions(self):
        advisor = FinancialAdvisor(model=StubModel(text="ok"), transaction_limit=2)
        prompt = advisor.build_prompt(transactions(5))
        payload = json.loads(prompt.splitlines()[1])
        assert [item["id"] for item in payload] == ["tx-0", "tx-1"]

    def test_empty_response_falls_back(self):
        advisor = FinancialAdvisor(model=StubModel(text=""), transaction_limit=50)
        assert asyncio.run(advisor.get_advice([])) == NO_ADVICE_MESSAGE

    def test_model_error_falls_back(self):
        advisor = FinancialAdvisor(model=StubModel(error=RuntimeError("quota")), transaction_limit=50)
        assert asyncio.run(advisor.get_advice(transactions(1))) == UNAVAILABLE_MESSAGE
