"""AI Agents package."""

from finance_tracker.agents.advisor import (
    NO_ADVICE_MESSAGE,
    UNAVAILABLE_MESSAGE,
    FinancialAdvisor,
)

__all__ = [
    "FinancialAdvisor",
    "NO_ADVICE_MESSAGE",
    "UNAVAILABLE_MESSAGE",
]
