"""Dashboard aggregation package."""

from finance_tracker.queries.summary import (
    calculate_summary,
    cash_direction,
    expenses_by_category,
)

__all__ = ["calculate_summary", "cash_direction", "expenses_by_category"]
