"""
finance_analyzer_lib
~~~~~~~~~~~~~~~~~~~~

Heuristic analytics for the Smart Expense Tracker. The FinanceAnalyzer class
suggests categories from free-text descriptions, projects next-period spend,
scores spending against income and flags unusual expenses. It does no I/O of
its own so the API layer, scripts and tests all share the same logic.
"""

from .analyzer import Anomaly, FinanceAnalyzer, group_by_category, round_half_up

__all__ = ["Anomaly", "FinanceAnalyzer", "group_by_category", "round_half_up"]
