"""
Insights Router
Category suggestions, spend predictions, budget advice and unusual expenses
"""
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends

from expense_tracker.core.config import settings
from expense_tracker.db.storage import KeyValueStore, get_store
from finance_analyzer_lib import FinanceAnalyzer

router = APIRouter()
logger = logging.getLogger(__name__)
finance_analyzer = FinanceAnalyzer(settings.IDEAL_PERCENTAGES_JSON)


@router.get("/")
def get_insights(store: KeyValueStore = Depends(get_store)) -> Dict:
    """
    Predictions per category, budget recommendations and anomalies for the
    stored income and expenses.
    """
    income = store.get_income()
    expenses = store.get_expenses()
    summary = finance_analyzer.summarize(income, expenses)
    logger.info(
        f"Insights for {len(expenses)} expenses: "
        f"{len(summary['predictions'])} predictions, {len(summary['anomalies'])} anomalies"
    )
    return summary


@router.get("/suggest-category")
def suggest_category(description: Optional[str] = None) -> Dict:
    return {"category": finance_analyzer.suggest_category(description)}
