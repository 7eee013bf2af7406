import logging
from typing import Dict

from fastapi import APIRouter, Depends

from expense_tracker.core.config import settings
from expense_tracker.db.storage import KeyValueStore, get_store
from expense_tracker.utils import chart
from finance_analyzer_lib import FinanceAnalyzer

router = APIRouter()
logger = logging.getLogger(__name__)
finance_analyzer = FinanceAnalyzer(settings.IDEAL_PERCENTAGES_JSON)


@router.get("/summary")
def get_summary(store: KeyValueStore = Depends(get_store)) -> Dict:
    """
    Running totals, per-category totals and the data behind the expense chart.
    """
    income = store.get_income()
    expenses = store.get_expenses()
    total = finance_analyzer.total_expenses(expenses)
    logger.debug(f"Summary: income={income}, total={total}, expenses={len(expenses)}")

    return {
        "total_income": income,
        "total_expenses": total,
        "remaining_income": round(income - total, 2),
        "category_totals": finance_analyzer.category_totals(expenses),
        "chart": chart.build_expense_chart(income, expenses),
    }
