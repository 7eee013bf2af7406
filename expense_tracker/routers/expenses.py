import logging

from fastapi import APIRouter, Depends, HTTPException, status

from expense_tracker.core.config import settings
from expense_tracker.db.storage import KeyValueStore, get_store
from expense_tracker.models.expense import (
    AUTO_CATEGORY,
    OTHER_CATEGORY,
    ExpenseCreate,
    ExpenseInDB,
    ExpenseList,
    ExpensePublic,
)
from finance_analyzer_lib import FinanceAnalyzer

router = APIRouter()
logger = logging.getLogger(__name__)
finance_analyzer = FinanceAnalyzer(settings.IDEAL_PERCENTAGES_JSON)


def resolve_category(expense: ExpenseCreate) -> str:
    """
    Pick the label to store: the custom label for "Other", the suggested
    category for "Auto", otherwise the selected one. An "Auto" expense whose
    description matches nothing keeps the "Auto" label.
    """
    custom_category = (expense.custom_category or "").strip()
    description = (expense.description or "").strip()

    if expense.category == OTHER_CATEGORY and custom_category:
        return custom_category
    if expense.category == AUTO_CATEGORY and description:
        suggested = finance_analyzer.suggest_category(description)
        if suggested:
            return suggested
    return expense.category


@router.get("/", response_model=ExpenseList)
def list_expenses(store: KeyValueStore = Depends(get_store)):
    expenses = store.get_expenses()
    return ExpenseList(
        expenses=[ExpensePublic(index=i, **exp) for i, exp in enumerate(expenses)],
        total_income=store.get_income(),
        total_expenses=finance_analyzer.total_expenses(expenses),
    )


@router.post("/", response_model=ExpensePublic, status_code=status.HTTP_201_CREATED)
def create_expense(expense: ExpenseCreate, store: KeyValueStore = Depends(get_store)):
    expense_db = ExpenseInDB(
        amount=expense.amount,
        category=resolve_category(expense),
        description=(expense.description or "").strip(),
    )

    income = store.get_income()
    expenses = store.get_expenses()
    if finance_analyzer.total_expenses(expenses) + expense_db.amount > income:
        logger.info(f"Rejected {expense_db.category} expense of {expense_db.amount}: exceeds income {income}")
        raise HTTPException(status_code=400, detail="Expense cannot exceed total income!")

    try:
        index = store.put_expense(expense_db.model_dump())
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to save expense")

    logger.info(f"Stored {expense_db.category} expense of {expense_db.amount} at index {index}")
    return ExpensePublic(index=index, **expense_db.model_dump())


@router.delete("/{index}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(index: int, store: KeyValueStore = Depends(get_store)):
    try:
        deleted = store.delete_expense(index)
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to delete expense")
    if deleted is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return None
