import logging

from fastapi import APIRouter, Depends, HTTPException

from expense_tracker.db.storage import KeyValueStore, get_store
from expense_tracker.models.settings import IncomePublic, IncomeUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=IncomePublic)
def get_income(store: KeyValueStore = Depends(get_store)):
    return IncomePublic(income=store.get_income())


@router.put("/", response_model=IncomePublic)
def update_income(update: IncomeUpdate, store: KeyValueStore = Depends(get_store)):
    try:
        store.save_income(update.income)
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to save income")
    logger.info(f"Income set to {update.income}")
    return IncomePublic(income=update.income)
