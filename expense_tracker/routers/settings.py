"""
Settings Router
User preferences kept alongside the expense data
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from expense_tracker.db.storage import KeyValueStore, get_store
from expense_tracker.models.settings import ThemeSettings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/theme", response_model=ThemeSettings)
def get_theme(store: KeyValueStore = Depends(get_store)):
    return ThemeSettings(dark_mode=store.get_dark_mode())


@router.put("/theme", response_model=ThemeSettings)
def update_theme(theme: ThemeSettings, store: KeyValueStore = Depends(get_store)):
    try:
        store.save_dark_mode(theme.dark_mode)
    except OSError:
        raise HTTPException(status_code=500, detail="Failed to save theme")
    logger.info(f"Dark mode {'enabled' if theme.dark_mode else 'disabled'}")
    return theme
