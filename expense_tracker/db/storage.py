"""
Local key-value store for the tracker.

A single JSON file holds the income, the expense list and the theme
preference. A missing or corrupt file reads as empty so the tracker always
starts; writes go through a temp file and os.replace().
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from expense_tracker.core.config import settings
from expense_tracker.models.expense import ExpenseInDB

logger = logging.getLogger(__name__)

INCOME_KEY = "income"
EXPENSES_KEY = "expenses"
DARK_MODE_KEY = "dark_mode"

# Serializes read-modify-write cycles across request threads; reentrant
# since put_expense/delete_expense call set().
_write_lock = threading.RLock()


class KeyValueStore:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        """Returns {} on missing or corrupt file."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read store {self.path}, treating as empty: {str(e)}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Store {self.path} does not hold a JSON object, treating as empty")
            return {}
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error(f"Failed to write store {self.path}: {str(e)}")
            tmp.unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with _write_lock:
            data = self._load()
            data[key] = value
            self._save(data)

    # Income

    def get_income(self) -> float:
        try:
            return float(self.get(INCOME_KEY, 0.0))
        except (TypeError, ValueError):
            logger.warning("Stored income is not a number, using 0")
            return 0.0

    def save_income(self, income: float) -> None:
        self.set(INCOME_KEY, income)

    # Expenses

    def get_expenses(self) -> List[Dict[str, Any]]:
        """Stored expenses; entries that are not valid expenses are dropped."""
        expenses = self.get(EXPENSES_KEY, [])
        if not isinstance(expenses, list):
            logger.warning("Stored expenses are not a list, using []")
            return []

        valid = []
        for position, item in enumerate(expenses):
            try:
                valid.append(ExpenseInDB.model_validate(item).model_dump())
            except ValidationError as e:
                logger.warning(f"Dropping malformed stored expense at position {position}: {e.error_count()} error(s)")
        return valid

    def save_expenses(self, expenses: List[Dict[str, Any]]) -> None:
        self.set(EXPENSES_KEY, expenses)

    def put_expense(self, expense_item: Dict[str, Any]) -> int:
        """Append an expense and return its index."""
        with _write_lock:
            expenses = self.get_expenses()
            expenses.append(expense_item)
            self.save_expenses(expenses)
            return len(expenses) - 1

    def delete_expense(self, index: int) -> Optional[Dict[str, Any]]:
        """Remove the expense at ``index``; returns it, or None if out of range."""
        with _write_lock:
            expenses = self.get_expenses()
            if index < 0 or index >= len(expenses):
                return None
            removed = expenses.pop(index)
            self.save_expenses(expenses)
            return removed

    # Preferences

    def get_dark_mode(self) -> bool:
        return bool(self.get(DARK_MODE_KEY, False))

    def save_dark_mode(self, enabled: bool) -> None:
        self.set(DARK_MODE_KEY, enabled)


def get_store() -> KeyValueStore:
    return KeyValueStore(settings.STORAGE_PATH)
