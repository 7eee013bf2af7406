from __future__ import annotations

import json
import logging
import math
import statistics
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .tables import (
    ANOMALY_SIGMA,
    CATEGORY_KEYWORDS,
    DEFAULT_IDEAL_PERCENTAGE,
    IDEAL_PERCENTAGES,
    MIN_CATEGORY_POINTS_FOR_ANOMALIES,
    MIN_EXPENSES_FOR_ANOMALIES,
    OVERSPEND_FACTOR,
)

logger = logging.getLogger(__name__)

Expense = Mapping[str, Any]

PROMPT_MESSAGE = "Add your income and expenses to get personalized recommendations."
OVERSPENDING_MESSAGE = "⚠️ You're spending more than your income. Consider reducing expenses."
LOW_SAVINGS_MESSAGE = "You're saving less than 10% of your income. Try to increase your savings."
GOOD_SAVINGS_MESSAGE = "Good job! You're saving between 10-20% of your income."
EXCELLENT_SAVINGS_MESSAGE = "Excellent! You're saving more than 20% of your income."


def round_half_up(value: float, places: int = 0) -> float:
    """Round with .5 always going up, on the value scaled by 10**places."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def group_by_category(expenses: Optional[Sequence[Expense]]) -> Dict[str, List[Tuple[int, float]]]:
    """
    Bucket expenses by category, keeping first-seen category order.

    Each bucket holds ``(index, amount)`` pairs where ``index`` is the
    position of the expense in the input sequence.
    """
    groups: Dict[str, List[Tuple[int, float]]] = {}
    for index, exp in enumerate(expenses or []):
        groups.setdefault(exp["category"], []).append((index, float(exp.get("amount", 0))))
    return groups


@dataclass
class Anomaly:
    """An expense that sits far from the usual spend of its category."""

    index: int
    category: str
    amount: float
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class FinanceAnalyzer:
    """
    Heuristic analytics over an in-memory expense list.

    Every method is a pure function of its arguments; the analyzer only
    carries the read-only lookup tables.
    """

    def __init__(self, ideal_percentages_path: Optional[str | Path] = None) -> None:
        self._category_keywords = CATEGORY_KEYWORDS
        self._ideal_percentages = self._load_ideal_percentages(ideal_percentages_path)

    @staticmethod
    def _load_ideal_percentages(path: Optional[str | Path]) -> Dict[str, float]:
        merged: Dict[str, float] = dict(IDEAL_PERCENTAGES)
        if not path:
            return merged

        config_file = Path(path)
        if not config_file.exists():
            logger.warning(f"Ideal percentages file not found: {config_file}, using defaults")
            return merged

        try:
            with config_file.open() as fp:
                overrides = json.load(fp)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read ideal percentages from {config_file}: {str(e)}")
            return merged

        if not isinstance(overrides, dict):
            logger.error(f"Ideal percentages in {config_file} must be a JSON object, ignoring")
            return merged

        merged.update({cat: float(pct) for cat, pct in overrides.items()})
        logger.info(f"Loaded {len(overrides)} ideal percentage override(s) from {config_file}")
        return merged

    def ideal_percentage(self, category: str) -> float:
        return self._ideal_percentages.get(category, DEFAULT_IDEAL_PERCENTAGE)

    def suggest_category(self, description: Optional[str]) -> Optional[str]:
        """
        Return the first category whose keyword occurs in ``description``.

        Categories and keywords are tried in table order, so when a
        description mentions keywords of two categories the earlier
        category wins. Returns None when nothing matches.
        """
        if not description:
            return None

        text = description.lower()
        for category, keywords in self._category_keywords:
            for keyword in keywords:
                if keyword.lower() in text:
                    return category
        return None

    def total_expenses(self, expenses: Optional[Sequence[Expense]]) -> float:
        return round(sum(float(exp.get("amount", 0)) for exp in expenses or []), 2)

    def category_totals(self, expenses: Optional[Sequence[Expense]]) -> Dict[str, float]:
        return {
            category: round(sum(amount for _, amount in points), 2)
            for category, points in group_by_category(expenses).items()
        }

    def predict_expenses(self, expenses: Optional[Sequence[Expense]]) -> Dict[str, float]:
        """Project next-period spend per category as the mean of its history."""
        predictions: Dict[str, float] = {}
        for category, points in group_by_category(expenses).items():
            average = statistics.fmean(amount for _, amount in points)
            predictions[category] = round_half_up(average, 2)
        return predictions

    def generate_budget_recommendations(
        self,
        income: Optional[float],
        expenses: Optional[Sequence[Expense]],
    ) -> Dict[str, Any]:
        if not income or income <= 0 or not expenses:
            return {"message": PROMPT_MESSAGE}

        groups = group_by_category(expenses)
        total_expense = sum(amount for points in groups.values() for _, amount in points)
        savings_rate = (income - total_expense) / income * 100

        if savings_rate < 0:
            message = OVERSPENDING_MESSAGE
        elif savings_rate < 10:
            message = LOW_SAVINGS_MESSAGE
        elif savings_rate < 20:
            message = GOOD_SAVINGS_MESSAGE
        else:
            message = EXCELLENT_SAVINGS_MESSAGE

        category_tips: Dict[str, str] = {}
        for category, points in groups.items():
            percentage = sum(amount for _, amount in points) / income * 100
            if percentage > self.ideal_percentage(category) * OVERSPEND_FACTOR:
                category_tips[category] = (
                    f"Consider reducing {category} expenses "
                    f"(currently {int(round_half_up(percentage))}% of income)."
                )

        return {
            "savings_rate": round_half_up(savings_rate, 1),
            "message": message,
            "category_tips": category_tips,
        }

    def identify_anomalies(self, expenses: Optional[Sequence[Expense]]) -> List[Dict[str, Any]]:
        """
        Flag expenses more than two population standard deviations from
        their category mean.

        Needs at least five expenses overall and three in a category before
        that category is checked. The comparison is strict, so a category
        whose amounts are all equal flags only values that differ from them.
        """
        if not expenses or len(expenses) < MIN_EXPENSES_FOR_ANOMALIES:
            return []

        anomalies: List[Anomaly] = []
        for category, points in group_by_category(expenses).items():
            if len(points) < MIN_CATEGORY_POINTS_FOR_ANOMALIES:
                continue

            amounts = [amount for _, amount in points]
            mean = statistics.fmean(amounts)
            std_dev = statistics.pstdev(amounts)

            for index, amount in points:
                if abs(amount - mean) > ANOMALY_SIGMA * std_dev:
                    direction = "high" if amount > mean else "low"
                    anomalies.append(
                        Anomaly(
                            index=index,
                            category=category,
                            amount=amount,
                            message=f"Unusually {direction} {category} expense",
                        )
                    )

        return [anomaly.to_dict() for anomaly in anomalies]

    def summarize(
        self,
        income: Optional[float],
        expenses: Optional[Sequence[Expense]],
    ) -> Dict[str, Any]:
        return {
            "predictions": self.predict_expenses(expenses),
            "recommendations": self.generate_budget_recommendations(income, expenses),
            "anomalies": self.identify_anomalies(expenses),
        }
