from typing import Any, Dict, List, Optional

REMAINING_LABEL = "Remaining Income"
REMAINING_COLOR = "#28a745"

EXPENSE_COLORS = [
    "#ff6384", "#36a2eb", "#ffce56", "#8e44ad", "#e74c3c", "#f39c12", "#27ae60", "#d35400",
]


def share_of_income(amount: float, income: float) -> Optional[float]:
    if not income:
        return None
    return round(amount / income * 100, 2)


def build_expense_chart(income: float, expenses: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Doughnut chart data: one slice for the income left over, then one slice
    per expense in insertion order.
    """
    amounts = [float(exp.get("amount", 0)) for exp in expenses]
    values = [round(income - sum(amounts), 2)] + amounts

    return {
        "type": "doughnut",
        "labels": [REMAINING_LABEL] + [exp["category"] for exp in expenses],
        "values": values,
        "colors": [REMAINING_COLOR] + [EXPENSE_COLORS[i % len(EXPENSE_COLORS)] for i in range(len(expenses))],
        "percentages": [share_of_income(value, income) for value in values],
    }
