"""Static lookup tables shared by the analyzer.

Both tables are read-only. ``CATEGORY_KEYWORDS`` is a tuple of pairs rather
than a dict because the classifier's tie-break is the order categories and
keywords are listed in here.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Food", (
        "restaurant", "cafe", "grocery", "food", "meal", "lunch", "dinner",
        "breakfast", "snack", "pizza", "burger", "coffee",
    )),
    ("Transport", (
        "uber", "lyft", "taxi", "bus", "train", "metro", "gas", "fuel", "car",
        "parking", "transport", "travel", "fare",
    )),
    ("Bills", (
        "electricity", "water", "internet", "phone", "bill", "rent",
        "insurance", "utility", "subscription", "service",
    )),
    ("Entertainment", (
        "movie", "theatre", "concert", "show", "game", "netflix", "amazon",
        "spotify", "entertainment", "party", "event",
    )),
    ("Shopping", (
        "clothes", "shoes", "accessory", "mall", "store", "shop", "purchase",
        "buy", "amazon", "online",
    )),
    ("Health", (
        "doctor", "medicine", "hospital", "clinic", "medical", "health",
        "fitness", "gym", "pharmacy", "dental",
    )),
    ("Education", (
        "book", "course", "class", "tuition", "school", "college",
        "university", "education", "learning", "tutorial",
    )),
)

KNOWN_CATEGORIES: Tuple[str, ...] = tuple(category for category, _ in CATEGORY_KEYWORDS)

# Target share of income (percent) per category
IDEAL_PERCENTAGES: Mapping[str, float] = MappingProxyType({
    "Food": 15,
    "Transport": 10,
    "Bills": 25,
    "Entertainment": 5,
    "Shopping": 10,
    "Health": 10,
    "Education": 10,
})

DEFAULT_IDEAL_PERCENTAGE = 10

# Overspend tips fire once a category passes ideal * this factor
OVERSPEND_FACTOR = 1.5

ANOMALY_SIGMA = 2
MIN_EXPENSES_FOR_ANOMALIES = 5
MIN_CATEGORY_POINTS_FOR_ANOMALIES = 3
