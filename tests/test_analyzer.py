import json

from finance_analyzer_lib import FinanceAnalyzer, group_by_category, round_half_up
from finance_analyzer_lib.analyzer import (
    EXCELLENT_SAVINGS_MESSAGE,
    GOOD_SAVINGS_MESSAGE,
    LOW_SAVINGS_MESSAGE,
    OVERSPENDING_MESSAGE,
    PROMPT_MESSAGE,
)


def expense(amount, category, description=""):
    return {"amount": amount, "category": category, "description": description}


sample_expenses = [
    expense(250.0, "Food", "grocery run"),
    expense(1000.0, "Bills", "rent"),
    expense(150.0, "Food", "pizza night"),
    expense(1200.0, "Shopping", "new shoes"),
]

# Food: five 10s and a 100, Transport only has two points
mixed_expenses = [
    expense(10, "Food"),
    expense(5, "Transport"),
    expense(10, "Food"),
    expense(10, "Food"),
    expense(500, "Transport"),
    expense(10, "Food"),
    expense(10, "Food"),
    expense(100, "Food"),
]


def test_round_half_up():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(-2.5) == -2.0
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(66.6666, 1) == 66.7


def test_group_by_category_keeps_order_and_indices():
    groups = group_by_category(sample_expenses)
    assert list(groups) == ["Food", "Bills", "Shopping"]
    assert groups["Food"] == [(0, 250.0), (2, 150.0)]
    assert group_by_category(None) == {}


def test_suggest_category_without_description():
    analyzer = FinanceAnalyzer()
    assert analyzer.suggest_category("") is None
    assert analyzer.suggest_category(None) is None


def test_suggest_category_keyword_match():
    analyzer = FinanceAnalyzer()
    assert analyzer.suggest_category("I bought a pizza") == "Food"
    assert analyzer.suggest_category("Gym membership") == "Health"
    assert analyzer.suggest_category("Quarterly tax payment") is None


def test_suggest_category_first_category_wins():
    analyzer = FinanceAnalyzer()
    # "uber" comes first in the text but Food is listed before Transport
    assert analyzer.suggest_category("uber to the restaurant") == "Food"
    # "amazon" is a keyword of both Entertainment and Shopping
    assert analyzer.suggest_category("Amazon order") == "Entertainment"
    # case-insensitive, Bills is listed before Entertainment
    assert analyzer.suggest_category("NETFLIX Subscription") == "Bills"


def test_predict_expenses_empty():
    analyzer = FinanceAnalyzer()
    assert analyzer.predict_expenses([]) == {}
    assert analyzer.predict_expenses(None) == {}


def test_predict_expenses_mean_per_category():
    analyzer = FinanceAnalyzer()
    result = analyzer.predict_expenses([expense(10, "Food"), expense(20, "Food")])
    assert result == {"Food": 15.0}


def test_predict_expenses_rounds_to_cents():
    analyzer = FinanceAnalyzer()
    result = analyzer.predict_expenses(
        [expense(1, "Transport"), expense(2, "Transport"), expense(2, "Transport"), expense(40, "Pets")]
    )
    assert result == {"Transport": 1.67, "Pets": 40.0}


def test_category_totals_and_total():
    analyzer = FinanceAnalyzer()
    assert analyzer.total_expenses(sample_expenses) == 2600.0
    assert analyzer.category_totals(sample_expenses) == {"Food": 400.0, "Bills": 1000.0, "Shopping": 1200.0}


def test_recommendations_need_income_and_expenses():
    analyzer = FinanceAnalyzer()
    for income, expenses in [(0, sample_expenses), (None, sample_expenses), (-5, sample_expenses), (1000, []), (1000, None)]:
        result = analyzer.generate_budget_recommendations(income, expenses)
        assert result == {"message": PROMPT_MESSAGE}
        assert "savings_rate" not in result


def test_recommendations_overspending():
    analyzer = FinanceAnalyzer()
    result = analyzer.generate_budget_recommendations(1000, [expense(1100, "Food")])
    assert result["savings_rate"] == -10.0
    assert result["message"] == OVERSPENDING_MESSAGE
    assert result["category_tips"] == {
        "Food": "Consider reducing Food expenses (currently 110% of income)."
    }


def test_recommendations_savings_thresholds():
    analyzer = FinanceAnalyzer()
    cases = [
        (1000, LOW_SAVINGS_MESSAGE),
        (950, LOW_SAVINGS_MESSAGE),
        (900, GOOD_SAVINGS_MESSAGE),
        (850, GOOD_SAVINGS_MESSAGE),
        (800, EXCELLENT_SAVINGS_MESSAGE),
    ]
    for total, message in cases:
        result = analyzer.generate_budget_recommendations(1000, [expense(total, "Custom")])
        assert result["message"] == message


def test_recommendations_category_tips():
    analyzer = FinanceAnalyzer()
    result = analyzer.generate_budget_recommendations(
        1000,
        [
            expense(80, "Entertainment"),  # 8% against an ideal of 5%
            expense(160, "Pets"),          # 16% against the default 10%
            expense(140, "Garden"),        # 14%, within 1.5x of the default
            expense(300, "Bills"),         # 30% against an ideal of 25%
        ],
    )
    assert result["savings_rate"] == 32.0
    assert result["message"] == EXCELLENT_SAVINGS_MESSAGE
    assert result["category_tips"] == {
        "Entertainment": "Consider reducing Entertainment expenses (currently 8% of income).",
        "Pets": "Consider reducing Pets expenses (currently 16% of income).",
    }


def test_recommendations_without_tips():
    analyzer = FinanceAnalyzer()
    result = analyzer.generate_budget_recommendations(600, [expense(100, "Bills")])
    assert result["savings_rate"] == 83.3
    assert result["category_tips"] == {}


def test_recommendations_tip_threshold_is_strict():
    analyzer = FinanceAnalyzer()
    # Food ideal is 15%, so tips start above 22.5% of income
    at_threshold = analyzer.generate_budget_recommendations(1000, [expense(225, "Food")])
    assert at_threshold["category_tips"] == {}

    above_threshold = analyzer.generate_budget_recommendations(1000, [expense(226, "Food")])
    assert above_threshold["category_tips"] == {
        "Food": "Consider reducing Food expenses (currently 23% of income)."
    }


def test_recommendations_zero_savings_is_not_overspending():
    analyzer = FinanceAnalyzer()
    result = analyzer.generate_budget_recommendations(1000, [expense(1000, "Custom")])
    assert result["savings_rate"] == 0.0
    assert result["message"] == LOW_SAVINGS_MESSAGE


def test_anomalies_need_five_expenses():
    analyzer = FinanceAnalyzer()
    assert analyzer.identify_anomalies([expense(1, "Food")] * 3 + [expense(1000, "Food")]) == []
    assert analyzer.identify_anomalies(None) == []


def test_anomalies_use_population_std_dev():
    analyzer = FinanceAnalyzer()
    # mean 28, population std dev 36: |100 - 28| == 72 is not above 2 * 36
    amounts = [10, 10, 10, 10, 100]
    assert analyzer.identify_anomalies([expense(a, "Food") for a in amounts]) == []


def test_anomalies_flag_high_expense():
    analyzer = FinanceAnalyzer()
    result = analyzer.identify_anomalies(mixed_expenses)
    assert result == [
        {"index": 7, "category": "Food", "amount": 100.0, "message": "Unusually high Food expense"}
    ]


def test_anomalies_flag_low_expense():
    analyzer = FinanceAnalyzer()
    amounts = [100, 100, 100, 100, 100, 1]
    result = analyzer.identify_anomalies([expense(a, "Shopping") for a in amounts])
    assert result == [
        {"index": 5, "category": "Shopping", "amount": 1.0, "message": "Unusually low Shopping expense"}
    ]


def test_anomalies_identical_amounts_not_flagged():
    analyzer = FinanceAnalyzer()
    expenses = [expense(10, "Food")] * 3 + [expense(5, "Transport")] * 2
    assert analyzer.identify_anomalies(expenses) == []


def test_anomalies_grouped_by_category():
    analyzer = FinanceAnalyzer()
    expenses = (
        [expense(10, "Food"), expense(200, "Transport")]
        + [expense(20, "Transport")] * 5
        + [expense(10, "Food")] * 4
        + [expense(100, "Food")]
    )
    result = analyzer.identify_anomalies(expenses)
    assert [(a["category"], a["index"]) for a in result] == [("Food", 11), ("Transport", 1)]


def test_functions_are_idempotent():
    analyzer = FinanceAnalyzer()
    assert analyzer.suggest_category("coffee") == analyzer.suggest_category("coffee")
    assert analyzer.predict_expenses(mixed_expenses) == analyzer.predict_expenses(mixed_expenses)
    assert analyzer.generate_budget_recommendations(5000, sample_expenses) == \
        analyzer.generate_budget_recommendations(5000, sample_expenses)
    assert analyzer.identify_anomalies(mixed_expenses) == analyzer.identify_anomalies(mixed_expenses)


def test_summarize():
    analyzer = FinanceAnalyzer()
    summary = analyzer.summarize(1000, mixed_expenses)
    assert set(summary) == {"predictions", "recommendations", "anomalies"}
    assert summary["predictions"]["Transport"] == 252.5
    assert len(summary["anomalies"]) == 1


def test_ideal_percentage_overrides(tmp_path):
    config = tmp_path / "ideal.json"
    config.write_text(json.dumps({"Entertainment": 20, "Pets": 2}))
    analyzer = FinanceAnalyzer(config)
    assert analyzer.ideal_percentage("Entertainment") == 20
    assert analyzer.ideal_percentage("Pets") == 2
    assert analyzer.ideal_percentage("Food") == 15

    result = analyzer.generate_budget_recommendations(1000, [expense(80, "Entertainment")])
    assert result["category_tips"] == {}


def test_ideal_percentage_bad_config_falls_back(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert FinanceAnalyzer(broken).ideal_percentage("Entertainment") == 5
    assert FinanceAnalyzer(tmp_path / "missing.json").ideal_percentage("Unknown") == 10
