"""Unit tests for the pure aggregation helpers."""
from datetime import date
from decimal import Decimal

import pytest

from app.services.aggregation import (
    WEEKDAY_LABELS,
    calculate_growth,
    daily_trend,
    format_money,
    merge_counts,
    monthly_revenue_trend,
    percentage,
    percentage_distribution,
    safe_average,
    top_n_with_others,
    weekday_trend,
)


# ==================== GROWTH ====================

@pytest.mark.parametrize(
    "current, previous, expected",
    [
        (0, 0, 0),
        (5, 0, 100),
        (10, 5, 100),
        (5, 10, -50),
        (0, 5, -100),
        (7, 7, 0),
        (1, 3, -67),
        # Halves round toward +infinity
        (3, 8, -62),
        (5, 8, -37),
        (11, 8, 38),
    ],
)
def test_calculate_growth(current, previous, expected):
    assert calculate_growth(current, previous) == expected


# ==================== MONEY ====================

def test_format_money_fixed_two_decimals():
    assert format_money(Decimal("1200")) == "1200.00"
    assert format_money(Decimal("0.005")) == "0.01"
    assert format_money(None) == "0.00"
    assert format_money("not a number") == "0.00"


def test_safe_average_guards_zero_count():
    assert safe_average(Decimal("0"), 0) == 0
    assert safe_average(Decimal("1200"), 3) == Decimal("400")


# ==================== REVENUE TREND ====================

def test_revenue_trend_keeps_last_six_months_ascending():
    rows = []
    for i in range(14):
        year, month = 2024 + (i // 12), (i % 12) + 1
        rows.append((date(year, month, 15), Decimal("100")))

    trend = monthly_revenue_trend(reversed(rows), months=6)

    assert [p["month"] for p in trend] == [
        "2024-09", "2024-10", "2024-11", "2024-12", "2025-01", "2025-02",
    ]
    assert all(p["revenue"] == "100.00" for p in trend)


def test_revenue_trend_sums_within_month():
    rows = [
        (date(2024, 1, 3), Decimal("500")),
        (date(2024, 1, 28), Decimal("250.50")),
        (date(2024, 3, 1), Decimal("10")),
    ]
    assert monthly_revenue_trend(rows) == [
        {"month": "2024-01", "revenue": "750.50"},
        {"month": "2024-03", "revenue": "10.00"},
    ]


def test_revenue_trend_empty():
    assert monthly_revenue_trend([]) == []


# ==================== WEEKDAY TREND ====================

def test_wednesday_booking_increments_only_wed():
    wednesday = date(2024, 1, 17)
    trend = weekday_trend([wednesday])

    assert trend["labels"] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert trend["values"] == [0, 0, 0, 1, 0, 0, 0]


def test_sunday_is_first_bucket():
    trend = weekday_trend([date(2024, 1, 14), date(2024, 1, 14), date(2024, 1, 20)])
    assert trend["values"][0] == 2
    assert trend["values"][6] == 1


def test_daily_trend_rolling_window():
    end = date(2024, 1, 17)
    trend = daily_trend([date(2024, 1, 17), date(2024, 1, 15), date(2024, 1, 15)], end=end, days=3)

    assert trend["labels"] == ["Mon", "Tue", "Wed"]
    assert trend["values"] == [2, 0, 1]


# ==================== DISTRIBUTIONS ====================

def test_top_five_plus_others():
    counts = {"c1": 10, "c2": 8, "c3": 6, "c4": 4, "c5": 2, "c6": 1}
    result = top_n_with_others(counts, limit=5)

    assert result["labels"] == ["c1", "c2", "c3", "c4", "c5", "Others"]
    assert result["values"] == [10, 8, 6, 4, 2, 1]


def test_no_others_bucket_for_five_or_fewer():
    counts = {"c1": 3, "c2": 9, "c3": 1, "c4": 4, "c5": 2}
    result = top_n_with_others(counts, limit=5)

    assert "Others" not in result["labels"]
    assert result["labels"] == ["c2", "c4", "c1", "c5", "c3"]


def test_others_sums_the_remainder():
    counts = {f"c{i}": 10 - i for i in range(8)}
    result = top_n_with_others(counts, limit=5)

    assert result["labels"][-1] == "Others"
    assert result["values"][-1] == (10 - 5) + (10 - 6) + (10 - 7)


def test_merge_counts_folds_missing_labels_into_unknown():
    assert merge_counts([(None, 2), ("", 1), ("Express", 3)]) == {"Unknown": 3, "Express": 3}


def test_percentage_distribution_sums_to_hundred():
    distribution = percentage_distribution([("Standard", 2), ("Express", 1), (None, 4)])

    assert [d["type"] for d in distribution] == ["Unknown", "Standard", "Express"]
    assert [d["percentage"] for d in distribution] == [57.1, 28.6, 14.3]
    assert sum(d["percentage"] for d in distribution) == pytest.approx(100, abs=0.5)


@pytest.mark.parametrize(
    "count, total, expected",
    [
        (1, 16, 6.3),
        (5, 16, 31.3),
        (10, 16, 62.5),
        (1, 3, 33.3),
        (2, 3, 66.7),
    ],
)
def test_percentage_rounds_halves_up(count, total, expected):
    assert percentage(count, total) == expected


def test_percentage_distribution_half_shares():
    distribution = percentage_distribution([("Express", 1), ("Heavy", 5), ("Standard", 10)])

    assert [(d["type"], d["percentage"]) for d in distribution] == [
        ("Standard", 62.5),
        ("Heavy", 31.3),
        ("Express", 6.3),
    ]


def test_percentage_distribution_empty():
    assert percentage_distribution([]) == []
    assert percentage(0, 0) == 0.0


def test_weekday_labels_constant():
    assert len(WEEKDAY_LABELS) == 7
