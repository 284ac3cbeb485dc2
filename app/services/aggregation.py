"""
Aggregation helpers shared by the dashboard and report services.

Pure functions over already-fetched rows: growth rates, money formatting,
month/weekday bucketing, top-N distributions and percentages. Every
division is guarded so an empty input yields 0 instead of NaN.
"""
import math
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Dict, Tuple, Union, Optional, Any

TWO_PLACES = Decimal("0.01")
ONE_PLACE = Decimal("0.1")

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

UNKNOWN_LABEL = "Unknown"
OTHERS_LABEL = "Others"

DateLike = Union[date, datetime, str]


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored amount to Decimal; missing or malformed amounts count as 0."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")
    return result if result.is_finite() else Decimal("0")


def format_money(value: Any) -> str:
    """Fixed 2-decimal string for money fields, e.g. Decimal('1200') -> '1200.00'."""
    return str(to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def safe_average(total: Any, count: int) -> Decimal:
    if not count:
        return Decimal("0")
    return to_decimal(total) / Decimal(count)


def js_round(value: float) -> int:
    """Round halves toward positive infinity, like JavaScript's Math.round."""
    return int(math.floor(value + 0.5))


def calculate_growth(current: Union[int, float], previous: Union[int, float]) -> int:
    """
    Growth of a metric versus its previous-period value, in whole percent.

    growth(0, 0) == 0, growth(5, 0) == 100, growth(10, 5) == 100,
    growth(5, 10) == -50.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return js_round((current - previous) / previous * 100)


def percentage(count: int, total: int) -> float:
    """Share of `total` in percent, one decimal, halves rounded up (1 of 16 -> 6.3)."""
    if not total:
        return 0.0
    share = Decimal(count * 100) / Decimal(total)
    return float(share.quantize(ONE_PLACE, rounding=ROUND_HALF_UP))


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def month_key(value: DateLike) -> str:
    """Calendar month bucket key: 'YYYY-MM'."""
    d = as_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def weekday_index(value: DateLike) -> int:
    """Sunday-first weekday index (Sun=0 ... Sat=6)."""
    return (as_date(value).weekday() + 1) % 7


def monthly_revenue_trend(
    rows: Iterable[Tuple[DateLike, Any]],
    months: int = 6,
) -> List[Dict[str, str]]:
    """
    Sum revenue per calendar month and keep the most recent `months` buckets.

    Only months present in the data are returned, ascending by month key.
    """
    buckets: Dict[str, Decimal] = defaultdict(Decimal)
    for booking_date, amount in rows:
        if booking_date is None:
            continue
        buckets[month_key(booking_date)] += to_decimal(amount)

    trend = [
        {"month": key, "revenue": format_money(buckets[key])}
        for key in sorted(buckets)
    ]
    return trend[-months:] if months > 0 else []


def weekday_trend(dates: Iterable[DateLike]) -> Dict[str, List]:
    """Count dates into fixed Sunday-first weekday buckets."""
    values = [0] * 7
    for value in dates:
        if value is None:
            continue
        values[weekday_index(value)] += 1
    return {"labels": list(WEEKDAY_LABELS), "values": values}


def label_or_unknown(value: Optional[str]) -> str:
    return value if value else UNKNOWN_LABEL


def sort_counts(counts: Union[Dict[str, int], Iterable[Tuple[str, int]]]) -> List[Tuple[str, int]]:
    """Sort (label, count) pairs by count, largest first; ties keep input order."""
    items = list(counts.items()) if isinstance(counts, dict) else list(counts)
    return sorted(items, key=lambda item: item[1], reverse=True)


def top_n_with_others(
    counts: Union[Dict[str, int], Iterable[Tuple[str, int]]],
    limit: int = 5,
) -> Dict[str, List]:
    """
    Keep the `limit` largest buckets and merge the rest into "Others".

    No "Others" bucket is produced when there are `limit` buckets or fewer.
    """
    ranked = sort_counts(counts)
    if len(ranked) <= limit:
        return {
            "labels": [label for label, _ in ranked],
            "values": [count for _, count in ranked],
        }

    top = ranked[:limit]
    others = sum(count for _, count in ranked[limit:])
    return {
        "labels": [label for label, _ in top] + [OTHERS_LABEL],
        "values": [count for _, count in top] + [others],
    }


def merge_counts(pairs: Iterable[Tuple[Optional[str], int]]) -> Dict[str, int]:
    """Sum grouped (label, count) rows, folding missing labels into "Unknown"."""
    counter: Dict[str, int] = Counter()
    for label, count in pairs:
        counter[label_or_unknown(label)] += int(count or 0)
    return dict(counter)


def percentage_distribution(
    pairs: Iterable[Tuple[Optional[str], int]],
    key: str = "type",
) -> List[Dict[str, Any]]:
    """Grouped counts with each bucket's share of the total, largest first."""
    counts = merge_counts(pairs)
    total = sum(counts.values())
    return [
        {key: label, "count": count, "percentage": percentage(count, total)}
        for label, count in sort_counts(counts)
    ]


def daily_trend(dates: Iterable[DateLike], end: date, days: int) -> Dict[str, List]:
    """Rolling window of `days` days ending at `end`, one point per day labelled by weekday."""
    counts = Counter(as_date(value) for value in dates if value is not None)
    labels, values = [], []
    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)
        labels.append(WEEKDAY_LABELS[weekday_index(day)])
        values.append(counts.get(day, 0))
    return {"labels": labels, "values": values}
