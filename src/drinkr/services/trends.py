"""Bucketed drink-type trends for stacked bar charts."""

from collections import Counter

from drinkr.domain.analytics import TimeRange, TrendBucket, TypeTrend
from drinkr.domain.logs import DailyEntry, DrinkType
from drinkr.services.time_ranges import short_date_label

_BUCKET_SIZES = {
    TimeRange.ONE_WEEK: 1,
    TimeRange.ONE_MONTH: 7,
    TimeRange.THREE_MONTHS: 14,
}
DEFAULT_BUCKET_SIZE = 30


def bucket_size_for(time_range: TimeRange) -> int:
    """Return how many days each trend bucket spans."""
    return _BUCKET_SIZES.get(time_range, DEFAULT_BUCKET_SIZE)


def rank_types(series: list[DailyEntry]) -> list[DrinkType]:
    """Rank types by total count across the series, most logged first."""
    counts = Counter(drink_type for day in series for drink_type in day.types)
    return [drink_type for drink_type, _ in counts.most_common()]


def build_type_trend(series: list[DailyEntry], time_range: TimeRange) -> TypeTrend:
    """Partition the series into fixed-size buckets of per-type counts.

    A full final bucket is always kept. A trailing partial bucket is kept
    only when it holds at least one drink. Every bucket lists the globally
    ranked types in the same order.
    """
    size = bucket_size_for(time_range)
    ranking = rank_types(series)
    buckets: list[TrendBucket] = []
    current: Counter[DrinkType] | None = None
    start = ""
    label = ""
    days_in_bucket = 0

    for entry in series:
        if current is None or days_in_bucket >= size:
            if current is not None:
                buckets.append(_make_bucket(start, label, current, ranking))
            start = entry.date
            label = (
                short_date_label(entry.date) if size == 1 else f"W{len(buckets) + 1}"
            )
            current = Counter()
            days_in_bucket = 0
        current.update(entry.types)
        days_in_bucket += 1

    if current is not None and (days_in_bucket >= size or current.total() > 0):
        buckets.append(_make_bucket(start, label, current, ranking))
    return TypeTrend(types=ranking, buckets=buckets)


def _make_bucket(
    start: str, label: str, counts: Counter[DrinkType], ranking: list[DrinkType]
) -> TrendBucket:
    return TrendBucket(
        date=start,
        label=label,
        type_counts={drink_type: counts[drink_type] for drink_type in ranking},
    )
