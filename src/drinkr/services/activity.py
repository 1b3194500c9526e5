"""Activity grid (one cell per day, one column per week)."""

from datetime import datetime, timedelta, tzinfo
from itertools import groupby

from drinkr.domain.analytics import ActivityDay, ActivityGrid, MonthLabel, TimeRange
from drinkr.domain.logs import DailyEntry
from drinkr.services.time_ranges import MONTH_NAMES, resolve_time_range

MONDAY = 0


def build_activity_grid(
    series: list[DailyEntry], time_range: TimeRange, now: datetime, tz: tzinfo
) -> ActivityGrid:
    """Lay the series out as Monday-first week columns ending today.

    Every range except 1W starts on the Monday on or before the range start,
    so the first column is always a full week.
    """
    window = resolve_time_range(time_range, now, tz)
    start = window.start.date()
    if time_range != TimeRange.ONE_WEEK:
        start -= timedelta(days=start.weekday())
    today = window.end.date()
    counts = {entry.date: entry.count for entry in series}

    days: list[ActivityDay] = []
    week_index = 0
    current = start
    while current <= today:
        key = current.isoformat()
        days.append(
            ActivityDay(
                date=key,
                count=counts.get(key, 0),
                day_of_week=current.weekday(),
                week_index=week_index,
            )
        )
        current += timedelta(days=1)
        if current.weekday() == MONDAY:
            week_index += 1

    weeks = [list(group) for _, group in groupby(days, key=lambda d: d.week_index)]
    return ActivityGrid(
        days=days,
        weeks=weeks,
        month_labels=_month_labels(days),
        active_days=sum(1 for day in days if day.count > 0),
    )


def _month_labels(days: list[ActivityDay]) -> list[MonthLabel]:
    week_indices: dict[str, list[int]] = {}
    for day in days:
        month_key = day.date[:7]
        indices = week_indices.setdefault(month_key, [])
        if day.week_index not in indices:
            indices.append(day.week_index)
    labels = []
    for month_key, indices in week_indices.items():
        month = int(month_key[5:7])
        labels.append(
            MonthLabel(
                month=MONTH_NAMES[month - 1], week_index=indices[len(indices) // 2]
            )
        )
    return labels
