"""Daily series building: group drink logs by local day and fill gaps."""

import logging
from collections.abc import Iterable
from datetime import tzinfo

from drinkr.domain.analytics import TimeRangeWindow
from drinkr.domain.logs import DailyEntry, DrinkLogEntry
from drinkr.services.time_ranges import to_local, to_local_day_key, window_days

logger = logging.getLogger(__name__)


def group_drink_logs(entries: Iterable[DrinkLogEntry], tz: tzinfo) -> list[DailyEntry]:
    """Group logs into one entry per local calendar day, sorted by date."""
    by_date: dict[str, DailyEntry] = {}
    for entry in entries:
        if entry.created_at is None:
            logger.warning("Skipping drink log %s with unparseable timestamp", entry.id)
            continue
        key = to_local_day_key(entry.created_at, tz)
        local = to_local(entry.created_at, tz)
        day = by_date.get(key)
        if day is None:
            day = DailyEntry(date=key)
        by_date[key] = DailyEntry(
            date=key,
            count=day.count + 1,
            types=[*day.types, entry.drink_type],
            hours=[*day.hours, local.hour],
            drink_ids=[*day.drink_ids, entry.id],
            captions=[*day.captions, entry.caption],
        )
    return [by_date[key] for key in sorted(by_date)]


def densify(
    entries: Iterable[DailyEntry], window: TimeRangeWindow
) -> list[DailyEntry]:
    """Return exactly one entry per day in the window, zero-filling gaps."""
    by_date = {entry.date: entry for entry in entries}
    series = []
    for day in window_days(window):
        key = day.isoformat()
        series.append(by_date.get(key) or DailyEntry(date=key))
    return series


def build_daily_series(
    entries: Iterable[DrinkLogEntry], window: TimeRangeWindow, tz: tzinfo
) -> list[DailyEntry]:
    """Group logs by local day and densify them over the window."""
    return densify(group_drink_logs(entries, tz), window)
