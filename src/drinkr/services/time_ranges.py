"""Local calendar-day keys and time range resolution."""

from collections.abc import Iterator
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from drinkr.domain.analytics import TimeRange, TimeRangeWindow
from drinkr.domain.errors import InvalidTimeRangeError

MONTHS_PER_YEAR = 12
WEEK_DAYS_BACK = 6
MONTH_NAMES = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_MONTHS_BACK = {
    TimeRange.ONE_MONTH: 1,
    TimeRange.THREE_MONTHS: 3,
    TimeRange.SIX_MONTHS: 6,
    TimeRange.ONE_YEAR: MONTHS_PER_YEAR,
}


def to_local_day_key(timestamp: datetime, tz: tzinfo) -> str:
    """Return the YYYY-MM-DD key of the timestamp's calendar day in `tz`.

    Naive timestamps are treated as UTC instants, which is how the backend
    stores them.
    """
    return to_local(timestamp, tz).date().isoformat()


def from_local_day_key(key: str, tz: tzinfo) -> datetime:
    """Return local midnight in `tz` for a YYYY-MM-DD key."""
    year, month, day = (int(part) for part in key.split("-"))
    return datetime(year, month, day, tzinfo=tz)


def to_local(timestamp: datetime, tz: tzinfo) -> datetime:
    """Convert a timestamp to wall-clock time in `tz`."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz)


def parse_time_range(raw: str) -> TimeRange:
    """Parse a time range tag such as ``1M``."""
    try:
        return TimeRange(raw)
    except ValueError:
        raise InvalidTimeRangeError(f"Unknown time range: {raw!r}") from None


def resolve_time_range(
    time_range: TimeRange, now: datetime, tz: tzinfo
) -> TimeRangeWindow:
    """Map a symbolic range to a concrete window ending at `now`."""
    local_now = to_local(now, tz)
    today = local_now.date()
    if time_range == TimeRange.ONE_WEEK:
        start_day = today - timedelta(days=WEEK_DAYS_BACK)
    elif time_range == TimeRange.YEAR_TO_DATE:
        start_day = date(today.year, 1, 1)
    else:
        start_day = shift_months(today, -_MONTHS_BACK[time_range])
    start = datetime.combine(start_day, time.min, tzinfo=tz)
    return TimeRangeWindow(start=start, end=local_now)


def shift_months(day: date, months: int) -> date:
    """Move `day` by whole calendar months, keeping the day-of-month.

    A day-of-month that does not exist in the target month overflows into
    the next one (March 31 minus one month is March 3 in a common year).
    """
    month_index = day.year * MONTHS_PER_YEAR + day.month - 1 + months
    year, month_zero = divmod(month_index, MONTHS_PER_YEAR)
    return date(year, month_zero + 1, 1) + timedelta(days=day.day - 1)


def short_date_label(key: str) -> str:
    """Format a day key as ``Oct 19``."""
    day = date.fromisoformat(key)
    return f"{MONTH_NAMES[day.month - 1]} {day.day}"


def window_days(window: TimeRangeWindow) -> Iterator[date]:
    """Yield every local calendar day from window start to end inclusive."""
    current = window.start.date()
    last = window.end.date()
    while current <= last:
        yield current
        current += timedelta(days=1)
