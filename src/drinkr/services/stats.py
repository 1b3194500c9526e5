"""Statistics service for drink logs."""

import hashlib
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from drinkr.domain.analytics import AggregateStats, AnalyticsDashboard, TimeRange
from drinkr.domain.logs import DailyEntry, DrinkLogEntry, DrinkType
from drinkr.services.activity import build_activity_grid
from drinkr.services.cache import Cache
from drinkr.services.series import build_daily_series
from drinkr.services.social import CheersRepository, cheers_stats
from drinkr.services.time_ranges import resolve_time_range
from drinkr.services.trends import build_type_trend

logger = logging.getLogger(__name__)

NO_FAVORITE = "N/A"
DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class DrinkLogRepository(Protocol):
    """Persistence interface for drink logs."""

    def list_drink_logs(self, user_id: UUID) -> list[DrinkLogEntry]:
        """Return all drink logs for a user, oldest first."""

    def list_logs_since(self, since: datetime) -> list[DrinkLogEntry]:
        """Return everyone's drink logs created at or after `since`."""

    def get_drink_names(self, drink_ids: list[UUID]) -> dict[UUID, tuple[str, str]]:
        """Return catalog (name, category) pairs keyed by drink id."""


def type_breakdown(series: list[DailyEntry]) -> list[tuple[DrinkType, int]]:
    """Return (type, count) pairs by count descending, ties in encounter order."""
    return Counter(
        drink_type for day in series for drink_type in day.types
    ).most_common()


def most_common_type(series: list[DailyEntry]) -> str:
    """Return the most logged type, joining ties with a slash."""
    ranked = type_breakdown(series)
    if not ranked:
        return NO_FAVORITE
    top_count = ranked[0][1]
    return "/".join(drink_type for drink_type, count in ranked if count == top_count)


def longest_streak(series: list[DailyEntry]) -> int:
    """Return the longest run of consecutive days with at least one drink."""
    longest = 0
    running = 0
    for day in series:
        if day.count > 0:
            running += 1
            longest = max(longest, running)
        else:
            running = 0
    return longest


def days_since_last_drink(series: list[DailyEntry]) -> int:
    """Count trailing zero days; saturates at the series length."""
    days = 0
    for day in reversed(series):
        if day.count > 0:
            return days
        days += 1
    return len(series)


def compute_aggregate_stats(series: list[DailyEntry]) -> AggregateStats:
    """Compute headline stats for a densified daily series."""
    total = sum(day.count for day in series)
    return AggregateStats(
        total_drinks=total,
        avg_per_day=total / len(series) if series else 0.0,
        most_in_a_day=max((day.count for day in series), default=0),
        most_common_type=most_common_type(series),
        longest_streak=longest_streak(series),
        days_since_last_drink=days_since_last_drink(series),
    )


def day_of_week_totals(series: list[DailyEntry]) -> list[tuple[str, int]]:
    """Sum drinks per weekday, Monday first."""
    counts = [0] * len(DAY_NAMES)
    for day in series:
        if day.count > 0:
            counts[date.fromisoformat(day.date).weekday()] += day.count
    return list(zip(DAY_NAMES, counts, strict=True))


@dataclass
class StatsService:
    """Service computing the analytics dashboard for a user."""

    repository: DrinkLogRepository
    cheers_repository: CheersRepository
    cache: Cache
    cache_ttl_seconds: int = 60

    def get_dashboard(
        self,
        user_id: UUID,
        time_range: TimeRange,
        timezone_name: str,
        now: datetime | None = None,
    ) -> AnalyticsDashboard:
        """Return the dashboard for a user's logs in the viewer's timezone."""
        tz = ZoneInfo(timezone_name)
        current = now or datetime.now(tz=UTC)
        logs = self.repository.list_drink_logs(user_id)
        window = resolve_time_range(time_range, current, tz)
        cache_key = ":".join(
            (
                "dashboard",
                str(user_id),
                time_range.value,
                timezone_name,
                window.end.date().isoformat(),
                _fingerprint(logs),
            )
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, AnalyticsDashboard):
            return cached

        series = build_daily_series(logs, window, tz)
        dashboard = AnalyticsDashboard(
            time_range=time_range,
            window=window,
            series=series,
            stats=compute_aggregate_stats(series),
            trend=build_type_trend(series, time_range),
            day_of_week=day_of_week_totals(series),
            breakdown=type_breakdown(series),
            activity=build_activity_grid(series, time_range, current, tz),
        )
        drink_ids = [drink_id for day in series for drink_id in day.drink_ids]
        dashboard.cheers = cheers_stats(
            series,
            received=self.cheers_repository.list_received(drink_ids)
            if drink_ids
            else [],
            given=self.cheers_repository.list_given(user_id),
            range_start=window.start,
        )
        logger.info(
            "Computed %s dashboard for %s over %d days",
            time_range.value,
            user_id,
            len(series),
        )
        self.cache.set(cache_key, dashboard, self.cache_ttl_seconds)
        return dashboard

    def get_series(
        self,
        user_id: UUID,
        time_range: TimeRange,
        timezone_name: str,
        now: datetime | None = None,
    ) -> list[DailyEntry]:
        """Return the densified daily series for a user."""
        tz = ZoneInfo(timezone_name)
        window = resolve_time_range(time_range, now or datetime.now(tz=UTC), tz)
        return build_daily_series(self.repository.list_drink_logs(user_id), window, tz)


def _fingerprint(logs: list[DrinkLogEntry]) -> str:
    digest = hashlib.sha1(usedforsecurity=False)
    for log in logs:
        created = log.created_at.isoformat() if log.created_at else "-"
        digest.update(f"{log.id}|{log.drink_type}|{created};".encode())
    return digest.hexdigest()
