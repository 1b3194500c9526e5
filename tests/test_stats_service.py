"""Tests for stats service."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from drinkr.domain.analytics import TimeRange
from drinkr.domain.logs import DailyEntry, DrinkType
from drinkr.services.stats import (
    NO_FAVORITE,
    StatsService,
    compute_aggregate_stats,
    day_of_week_totals,
    days_since_last_drink,
    longest_streak,
    most_common_type,
    type_breakdown,
)
from tests.conftest import InMemoryCheersRepository, InMemoryDrinkLogRepository

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def _series(*counts: int) -> list[DailyEntry]:
    start = datetime(2026, 10, 1, tzinfo=UTC).date()
    return [
        DailyEntry(
            date=(start + timedelta(days=offset)).isoformat(),
            count=count,
            types=[DrinkType.BEER] * count,
        )
        for offset, count in enumerate(counts)
    ]


def test_longest_streak() -> None:
    assert longest_streak(_series(1, 1, 0, 1, 1, 1, 0)) == 3
    assert longest_streak(_series(0, 0)) == 0


def test_days_since_last_drink() -> None:
    assert days_since_last_drink(_series(1, 0, 0, 0)) == 3
    assert days_since_last_drink(_series(0, 0, 0, 0)) == 4
    assert days_since_last_drink(_series(0, 2)) == 0


def test_most_common_type_joins_ties() -> None:
    series = [
        DailyEntry(date="2026-10-01", count=2, types=[DrinkType.BEER, DrinkType.WINE]),
        DailyEntry(date="2026-10-02", count=2, types=[DrinkType.WINE, DrinkType.BEER]),
    ]
    assert most_common_type(series) == "Beer/Wine"
    assert most_common_type(_series(0, 0)) == NO_FAVORITE


def test_type_breakdown_orders_by_count() -> None:
    series = [
        DailyEntry(
            date="2026-10-01",
            count=4,
            types=[DrinkType.SHOT, DrinkType.WINE, DrinkType.WINE, DrinkType.BEER],
        ),
    ]
    assert type_breakdown(series) == [
        (DrinkType.WINE, 2),
        (DrinkType.SHOT, 1),
        (DrinkType.BEER, 1),
    ]


def test_aggregate_stats_on_empty_series() -> None:
    stats = compute_aggregate_stats([])

    assert stats.total_drinks == 0
    assert stats.avg_per_day == 0.0
    assert stats.most_in_a_day == 0
    assert stats.most_common_type == NO_FAVORITE
    assert stats.longest_streak == 0
    assert stats.days_since_last_drink == 0


def test_aggregate_stats() -> None:
    stats = compute_aggregate_stats(_series(2, 0, 3, 1))

    assert stats.total_drinks == 6
    assert stats.avg_per_day == 1.5
    assert stats.most_in_a_day == 3
    assert stats.most_common_type == "Beer"
    assert stats.longest_streak == 2
    assert stats.days_since_last_drink == 0


def test_day_of_week_totals_start_on_monday() -> None:
    # 2026-10-19 is a Monday.
    series = [
        DailyEntry(date="2026-10-19", count=2, types=[DrinkType.BEER] * 2),
        DailyEntry(date="2026-10-25", count=1, types=[DrinkType.BEER]),
    ]
    totals = day_of_week_totals(series)

    assert totals[0] == ("Mon", 2)
    assert totals[6] == ("Sun", 1)
    assert sum(count for _, count in totals) == 3


def test_get_dashboard_builds_every_section(
    stats_service: StatsService,
    log_repository: InMemoryDrinkLogRepository,
    cheers_repository: InMemoryCheersRepository,
) -> None:
    user_id = uuid4()
    fan_id = uuid4()
    friend_post = log_repository.add(uuid4(), NOW - timedelta(days=2))
    post = log_repository.add(user_id, NOW - timedelta(days=1), DrinkType.WINE)
    log_repository.add(user_id, NOW - timedelta(hours=1))
    log_repository.add(user_id, NOW - timedelta(days=90))
    cheers_repository.add(post, fan_id, NOW)
    cheers_repository.add(post, uuid4(), NOW)
    cheers_repository.add(friend_post, user_id, NOW - timedelta(days=1))

    dashboard = stats_service.get_dashboard(user_id, TimeRange.ONE_WEEK, "UTC", NOW)

    assert len(dashboard.series) == 7
    assert dashboard.stats.total_drinks == 2
    assert dashboard.trend.types == [DrinkType.WINE, DrinkType.BEER]
    assert len(dashboard.trend.buckets) == 7
    assert dashboard.activity.active_days == 2
    assert dashboard.cheers.total_received == 2
    assert dashboard.cheers.total_given == 1
    assert dashboard.cheers.avg_per_post == 1.0


def test_get_dashboard_is_cached_until_logs_change(
    stats_service: StatsService, log_repository: InMemoryDrinkLogRepository
) -> None:
    user_id = uuid4()
    log_repository.add(user_id, NOW - timedelta(days=1))

    first = stats_service.get_dashboard(user_id, TimeRange.ONE_MONTH, "UTC", NOW)
    second = stats_service.get_dashboard(user_id, TimeRange.ONE_MONTH, "UTC", NOW)
    log_repository.add(user_id, NOW - timedelta(hours=2))
    third = stats_service.get_dashboard(user_id, TimeRange.ONE_MONTH, "UTC", NOW)

    assert second is first
    assert third is not first
    assert third.stats.total_drinks == 2


def test_get_series_uses_viewer_timezone(
    stats_service: StatsService, log_repository: InMemoryDrinkLogRepository
) -> None:
    user_id = uuid4()
    log_repository.add(user_id, datetime(2026, 10, 19, 3, 0, tzinfo=UTC))

    utc_series = stats_service.get_series(user_id, TimeRange.ONE_WEEK, "UTC", NOW)
    la_series = stats_service.get_series(
        user_id, TimeRange.ONE_WEEK, "America/Los_Angeles", NOW
    )

    assert utc_series[-1].count == 1
    assert la_series[-2].date == "2026-10-18"
    assert la_series[-2].count == 1
