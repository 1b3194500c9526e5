"""Lifetime user stats and achievement unlock rules."""

import logging
from collections import Counter, defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from itertools import pairwise
from typing import Protocol, TypeVar
from uuid import UUID
from zoneinfo import ZoneInfo

from drinkr.domain.achievements import Achievement, UnlockedAchievement, UserStats
from drinkr.domain.logs import DrinkLogEntry, DrinkType
from drinkr.services.profiles import ProfileService
from drinkr.services.social import SocialService
from drinkr.services.stats import DrinkLogRepository
from drinkr.services.time_ranges import MONTHS_PER_YEAR, to_local, to_local_day_key

logger = logging.getLogger(__name__)

PERFECT_WEEK_DAYS = 7
PERFECT_MONTH_DAYS = 30
SAME_TIME_TOLERANCE_MINUTES = 30
LUCKY_DAY = 7
LUCKY_COUNT = 7
NEW_YEAR_MINUTES = 5
SATURDAY = 5
SUNDAY = 6
WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": SATURDAY,
    "sunday": SUNDAY,
}
TIME_OF_DAY_HOURS: dict[str, tuple[int, int]] = {
    "before_10": (0, 10),
    "afternoon": (14, 17),
    "happy_hour": (17, 19),
    "after_midnight": (0, 5),
    "after_3am": (3, 6),
}
BRUNCH_HOURS = (10, 12)

T = TypeVar("T")
Check = Callable[[str, UserStats], bool]


class AchievementRepository(Protocol):
    """Persistence interface for the achievement catalog and unlocks."""

    def list_achievements(self) -> list[Achievement]:
        """Return every achievement in the catalog."""

    def list_unlocked_ids(self, user_id: UUID) -> set[UUID]:
        """Return ids of achievements the user already unlocked."""

    def unlock(self, user_id: UUID, achievement_id: UUID) -> None:
        """Record that the user unlocked an achievement."""

    def get_account_created_at(self, user_id: UUID) -> datetime | None:
        """Return when the user's profile was created."""


def build_user_stats(
    logs: Iterable[DrinkLogEntry],
    tz: tzinfo,
    now: datetime,
    *,
    account_created_at: datetime | None = None,
    friend_count: int = 0,
    cheers_received: int = 0,
) -> UserStats:
    """Tally a user's lifetime logs by local calendar day in `tz`.

    Logs without a timestamp are left out of every count.
    """
    by_type: Counter[str] = Counter()
    by_day: Counter[str] = Counter()
    times: list[datetime] = []
    for log in logs:
        if log.created_at is None:
            continue
        by_type[str(log.drink_type).lower()] += 1
        by_day[to_local_day_key(log.created_at, tz)] += 1
        times.append(to_local(log.created_at, tz))
    times.sort()

    days = [date.fromisoformat(key) for key in sorted(by_day)]
    current, longest = day_streaks(days, to_local(now, tz).date())
    return UserStats(
        total_drinks=len(times),
        unique_types=frozenset(by_type),
        max_in_day=max(by_day.values(), default=0),
        current_streak=current,
        longest_streak=longest,
        friend_count=friend_count,
        account_age_days=(
            (now - account_created_at).days if account_created_at else 0
        ),
        drinks_by_type=dict(by_type),
        drinks_by_day=dict(by_day),
        drink_times=times,
        first_drink_at=times[0] if times else None,
        last_drink_at=times[-1] if times else None,
        account_created_at=(
            to_local(account_created_at, tz) if account_created_at else None
        ),
        weekly_streak_count=weekly_streak_count(days),
        monthly_streak_count=monthly_streak_count(days),
        days_inactive_before=longest_gap_days(times),
        cheers_received=cheers_received,
        share_count=len(times),
    )


def day_streaks(days: list[date], today: date) -> tuple[int, int]:
    """Return (current, longest) runs of consecutive days.

    The current run counts only when the last active day is today or
    yesterday.
    """
    longest = _longest_run(days, _next_day)
    current = 0
    if days and (today - days[-1]).days in (0, 1):
        current = 1
        for later, earlier in pairwise(reversed(days)):
            if (later - earlier).days != 1:
                break
            current += 1
    return current, max(longest, current)


def weekly_streak_count(days: list[date]) -> int:
    """Return the longest run of consecutive Sunday-started weeks with drinks."""
    weeks = sorted({day - timedelta(days=(day.weekday() + 1) % 7) for day in days})
    return _longest_run(weeks, _next_week)


def monthly_streak_count(days: list[date]) -> int:
    """Return the longest run of consecutive calendar months with drinks."""
    months = sorted({day.year * MONTHS_PER_YEAR + day.month for day in days})
    return _longest_run(months, lambda previous, current: current - previous == 1)


def longest_gap_days(times: list[datetime]) -> int:
    """Return the longest break between two consecutive drinks in whole days."""
    return max(
        ((current - previous).days for previous, current in pairwise(times)),
        default=0,
    )


def check_requirement(achievement: Achievement, stats: UserStats) -> bool:
    """Return whether the stats meet the achievement's requirement.

    Unknown requirement types and malformed values never unlock.
    """
    check = _CHECKS.get(achievement.requirement_type)
    if check is None:
        return False
    return check(achievement.requirement_value.strip().lower(), stats)


@dataclass
class AchievementService:
    """Service evaluating and recording achievement unlocks."""

    repository: AchievementRepository
    log_repository: DrinkLogRepository
    profile_service: ProfileService
    social_service: SocialService

    def get_user_stats(self, user_id: UUID, now: datetime | None = None) -> UserStats:
        """Build lifetime stats in the user's own timezone."""
        current = now or datetime.now(tz=UTC)
        profile = self.profile_service.get_profile(user_id)
        tz = ZoneInfo(self.profile_service.get_timezone(user_id))
        return build_user_stats(
            self.log_repository.list_drink_logs(user_id),
            tz,
            current,
            account_created_at=self.repository.get_account_created_at(user_id),
            friend_count=profile.friend_count,
            cheers_received=self.social_service.count_cheers_received(user_id),
        )

    def check_achievements(
        self, user_id: UUID, now: datetime | None = None
    ) -> list[UnlockedAchievement]:
        """Unlock every achievement the user newly qualifies for."""
        current = now or datetime.now(tz=UTC)
        unlocked_ids = self.repository.list_unlocked_ids(user_id)
        stats = self.get_user_stats(user_id, current)
        unlocked = []
        for achievement in self.repository.list_achievements():
            if achievement.id in unlocked_ids:
                continue
            if not check_requirement(achievement, stats):
                continue
            self.repository.unlock(user_id, achievement.id)
            unlocked.append(UnlockedAchievement(achievement, unlocked_at=current))
        if unlocked:
            logger.info("User %s unlocked %d achievements", user_id, len(unlocked))
        return unlocked


def _longest_run(items: list[T], follows: Callable[[T, T], bool]) -> int:
    if not items:
        return 0
    longest = running = 1
    for previous, current in pairwise(items):
        running = running + 1 if follows(previous, current) else 1
        longest = max(longest, running)
    return longest


def _next_day(previous: date, current: date) -> bool:
    return (current - previous).days == 1


def _next_week(previous: date, current: date) -> bool:
    return (current - previous).days == 7


def _threshold(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def _at_least(metric: Callable[[UserStats], int]) -> Check:
    def check(value: str, stats: UserStats) -> bool:
        threshold = _threshold(value)
        return threshold is not None and metric(stats) >= threshold

    return check


def _unique_types(value: str, stats: UserStats) -> bool:
    threshold = len(DrinkType) if value == "all" else _threshold(value)
    return threshold is not None and len(stats.unique_types) >= threshold


def _specific_drink_count(value: str, stats: UserStats) -> bool:
    drink_type, _, raw_count = value.partition(":")
    threshold = _threshold(raw_count)
    if threshold is None:
        return False
    return stats.drinks_by_type.get(drink_type, 0) >= threshold


def _same_type_count(value: str, stats: UserStats) -> bool:
    threshold = _threshold(value)
    if threshold is None:
        return False
    return any(count >= threshold for count in stats.drinks_by_type.values())


def _time_of_day(value: str, stats: UserStats) -> bool:
    if value == "brunch":
        start, end = BRUNCH_HOURS
        return any(
            time.weekday() in (SATURDAY, SUNDAY) and start <= time.hour < end
            for time in stats.drink_times
        )
    hours = TIME_OF_DAY_HOURS.get(value)
    if hours is None:
        return False
    start, end = hours
    return any(start <= time.hour < end for time in stats.drink_times)


def _day_of_week(value: str, stats: UserStats) -> bool:
    weekday = WEEKDAYS.get(value)
    return weekday is not None and any(
        time.weekday() == weekday for time in stats.drink_times
    )


def _thanksgiving(year: int) -> date:
    first = date(year, 11, 1)
    return first + timedelta(days=(3 - first.weekday()) % 7 + 21)


def _specific_date(value: str, stats: UserStats) -> bool:
    if value == "thanksgiving":
        return any(
            time.date() == _thanksgiving(time.year) for time in stats.drink_times
        )
    return any(time.strftime("%m-%d") == value for time in stats.drink_times)


def _weekend_both(_: str, stats: UserStats) -> bool:
    weekends: dict[date, set[int]] = defaultdict(set)
    for time in stats.drink_times:
        if time.weekday() in (SATURDAY, SUNDAY):
            sunday = time.date() + timedelta(days=SUNDAY - time.weekday())
            weekends[sunday].add(time.weekday())
    return any(len(days) == 2 for days in weekends.values())


def _first_day_log(_: str, stats: UserStats) -> bool:
    if stats.first_drink_at is None or stats.account_created_at is None:
        return False
    return stats.first_drink_at.date() == stats.account_created_at.date()


def _minutes_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 60


def _time_between(value: str, stats: UserStats) -> bool:
    times = stats.drink_times
    if value == "exact_60":
        return any(
            55 <= _minutes_between(previous, current) <= 65
            for previous, current in pairwise(times)
        )
    if value == "30":
        return any(
            _minutes_between(previous, current) <= 30
            for previous, current in pairwise(times)
        )
    if value == "60":
        # Three drinks inside one hour.
        return any(
            _minutes_between(times[index - 2], times[index]) <= 60
            for index in range(2, len(times))
        )
    return False


def _same_time_streak(value: str, stats: UserStats) -> bool:
    threshold = _threshold(value)
    if threshold is None or threshold < 1 or len(stats.drink_times) < threshold:
        return False
    first_by_day: dict[date, datetime] = {}
    for time in stats.drink_times:
        first_by_day.setdefault(time.date(), time)
    days = sorted(first_by_day)
    for index in range(len(days) - threshold + 1):
        window = days[index : index + threshold]
        base = _minute_of_day(first_by_day[window[0]])
        consecutive = all(
            _next_day(previous, current) for previous, current in pairwise(window)
        )
        if consecutive and all(
            abs(_minute_of_day(first_by_day[day]) - base)
            <= SAME_TIME_TOLERANCE_MINUTES
            for day in window
        ):
            return True
    return False


def _minute_of_day(time: datetime) -> int:
    return time.hour * 60 + time.minute


def _same_day_streak(value: str, stats: UserStats) -> bool:
    threshold = _threshold(value)
    if threshold is None:
        return False
    by_weekday: dict[int, set[date]] = defaultdict(set)
    for time in stats.drink_times:
        by_weekday[time.weekday()].add(time.date())
    return any(
        _longest_run(sorted(dates), _next_week) >= threshold
        for dates in by_weekday.values()
    )


def _ascending_days(value: str, stats: UserStats) -> bool:
    threshold = _threshold(value)
    if threshold is None or threshold < 1:
        return False
    keys = stats.days_with_drinks
    days = [date.fromisoformat(key) for key in keys]
    counts = [stats.drinks_by_day[key] for key in keys]
    for start in range(len(days) - threshold + 1):
        if all(
            _next_day(days[index - 1], days[index])
            and counts[index] > counts[index - 1]
            for index in range(start + 1, start + threshold)
        ):
            return True
    return False


def _exact_time(_: str, stats: UserStats) -> bool:
    return any(
        time.month == 1
        and time.day == 1
        and time.hour == 0
        and time.minute <= NEW_YEAR_MINUTES
        for time in stats.drink_times
    )


def _lucky_seven(_: str, stats: UserStats) -> bool:
    return any(
        date.fromisoformat(key).day == LUCKY_DAY and count >= LUCKY_COUNT
        for key, count in stats.drinks_by_day.items()
    )


def _palindrome_time(_: str, stats: UserStats) -> bool:
    for time in stats.drink_times:
        digits = time.strftime("%H%M")
        if digits == digits[::-1]:
            return True
    return False


_CHECKS: dict[str, Check] = {
    "total_drinks": _at_least(lambda stats: stats.total_drinks),
    "unique_types": _unique_types,
    "max_in_day": _at_least(lambda stats: stats.max_in_day),
    "streak_days": _at_least(lambda stats: stats.longest_streak),
    "friend_count": _at_least(lambda stats: stats.friend_count),
    "account_age": _at_least(lambda stats: stats.account_age_days),
    "specific_drink_count": _specific_drink_count,
    "same_type_count": _same_type_count,
    "time_of_day": _time_of_day,
    "day_of_week": _day_of_week,
    "specific_date": _specific_date,
    "weekend_both": _weekend_both,
    "first_day_log": _first_day_log,
    "days_inactive_before": _at_least(lambda stats: stats.days_inactive_before),
    "weekly_streak": _at_least(lambda stats: stats.weekly_streak_count),
    "monthly_streak": _at_least(lambda stats: stats.monthly_streak_count),
    "perfect_week": lambda _, stats: stats.longest_streak >= PERFECT_WEEK_DAYS,
    "perfect_month": lambda _, stats: stats.longest_streak >= PERFECT_MONTH_DAYS,
    "time_between": _time_between,
    "same_time_streak": _same_time_streak,
    "same_day_streak": _same_day_streak,
    "ascending_days": _ascending_days,
    "share_count": _at_least(lambda stats: stats.share_count),
    "reactions_received": _at_least(lambda stats: stats.cheers_received),
    "exact_time": _exact_time,
    "lucky_seven": _lucky_seven,
    "palindrome_time": _palindrome_time,
}
