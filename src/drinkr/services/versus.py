"""Head-to-head comparison of two users' stats."""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from drinkr.domain.analytics import TimeRange
from drinkr.domain.logs import DailyEntry
from drinkr.domain.social import ProfileSummary
from drinkr.domain.versus import ComparisonResult, ComparisonRow, VersusStats, Winner
from drinkr.services.profiles import ProfileService
from drinkr.services.social import SocialService
from drinkr.services.stats import StatsService, compute_aggregate_stats

logger = logging.getLogger(__name__)

SCORED_METRICS: tuple[tuple[str, str], ...] = (
    ("total_drinks", "Total Drinks"),
    ("cheers_received", "Cheers Received"),
    ("friend_count", "Friends"),
    ("medal_count", "Medals"),
    ("current_streak", "Streak"),
    ("unique_types", "Drink Types"),
    ("avg_per_day", "Avg / Day"),
)


def current_streak(series: list[DailyEntry]) -> int:
    """Count consecutive drinking days ending today.

    A day without drinks today does not break the streak yet; counting then
    starts from yesterday.
    """
    days = series[:-1] if series and series[-1].count == 0 else series
    streak = 0
    for day in reversed(days):
        if day.count == 0:
            break
        streak += 1
    return streak


def compute_versus_stats(
    series: list[DailyEntry],
    *,
    cheers_received: int = 0,
    friend_count: int = 0,
    medal_count: int = 0,
) -> VersusStats:
    """Build one side's stat bundle from a densified series."""
    aggregate = compute_aggregate_stats(series)
    counts = Counter(drink_type for day in series for drink_type in day.types)
    favorite = counts.most_common(1)
    return VersusStats(
        total_drinks=aggregate.total_drinks,
        cheers_received=cheers_received,
        friend_count=friend_count,
        medal_count=medal_count,
        current_streak=current_streak(series),
        unique_types=len(counts),
        avg_per_day=aggregate.avg_per_day,
        favorite_type=favorite[0][0] if favorite else None,
        favorite_count=favorite[0][1] if favorite else 0,
    )


def compare_stats(left: VersusStats, right: VersusStats) -> ComparisonResult:
    """Compare metric by metric; equal values are ties and score for nobody."""
    rows = []
    left_wins = 0
    right_wins = 0
    for key, label in SCORED_METRICS:
        left_value = getattr(left, key)
        right_value = getattr(right, key)
        if left_value > right_value:
            winner = Winner.LEFT
            left_wins += 1
        elif right_value > left_value:
            winner = Winner.RIGHT
            right_wins += 1
        else:
            winner = Winner.TIE
        rows.append(
            ComparisonRow(
                key=key,
                label=label,
                left=left_value,
                right=right_value,
                winner=winner,
            )
        )
    return ComparisonResult(
        rows=rows,
        left_wins=left_wins,
        right_wins=right_wins,
        left_favorite=left.favorite_type,
        right_favorite=right.favorite_type,
    )


@dataclass(frozen=True)
class VersusReport:
    """Both sides of a versus page."""

    time_range: TimeRange
    left_profile: ProfileSummary
    right_profile: ProfileSummary
    left: VersusStats
    right: VersusStats
    result: ComparisonResult


@dataclass
class VersusService:
    """Service composing two independent stat runs into a comparison."""

    stats_service: StatsService
    social_service: SocialService
    profile_service: ProfileService

    def compare(
        self,
        viewer_id: UUID,
        opponent_username: str,
        time_range: TimeRange,
        now: datetime | None = None,
    ) -> VersusReport:
        """Compare the viewer against a friend over the same window."""
        current = now or datetime.now(tz=UTC)
        viewer = self.profile_service.get_profile(viewer_id)
        opponent = self.profile_service.get_by_username(opponent_username)
        self.social_service.ensure_friends(viewer.id, opponent.id)
        timezone_name = self.profile_service.get_timezone(viewer.id)

        left = self._side_stats(viewer, time_range, timezone_name, current)
        right = self._side_stats(opponent, time_range, timezone_name, current)
        result = compare_stats(left, right)
        logger.info(
            "Versus %s vs %s (%s): %d-%d",
            viewer.username,
            opponent.username,
            time_range.value,
            result.left_wins,
            result.right_wins,
        )
        return VersusReport(
            time_range=time_range,
            left_profile=viewer,
            right_profile=opponent,
            left=left,
            right=right,
            result=result,
        )

    def _side_stats(
        self,
        profile: ProfileSummary,
        time_range: TimeRange,
        timezone_name: str,
        now: datetime,
    ) -> VersusStats:
        series = self.stats_service.get_series(
            profile.id, time_range, timezone_name, now
        )
        return compute_versus_stats(
            series,
            cheers_received=self.social_service.count_cheers_received(profile.id),
            friend_count=profile.friend_count,
            medal_count=self.profile_service.count_medals(profile.id),
        )
