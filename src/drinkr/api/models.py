"""Pydantic response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from drinkr.domain.achievements import UnlockedAchievement
from drinkr.domain.analytics import ActivityGrid, AnalyticsDashboard
from drinkr.domain.social import (
    CounterpartCount,
    FriendshipRow,
    FriendSuggestion,
    ProfileSummary,
    TrendingItem,
)
from drinkr.domain.versus import VersusStats
from drinkr.services.versus import VersusReport


class ApiModel(BaseModel):
    """Base model emitting camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(ApiModel):
    """Error payload."""

    error: str


class DailyEntryModel(ApiModel):
    """One day of the daily series."""

    date: str
    count: int
    types: list[str]
    hours: list[int]
    drink_ids: list[UUID]
    captions: list[str | None]


class AggregateStatsModel(ApiModel):
    """KPI card values."""

    total_drinks: int
    avg_per_day: float
    most_in_a_day: int
    most_common_type: str
    longest_streak: int
    days_since_last_drink: int


class TrendBucketModel(ApiModel):
    """Stacked bar for one bucket."""

    date: str
    label: str
    type_counts: dict[str, int]


class TypeTrendModel(ApiModel):
    """Type trend chart data."""

    types: list[str]
    buckets: list[TrendBucketModel]


class DayCountModel(ApiModel):
    """Drinks on one weekday."""

    day: str
    drinks: int


class TypeCountModel(ApiModel):
    """Drinks of one type."""

    name: str
    value: int


class ActivityDayModel(ApiModel):
    """Activity grid cell."""

    date: str
    count: int
    day_of_week: int
    week_index: int


class MonthLabelModel(ApiModel):
    """Activity grid month label."""

    month: str
    week_index: int


class ActivityGridModel(ApiModel):
    """Activity grid."""

    weeks: list[list[ActivityDayModel]]
    month_labels: list[MonthLabelModel]
    active_days: int

    @classmethod
    def from_domain(cls, grid: ActivityGrid) -> "ActivityGridModel":
        return cls(
            weeks=[
                [ActivityDayModel(**vars(day)) for day in week] for week in grid.weeks
            ],
            month_labels=[
                MonthLabelModel(**vars(label)) for label in grid.month_labels
            ],
            active_days=grid.active_days,
        )


class CheersStatsModel(ApiModel):
    """Cheers card values."""

    total_received: int
    total_given: int
    avg_per_post: float


class AnalyticsResponse(ApiModel):
    """Analytics page payload."""

    time_range: str
    start: datetime
    end: datetime
    series: list[DailyEntryModel]
    stats: AggregateStatsModel
    trend: TypeTrendModel
    day_of_week: list[DayCountModel]
    breakdown: list[TypeCountModel]
    activity: ActivityGridModel
    cheers: CheersStatsModel

    @classmethod
    def from_domain(cls, dashboard: AnalyticsDashboard) -> "AnalyticsResponse":
        return cls(
            time_range=dashboard.time_range.value,
            start=dashboard.window.start,
            end=dashboard.window.end,
            series=[
                DailyEntryModel(
                    date=day.date,
                    count=day.count,
                    types=[str(drink_type) for drink_type in day.types],
                    hours=day.hours,
                    drink_ids=day.drink_ids,
                    captions=day.captions,
                )
                for day in dashboard.series
            ],
            stats=AggregateStatsModel(**vars(dashboard.stats)),
            trend=TypeTrendModel(
                types=[str(drink_type) for drink_type in dashboard.trend.types],
                buckets=[
                    TrendBucketModel(
                        date=bucket.date,
                        label=bucket.label,
                        type_counts={
                            str(drink_type): count
                            for drink_type, count in bucket.type_counts.items()
                        },
                    )
                    for bucket in dashboard.trend.buckets
                ],
            ),
            day_of_week=[
                DayCountModel(day=day, drinks=drinks)
                for day, drinks in dashboard.day_of_week
            ],
            breakdown=[
                TypeCountModel(name=str(drink_type), value=count)
                for drink_type, count in dashboard.breakdown
            ],
            activity=ActivityGridModel.from_domain(dashboard.activity),
            cheers=CheersStatsModel(**vars(dashboard.cheers)),
        )


class VersusSideModel(ApiModel):
    """One side of the versus page."""

    id: UUID
    username: str
    display_name: str | None
    total_drinks: int
    cheers_received: int
    friend_count: int
    medal_count: int
    current_streak: int
    unique_types: int
    avg_per_day: float
    favorite_type: str | None
    favorite_count: int

    @classmethod
    def from_domain(
        cls, profile: ProfileSummary, stats: VersusStats
    ) -> "VersusSideModel":
        return cls(
            id=profile.id,
            username=profile.username,
            display_name=profile.display_name,
            total_drinks=stats.total_drinks,
            cheers_received=stats.cheers_received,
            friend_count=stats.friend_count,
            medal_count=stats.medal_count,
            current_streak=stats.current_streak,
            unique_types=stats.unique_types,
            avg_per_day=stats.avg_per_day,
            favorite_type=str(stats.favorite_type) if stats.favorite_type else None,
            favorite_count=stats.favorite_count,
        )


class ComparisonRowModel(ApiModel):
    """One compared metric."""

    key: str
    label: str
    left: float
    right: float
    winner: str


class VersusResponse(ApiModel):
    """Versus page payload."""

    time_range: str
    left: VersusSideModel
    right: VersusSideModel
    rows: list[ComparisonRowModel]
    left_wins: int
    right_wins: int

    @classmethod
    def from_domain(cls, report: VersusReport) -> "VersusResponse":
        return cls(
            time_range=report.time_range.value,
            left=VersusSideModel.from_domain(report.left_profile, report.left),
            right=VersusSideModel.from_domain(report.right_profile, report.right),
            rows=[
                ComparisonRowModel(
                    key=row.key,
                    label=row.label,
                    left=row.left,
                    right=row.right,
                    winner=row.winner.value,
                )
                for row in report.result.rows
            ],
            left_wins=report.result.left_wins,
            right_wins=report.result.right_wins,
        )


class SuggestionModel(ApiModel):
    """Suggested friend-of-friend."""

    user_id: UUID
    mutual_count: int

    @classmethod
    def from_domain(cls, suggestion: FriendSuggestion) -> "SuggestionModel":
        return cls(user_id=suggestion.user_id, mutual_count=suggestion.mutual_count)


class SuggestionsResponse(ApiModel):
    """Friend suggestions list."""

    items: list[SuggestionModel]


class PendingRequestModel(ApiModel):
    """Incoming friend request."""

    requester_id: UUID
    created_at: datetime | None

    @classmethod
    def from_domain(cls, row: FriendshipRow) -> "PendingRequestModel":
        return cls(requester_id=row.requester_id, created_at=row.created_at)


class PendingRequestsResponse(ApiModel):
    """Incoming friend requests list."""

    items: list[PendingRequestModel]


class CounterpartModel(ApiModel):
    """User with an interaction count."""

    user_id: UUID
    count: int

    @classmethod
    def from_domain(cls, counterpart: CounterpartCount) -> "CounterpartModel":
        return cls(user_id=counterpart.user_id, count=counterpart.count)


class FansResponse(ApiModel):
    """Top fans and most cheered friends."""

    top_fans: list[CounterpartModel]
    top_cheered: list[CounterpartModel]


class TrendingItemModel(ApiModel):
    """Trending drink."""

    drink_id: UUID | None
    name: str
    category: str
    count: int
    percent_change: int | None

    @classmethod
    def from_domain(cls, item: TrendingItem) -> "TrendingItemModel":
        return cls(**vars(item))


class TrendingResponse(ApiModel):
    """Trending drinks list."""

    items: list[TrendingItemModel]


class UnlockedAchievementModel(ApiModel):
    """Newly unlocked achievement."""

    id: UUID
    category: str
    name: str
    description: str
    difficulty: str
    icon: str
    unlocked_at: datetime

    @classmethod
    def from_domain(cls, unlocked: UnlockedAchievement) -> "UnlockedAchievementModel":
        achievement = unlocked.achievement
        return cls(
            id=achievement.id,
            category=achievement.category,
            name=achievement.name,
            description=achievement.description,
            difficulty=achievement.difficulty.value,
            icon=achievement.icon,
            unlocked_at=unlocked.unlocked_at,
        )


class UnlockedAchievementsResponse(ApiModel):
    """Achievements unlocked by a check."""

    items: list[UnlockedAchievementModel]
