"""Domain models for analytics results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from drinkr.domain.logs import DailyEntry, DrinkType


class TimeRange(StrEnum):
    """Symbolic time ranges selectable on the analytics pages."""

    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    YEAR_TO_DATE = "YTD"


@dataclass(frozen=True)
class TimeRangeWindow:
    """Concrete window: start at local midnight (inclusive), end at now."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class AggregateStats:
    """Headline numbers for a daily series."""

    total_drinks: int
    avg_per_day: float
    most_in_a_day: int
    most_common_type: str
    longest_streak: int
    days_since_last_drink: int


@dataclass(frozen=True)
class TrendBucket:
    """Per-type drink counts for a run of consecutive days."""

    date: str
    label: str
    type_counts: dict[DrinkType, int]

    @property
    def total(self) -> int:
        return sum(self.type_counts.values())


@dataclass(frozen=True)
class TypeTrend:
    """Stacked trend buckets plus the global stacking order."""

    types: list[DrinkType]
    buckets: list[TrendBucket]


@dataclass(frozen=True)
class ActivityDay:
    """One cell of the activity grid."""

    date: str
    count: int
    day_of_week: int
    week_index: int


@dataclass(frozen=True)
class MonthLabel:
    """Month label anchored to a grid column."""

    month: str
    week_index: int


@dataclass(frozen=True)
class ActivityGrid:
    """Contribution-style grid of daily drink counts."""

    days: list[ActivityDay]
    weeks: list[list[ActivityDay]]
    month_labels: list[MonthLabel]
    active_days: int


@dataclass(frozen=True)
class CheersStats:
    """Cheers received and given within a time range."""

    total_received: int
    total_given: int
    avg_per_post: float


@dataclass
class AnalyticsDashboard:
    """Everything the analytics page renders for one user and range."""

    time_range: TimeRange
    window: TimeRangeWindow
    series: list[DailyEntry]
    stats: AggregateStats
    trend: TypeTrend
    day_of_week: list[tuple[str, int]]
    breakdown: list[tuple[DrinkType, int]]
    activity: ActivityGrid
    cheers: CheersStats = field(
        default_factory=lambda: CheersStats(
            total_received=0, total_given=0, avg_per_post=0.0
        )
    )
