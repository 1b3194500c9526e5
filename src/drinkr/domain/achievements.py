"""Domain models for achievements and the per-user stats they are checked against."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Difficulty(StrEnum):
    """Medal tier of an achievement."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    DIAMOND = "diamond"


@dataclass(frozen=True)
class Achievement:
    """Catalog achievement with its unlock requirement."""

    id: UUID
    name: str
    requirement_type: str
    requirement_value: str
    category: str = ""
    description: str = ""
    difficulty: Difficulty = Difficulty.BRONZE
    icon: str = ""


@dataclass(frozen=True)
class UnlockedAchievement:
    """Achievement unlocked by a user at a point in time."""

    achievement: Achievement
    unlocked_at: datetime


@dataclass(frozen=True)
class UserStats:
    """Lifetime drinking stats for one user.

    Day keys and `drink_times` are in the user's local timezone. Type keys
    are lower-cased drink type names.
    """

    total_drinks: int = 0
    unique_types: frozenset[str] = frozenset()
    max_in_day: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    friend_count: int = 0
    account_age_days: int = 0
    drinks_by_type: dict[str, int] = field(default_factory=dict)
    drinks_by_day: dict[str, int] = field(default_factory=dict)
    drink_times: list[datetime] = field(default_factory=list)
    first_drink_at: datetime | None = None
    last_drink_at: datetime | None = None
    account_created_at: datetime | None = None
    weekly_streak_count: int = 0
    monthly_streak_count: int = 0
    days_inactive_before: int = 0
    cheers_received: int = 0
    share_count: int = 0

    @property
    def days_with_drinks(self) -> list[str]:
        """Sorted local day keys with at least one drink."""
        return sorted(self.drinks_by_day)
