"""Domain models for head-to-head comparisons."""

from dataclasses import dataclass
from enum import StrEnum

from drinkr.domain.logs import DrinkType


class Winner(StrEnum):
    """Which side won a comparison row."""

    LEFT = "left"
    RIGHT = "right"
    TIE = "tie"


@dataclass(frozen=True)
class VersusStats:
    """Stat bundle for one side of a versus comparison."""

    total_drinks: int
    cheers_received: int
    friend_count: int
    medal_count: int
    current_streak: int
    unique_types: int
    avg_per_day: float
    favorite_type: DrinkType | None
    favorite_count: int


@dataclass(frozen=True)
class ComparisonRow:
    """One compared metric."""

    key: str
    label: str
    left: float
    right: float
    winner: Winner


@dataclass(frozen=True)
class ComparisonResult:
    """Per-metric winners and the overall score."""

    rows: list[ComparisonRow]
    left_wins: int
    right_wins: int
    left_favorite: DrinkType | None
    right_favorite: DrinkType | None
