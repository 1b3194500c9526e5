"""Domain models for drink logs and daily series."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class DrinkType(StrEnum):
    """Drink categories a log can be tagged with."""

    BEER = "Beer"
    SELTZER = "Seltzer"
    WINE = "Wine"
    COCKTAIL = "Cocktail"
    SHOT = "Shot"
    SPIRIT = "Spirit"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: object) -> "DrinkType":
        """Return the matching drink type, falling back to Other."""
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class DrinkLogEntry:
    """A single drink post as stored by the backend."""

    id: UUID
    user_id: UUID
    drink_type: DrinkType
    created_at: datetime | None
    caption: str | None = None
    drink_id: UUID | None = None


@dataclass(frozen=True)
class DailyEntry:
    """All drinks logged on one local calendar day."""

    date: str
    count: int = 0
    types: list[DrinkType] = field(default_factory=list)
    hours: list[int] = field(default_factory=list)
    drink_ids: list[UUID] = field(default_factory=list)
    captions: list[str | None] = field(default_factory=list)
