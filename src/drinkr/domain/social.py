"""Domain models for friendships, cheers and discover data."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

ACCEPTED = "accepted"
PENDING = "pending"


@dataclass(frozen=True)
class FriendshipRow:
    """A friendship edge between two users."""

    requester_id: UUID
    addressee_id: UUID
    status: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class CheerRow:
    """A cheer left by `user_id` on a drink post owned by `owner_id`."""

    drink_log_id: UUID
    user_id: UUID
    created_at: datetime | None = None
    owner_id: UUID | None = None


@dataclass(frozen=True)
class CounterpartCount:
    """Interaction tally against another user."""

    user_id: UUID
    count: int


@dataclass(frozen=True)
class FriendSuggestion:
    """Second-degree contact with the number of mutual friends."""

    user_id: UUID
    mutual_count: int


@dataclass(frozen=True)
class ProfileSummary:
    """Public profile fields used by analytics."""

    id: UUID
    username: str
    display_name: str | None
    friend_count: int
    timezone: str | None = None


@dataclass(frozen=True)
class TrendingItem:
    """A drink (or drink type) trending on the discover page."""

    drink_id: UUID | None
    name: str
    category: str
    count: int
    percent_change: int | None
