"""Social aggregates: cheers tallies, top fans and friend suggestions."""

import logging
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from drinkr.domain.analytics import CheersStats
from drinkr.domain.errors import NotFriendsError
from drinkr.domain.logs import DailyEntry
from drinkr.domain.social import (
    ACCEPTED,
    PENDING,
    CheerRow,
    CounterpartCount,
    FriendshipRow,
    FriendSuggestion,
)

logger = logging.getLogger(__name__)

TOP_N = 5
DISPLAY_TOP_N = 3
SUGGESTION_LIMIT = 10


class CheersRepository(Protocol):
    """Persistence interface for cheers."""

    def list_received(self, drink_log_ids: list[UUID]) -> list[CheerRow]:
        """Return cheers left on the given drink posts."""

    def list_received_for_owner(self, owner_id: UUID) -> list[CheerRow]:
        """Return cheers left on any post owned by the user."""

    def list_given(self, user_id: UUID) -> list[CheerRow]:
        """Return cheers the user has left on posts."""


class FriendshipRepository(Protocol):
    """Persistence interface for friendships."""

    def list_for_user(self, user_id: UUID) -> list[FriendshipRow]:
        """Return every friendship row the user is part of."""

    def list_accepted_for_users(self, user_ids: list[UUID]) -> list[FriendshipRow]:
        """Return accepted friendships touching any of the users."""


def friend_ids(rows: Iterable[FriendshipRow], viewer_id: UUID) -> set[UUID]:
    """Return the viewer's accepted friends."""
    friends = set()
    for row in rows:
        if row.status != ACCEPTED:
            continue
        if row.requester_id == viewer_id:
            friends.add(row.addressee_id)
        elif row.addressee_id == viewer_id:
            friends.add(row.requester_id)
    return friends


def pending_incoming(
    rows: Iterable[FriendshipRow], viewer_id: UUID
) -> list[FriendshipRow]:
    """Return pending requests addressed to the viewer, newest first."""
    incoming = [
        row for row in rows if row.status == PENDING and row.addressee_id == viewer_id
    ]
    return sorted(
        incoming,
        key=lambda row: row.created_at or datetime.min.replace(tzinfo=UTC),
        reverse=True,
    )


def cheers_stats(
    series: list[DailyEntry],
    received: Iterable[CheerRow],
    given: Iterable[CheerRow],
    range_start: datetime,
) -> CheersStats:
    """Tally cheers for posts inside the series and cheers given since the start.

    Given cheers without a timestamp cannot be placed in the range and are
    not counted.
    """
    post_ids = {drink_id for day in series for drink_id in day.drink_ids}
    total_received = sum(1 for cheer in received if cheer.drink_log_id in post_ids)
    total_given = sum(
        1
        for cheer in given
        if cheer.created_at is not None and cheer.created_at >= range_start
    )
    return CheersStats(
        total_received=total_received,
        total_given=total_given,
        avg_per_post=total_received / len(post_ids) if post_ids else 0.0,
    )


def top_counterparts(
    rows: Iterable[CheerRow],
    key: Callable[[CheerRow], UUID | None],
    exclude: UUID | None = None,
    limit: int = TOP_N,
) -> list[CounterpartCount]:
    """Group rows by counterpart id and return the most frequent ones."""
    counts = Counter(
        counterpart
        for counterpart in (key(row) for row in rows)
        if counterpart is not None and counterpart != exclude
    )
    return [
        CounterpartCount(user_id=user_id, count=count)
        for user_id, count in counts.most_common(limit)
    ]


def top_fans(
    received: Iterable[CheerRow], viewer_id: UUID, limit: int = TOP_N
) -> list[CounterpartCount]:
    """Users who cheered the viewer's posts the most."""
    return top_counterparts(received, lambda row: row.user_id, viewer_id, limit)


def top_cheered(
    given: Iterable[CheerRow], viewer_id: UUID, limit: int = TOP_N
) -> list[CounterpartCount]:
    """Users whose posts the viewer cheered the most."""
    return top_counterparts(given, lambda row: row.owner_id, viewer_id, limit)


def suggest_mutual_friends(
    viewer_id: UUID,
    friends: set[UUID],
    rows: Iterable[FriendshipRow],
    limit: int = SUGGESTION_LIMIT,
) -> list[FriendSuggestion]:
    """Rank friends-of-friends by how many of the viewer's friends know them."""
    mutual_counts: Counter[UUID] = Counter()
    for row in rows:
        if row.status != ACCEPTED:
            continue
        for friend, candidate in (
            (row.requester_id, row.addressee_id),
            (row.addressee_id, row.requester_id),
        ):
            if (
                friend in friends
                and candidate != viewer_id
                and candidate not in friends
            ):
                mutual_counts[candidate] += 1
    return [
        FriendSuggestion(user_id=user_id, mutual_count=count)
        for user_id, count in mutual_counts.most_common(limit)
    ]


@dataclass
class SocialService:
    """Service for friend and cheers aggregates."""

    friendship_repository: FriendshipRepository
    cheers_repository: CheersRepository

    def get_friend_ids(self, viewer_id: UUID) -> set[UUID]:
        """Return the viewer's accepted friends."""
        rows = self.friendship_repository.list_for_user(viewer_id)
        return friend_ids(rows, viewer_id)

    def are_friends(self, viewer_id: UUID, other_id: UUID) -> bool:
        """Return True when both users share an accepted friendship."""
        return other_id in self.get_friend_ids(viewer_id)

    def ensure_friends(self, viewer_id: UUID, other_id: UUID) -> None:
        """Raise unless the viewer is the other user or one of their friends."""
        if viewer_id != other_id and not self.are_friends(viewer_id, other_id):
            raise NotFriendsError("You must be friends to view their analytics")

    def get_pending_incoming(self, viewer_id: UUID) -> list[FriendshipRow]:
        """Return pending friend requests addressed to the viewer."""
        return pending_incoming(
            self.friendship_repository.list_for_user(viewer_id), viewer_id
        )

    def get_suggestions(self, viewer_id: UUID) -> list[FriendSuggestion]:
        """Return friend-of-friend suggestions for the viewer."""
        friends = self.get_friend_ids(viewer_id)
        if not friends:
            return []
        rows = self.friendship_repository.list_accepted_for_users(sorted(friends))
        suggestions = suggest_mutual_friends(viewer_id, friends, rows)
        logger.info("Found %d suggestions for %s", len(suggestions), viewer_id)
        return suggestions

    def get_top_fans(self, viewer_id: UUID) -> list[CounterpartCount]:
        """Return the users who cheered the viewer the most."""
        return top_fans(
            self.cheers_repository.list_received_for_owner(viewer_id), viewer_id
        )

    def get_top_cheered(self, viewer_id: UUID) -> list[CounterpartCount]:
        """Return the users the viewer cheered the most."""
        return top_cheered(self.cheers_repository.list_given(viewer_id), viewer_id)

    def count_cheers_received(self, user_id: UUID) -> int:
        """Return the total number of cheers on the user's posts."""
        return len(self.cheers_repository.list_received_for_owner(user_id))
