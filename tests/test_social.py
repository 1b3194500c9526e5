"""Tests for social aggregates."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from drinkr.domain.errors import NotFriendsError
from drinkr.domain.logs import DailyEntry, DrinkType
from drinkr.domain.social import ACCEPTED, PENDING, CheerRow, FriendshipRow
from drinkr.services.social import (
    SocialService,
    cheers_stats,
    friend_ids,
    pending_incoming,
    suggest_mutual_friends,
    top_cheered,
    top_fans,
)
from tests.conftest import (
    InMemoryCheersRepository,
    InMemoryDrinkLogRepository,
    InMemoryFriendshipRepository,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def _friendship(left, right, status: str = ACCEPTED, created_at=None) -> FriendshipRow:
    return FriendshipRow(
        requester_id=left, addressee_id=right, status=status, created_at=created_at
    )


def test_friend_ids_accepts_either_direction() -> None:
    viewer, first, second, stranger = uuid4(), uuid4(), uuid4(), uuid4()
    rows = [
        _friendship(viewer, first),
        _friendship(second, viewer),
        _friendship(viewer, stranger, PENDING),
    ]
    assert friend_ids(rows, viewer) == {first, second}


def test_pending_incoming_newest_first() -> None:
    viewer, older, newer, outgoing = uuid4(), uuid4(), uuid4(), uuid4()
    rows = [
        _friendship(older, viewer, PENDING, NOW - timedelta(days=2)),
        _friendship(viewer, outgoing, PENDING, NOW),
        _friendship(newer, viewer, PENDING, NOW - timedelta(hours=1)),
    ]

    incoming = pending_incoming(rows, viewer)

    assert [row.requester_id for row in incoming] == [newer, older]


def test_suggestions_exclude_viewer_and_existing_friends() -> None:
    viewer, alice, bob, carol, dave = uuid4(), uuid4(), uuid4(), uuid4(), uuid4()
    rows = [
        _friendship(viewer, alice),
        _friendship(viewer, bob),
        _friendship(alice, bob),
        _friendship(alice, carol),
        _friendship(carol, bob),
        _friendship(bob, dave),
        _friendship(alice, uuid4(), PENDING),
    ]

    suggestions = suggest_mutual_friends(viewer, {alice, bob}, rows)

    assert [(s.user_id, s.mutual_count) for s in suggestions] == [
        (carol, 2),
        (dave, 1),
    ]


def test_cheers_stats_guards_empty_series() -> None:
    stats = cheers_stats([], received=[], given=[], range_start=NOW)

    assert stats.total_received == 0
    assert stats.total_given == 0
    assert stats.avg_per_post == 0.0


def test_cheers_stats_counts_range_only() -> None:
    post_id = uuid4()
    series = [
        DailyEntry(
            date="2026-10-18", count=1, types=[DrinkType.BEER], drink_ids=[post_id]
        )
    ]
    received = [
        CheerRow(drink_log_id=post_id, user_id=uuid4()),
        CheerRow(drink_log_id=post_id, user_id=uuid4()),
        CheerRow(drink_log_id=uuid4(), user_id=uuid4()),
    ]
    given = [
        CheerRow(drink_log_id=uuid4(), user_id=uuid4(), created_at=NOW),
        CheerRow(
            drink_log_id=uuid4(), user_id=uuid4(), created_at=NOW - timedelta(days=30)
        ),
        CheerRow(drink_log_id=uuid4(), user_id=uuid4()),
    ]

    stats = cheers_stats(series, received, given, NOW - timedelta(days=7))

    assert stats.total_received == 2
    assert stats.total_given == 1
    assert stats.avg_per_post == 2.0


def test_top_fans_and_cheered_skip_viewer() -> None:
    viewer, fan, other = uuid4(), uuid4(), uuid4()
    received = [
        CheerRow(drink_log_id=uuid4(), user_id=fan),
        CheerRow(drink_log_id=uuid4(), user_id=fan),
        CheerRow(drink_log_id=uuid4(), user_id=other),
        CheerRow(drink_log_id=uuid4(), user_id=viewer),
    ]
    given = [
        CheerRow(drink_log_id=uuid4(), user_id=viewer, owner_id=other),
        CheerRow(drink_log_id=uuid4(), user_id=viewer, owner_id=viewer),
        CheerRow(drink_log_id=uuid4(), user_id=viewer),
    ]

    fans = top_fans(received, viewer)
    cheered = top_cheered(given, viewer)

    assert [(f.user_id, f.count) for f in fans] == [(fan, 2), (other, 1)]
    assert [(c.user_id, c.count) for c in cheered] == [(other, 1)]


def test_top_fans_keeps_five() -> None:
    received = [CheerRow(drink_log_id=uuid4(), user_id=uuid4()) for _ in range(8)]
    assert len(top_fans(received, uuid4())) == 5


def test_ensure_friends(
    social_service: SocialService, friendship_repository: InMemoryFriendshipRepository
) -> None:
    viewer, friend, stranger = uuid4(), uuid4(), uuid4()
    friendship_repository.befriend(viewer, friend)
    friendship_repository.befriend(stranger, viewer, PENDING)

    social_service.ensure_friends(viewer, friend)
    social_service.ensure_friends(viewer, viewer)
    with pytest.raises(NotFriendsError):
        social_service.ensure_friends(viewer, stranger)


def test_suggestions_without_friends_are_empty(social_service: SocialService) -> None:
    assert social_service.get_suggestions(uuid4()) == []


def test_service_counts_cheers_per_owner(
    social_service: SocialService,
    log_repository: InMemoryDrinkLogRepository,
    cheers_repository: InMemoryCheersRepository,
) -> None:
    viewer, friend = uuid4(), uuid4()
    mine = log_repository.add(viewer, NOW)
    theirs = log_repository.add(friend, NOW)
    cheers_repository.add(mine, friend, NOW)
    cheers_repository.add(mine, friend, NOW)
    cheers_repository.add(theirs, viewer, NOW)

    assert social_service.count_cheers_received(viewer) == 2
    assert [f.user_id for f in social_service.get_top_fans(viewer)] == [friend]
    assert [c.user_id for c in social_service.get_top_cheered(viewer)] == [friend]
