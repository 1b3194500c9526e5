"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from drinkr.adapters.supabase_auth_gateway import AuthGateway
from drinkr.config import Settings
from drinkr.containers import AppContainer
from drinkr.domain.achievements import Achievement
from drinkr.domain.logs import DrinkLogEntry, DrinkType
from drinkr.domain.social import ACCEPTED, CheerRow, FriendshipRow, ProfileSummary
from drinkr.services.achievements import AchievementRepository, AchievementService
from drinkr.services.cache import InMemoryCache
from drinkr.services.discover import DiscoverService
from drinkr.services.profiles import ProfileRepository, ProfileService
from drinkr.services.social import CheersRepository, FriendshipRepository, SocialService
from drinkr.services.stats import DrinkLogRepository, StatsService
from drinkr.services.versus import VersusService


@dataclass
class InMemoryDrinkLogRepository(DrinkLogRepository):
    """In-memory drink log repository for tests."""

    logs: list[DrinkLogEntry] = field(default_factory=list)
    drinks: dict[UUID, tuple[str, str]] = field(default_factory=dict)

    def add(
        self,
        user_id: UUID,
        created_at: datetime | None,
        drink_type: DrinkType = DrinkType.BEER,
        drink_id: UUID | None = None,
        caption: str | None = None,
    ) -> DrinkLogEntry:
        entry = DrinkLogEntry(
            id=uuid4(),
            user_id=user_id,
            drink_type=drink_type,
            created_at=created_at,
            caption=caption,
            drink_id=drink_id,
        )
        self.logs.append(entry)
        return entry

    def list_drink_logs(self, user_id: UUID) -> list[DrinkLogEntry]:
        return [log for log in self.logs if log.user_id == user_id]

    def list_logs_since(self, since: datetime) -> list[DrinkLogEntry]:
        return [
            log
            for log in self.logs
            if log.created_at is not None and log.created_at >= since
        ]

    def get_drink_names(self, drink_ids: list[UUID]) -> dict[UUID, tuple[str, str]]:
        return {
            drink_id: self.drinks[drink_id]
            for drink_id in drink_ids
            if drink_id in self.drinks
        }


@dataclass
class InMemoryCheersRepository(CheersRepository):
    """In-memory cheers repository; post owners come from the log repository."""

    log_repository: InMemoryDrinkLogRepository
    cheers: list[CheerRow] = field(default_factory=list)

    def add(
        self, post: DrinkLogEntry, user_id: UUID, created_at: datetime | None = None
    ) -> CheerRow:
        cheer = CheerRow(drink_log_id=post.id, user_id=user_id, created_at=created_at)
        self.cheers.append(cheer)
        return cheer

    def _owner(self, drink_log_id: UUID) -> UUID | None:
        for log in self.log_repository.logs:
            if log.id == drink_log_id:
                return log.user_id
        return None

    def list_received(self, drink_log_ids: list[UUID]) -> list[CheerRow]:
        ids = set(drink_log_ids)
        return [cheer for cheer in self.cheers if cheer.drink_log_id in ids]

    def list_received_for_owner(self, owner_id: UUID) -> list[CheerRow]:
        return [
            cheer
            for cheer in self.cheers
            if self._owner(cheer.drink_log_id) == owner_id
        ]

    def list_given(self, user_id: UUID) -> list[CheerRow]:
        return [
            replace(cheer, owner_id=self._owner(cheer.drink_log_id))
            for cheer in self.cheers
            if cheer.user_id == user_id
        ]


@dataclass
class InMemoryFriendshipRepository(FriendshipRepository):
    """In-memory friendship repository for tests."""

    rows: list[FriendshipRow] = field(default_factory=list)

    def befriend(self, left: UUID, right: UUID, status: str = ACCEPTED) -> None:
        self.rows.append(
            FriendshipRow(requester_id=left, addressee_id=right, status=status)
        )

    def list_for_user(self, user_id: UUID) -> list[FriendshipRow]:
        return [
            row
            for row in self.rows
            if user_id in {row.requester_id, row.addressee_id}
        ]

    def list_accepted_for_users(self, user_ids: list[UUID]) -> list[FriendshipRow]:
        ids = set(user_ids)
        return [
            row
            for row in self.rows
            if row.status == ACCEPTED
            and (row.requester_id in ids or row.addressee_id in ids)
        ]


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, ProfileSummary] = field(default_factory=dict)
    medals: dict[UUID, int] = field(default_factory=dict)

    def add(
        self,
        username: str,
        friend_count: int = 0,
        timezone: str | None = None,
    ) -> ProfileSummary:
        profile = ProfileSummary(
            id=uuid4(),
            username=username,
            display_name=username.title(),
            friend_count=friend_count,
            timezone=timezone,
        )
        self.profiles[profile.id] = profile
        return profile

    def get_profile(self, user_id: UUID) -> ProfileSummary | None:
        return self.profiles.get(user_id)

    def get_by_username(self, username: str) -> ProfileSummary | None:
        for profile in self.profiles.values():
            if profile.username == username:
                return profile
        return None

    def count_medals(self, user_id: UUID) -> int:
        return self.medals.get(user_id, 0)


@dataclass
class InMemoryAchievementRepository(AchievementRepository):
    """In-memory achievement catalog and unlock store."""

    achievements: list[Achievement] = field(default_factory=list)
    unlocked: dict[UUID, set[UUID]] = field(default_factory=dict)
    created_at: dict[UUID, datetime] = field(default_factory=dict)

    def add(self, requirement_type: str, requirement_value: str) -> Achievement:
        achievement = Achievement(
            id=uuid4(),
            name=f"{requirement_type} {requirement_value}",
            requirement_type=requirement_type,
            requirement_value=requirement_value,
        )
        self.achievements.append(achievement)
        return achievement

    def list_achievements(self) -> list[Achievement]:
        return list(self.achievements)

    def list_unlocked_ids(self, user_id: UUID) -> set[UUID]:
        return set(self.unlocked.get(user_id, set()))

    def unlock(self, user_id: UUID, achievement_id: UUID) -> None:
        self.unlocked.setdefault(user_id, set()).add(achievement_id)

    def get_account_created_at(self, user_id: UUID) -> datetime | None:
        return self.created_at.get(user_id)


@dataclass
class FakeAuthGateway(AuthGateway):
    """Auth gateway accepting a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def resolve_user_id(self, token: str) -> UUID | None:
        return self.tokens.get(token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def log_repository() -> InMemoryDrinkLogRepository:
    return InMemoryDrinkLogRepository()


@pytest.fixture
def cheers_repository(
    log_repository: InMemoryDrinkLogRepository,
) -> InMemoryCheersRepository:
    return InMemoryCheersRepository(log_repository)


@pytest.fixture
def friendship_repository() -> InMemoryFriendshipRepository:
    return InMemoryFriendshipRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def achievement_repository() -> InMemoryAchievementRepository:
    return InMemoryAchievementRepository()


@pytest.fixture
def auth_gateway() -> FakeAuthGateway:
    return FakeAuthGateway()


@pytest.fixture
def stats_service(
    log_repository: InMemoryDrinkLogRepository,
    cheers_repository: InMemoryCheersRepository,
) -> StatsService:
    return StatsService(
        repository=log_repository,
        cheers_repository=cheers_repository,
        cache=InMemoryCache(),
    )


@pytest.fixture
def social_service(
    friendship_repository: InMemoryFriendshipRepository,
    cheers_repository: InMemoryCheersRepository,
) -> SocialService:
    return SocialService(
        friendship_repository=friendship_repository,
        cheers_repository=cheers_repository,
    )


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def achievement_service(
    achievement_repository: InMemoryAchievementRepository,
    log_repository: InMemoryDrinkLogRepository,
    profile_service: ProfileService,
    social_service: SocialService,
) -> AchievementService:
    return AchievementService(
        repository=achievement_repository,
        log_repository=log_repository,
        profile_service=profile_service,
        social_service=social_service,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    auth_gateway: FakeAuthGateway,
    log_repository: InMemoryDrinkLogRepository,
    stats_service: StatsService,
    social_service: SocialService,
    profile_service: ProfileService,
    achievement_service: AchievementService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        auth_gateway=auth_gateway,
        profile_service=profile_service,
        stats_service=stats_service,
        social_service=social_service,
        versus_service=VersusService(
            stats_service=stats_service,
            social_service=social_service,
            profile_service=profile_service,
        ),
        discover_service=DiscoverService(log_repository),
        achievement_service=achievement_service,
    )
