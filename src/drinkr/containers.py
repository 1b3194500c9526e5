"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from drinkr.adapters.supabase_achievement_repository import (
    SupabaseAchievementRepository,
)
from drinkr.adapters.supabase_auth_gateway import AuthGateway, SupabaseAuthGateway
from drinkr.adapters.supabase_cheers_repository import SupabaseCheersRepository
from drinkr.adapters.supabase_drink_log_repository import SupabaseDrinkLogRepository
from drinkr.adapters.supabase_friendship_repository import (
    SupabaseFriendshipRepository,
)
from drinkr.adapters.supabase_profile_repository import SupabaseProfileRepository
from drinkr.config import Settings
from drinkr.services.achievements import AchievementService
from drinkr.services.cache import InMemoryCache
from drinkr.services.discover import DiscoverService
from drinkr.services.profiles import ProfileService
from drinkr.services.social import SocialService
from drinkr.services.stats import StatsService
from drinkr.services.versus import VersusService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_gateway: AuthGateway
    profile_service: ProfileService
    stats_service: StatsService
    social_service: SocialService
    versus_service: VersusService
    discover_service: DiscoverService
    achievement_service: AchievementService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    drink_log_repository = SupabaseDrinkLogRepository(supabase_client)
    cheers_repository = SupabaseCheersRepository(supabase_client)
    friendship_repository = SupabaseFriendshipRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)

    profile_service = ProfileService(
        profile_repository, default_timezone=resolved_settings.default_timezone
    )
    stats_service = StatsService(
        repository=drink_log_repository,
        cheers_repository=cheers_repository,
        cache=InMemoryCache(),
        cache_ttl_seconds=resolved_settings.analytics_cache_ttl_seconds,
    )
    social_service = SocialService(
        friendship_repository=friendship_repository,
        cheers_repository=cheers_repository,
    )
    versus_service = VersusService(
        stats_service=stats_service,
        social_service=social_service,
        profile_service=profile_service,
    )
    discover_service = DiscoverService(drink_log_repository)
    achievement_service = AchievementService(
        repository=SupabaseAchievementRepository(supabase_client),
        log_repository=drink_log_repository,
        profile_service=profile_service,
        social_service=social_service,
    )

    return AppContainer(
        settings=resolved_settings,
        auth_gateway=SupabaseAuthGateway(supabase_client),
        profile_service=profile_service,
        stats_service=stats_service,
        social_service=social_service,
        versus_service=versus_service,
        discover_service=discover_service,
        achievement_service=achievement_service,
    )
