"""Profile lookups and viewer settings."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from drinkr.domain.errors import ProfileNotFoundError
from drinkr.domain.social import ProfileSummary


class ProfileRepository(Protocol):
    """Persistence interface for profiles and achievements."""

    def get_profile(self, user_id: UUID) -> ProfileSummary | None:
        """Return the profile for a user id, if present."""

    def get_by_username(self, username: str) -> ProfileSummary | None:
        """Return the profile for a username, if present."""

    def count_medals(self, user_id: UUID) -> int:
        """Return how many achievements the user has unlocked."""


@dataclass
class ProfileService:
    """Service for profile data used by analytics pages."""

    repository: ProfileRepository
    default_timezone: str = "UTC"

    def get_profile(self, user_id: UUID) -> ProfileSummary:
        """Return a profile or raise when it does not exist."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError("Profile not found")
        return profile

    def get_by_username(self, username: str) -> ProfileSummary:
        """Return a profile by username or raise when it does not exist."""
        profile = self.repository.get_by_username(username)
        if profile is None:
            raise ProfileNotFoundError("User not found")
        return profile

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user's timezone, or the default when unset or unknown."""
        profile = self.repository.get_profile(user_id)
        if profile is None or not profile.timezone:
            return self.default_timezone
        try:
            ZoneInfo(profile.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return self.default_timezone
        return profile.timezone

    def count_medals(self, user_id: UUID) -> int:
        """Return the user's unlocked achievement count."""
        return self.repository.count_medals(user_id)
