"""Supabase repository for profiles and achievements."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from drinkr.adapters.supabase_rows import parse_uuid
from drinkr.domain.social import ProfileSummary
from drinkr.services.profiles import ProfileRepository

PROFILE_COLUMNS = "id, username, display_name, friend_count, timezone"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def get_profile(self, user_id: UUID) -> ProfileSummary | None:
        """Return the public profile for a user id."""
        response = (
            self.client.table("profile_public_stats")
            .select(PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        return _first_profile(response.data)

    def get_by_username(self, username: str) -> ProfileSummary | None:
        """Return the public profile for a username."""
        response = (
            self.client.table("profile_public_stats")
            .select(PROFILE_COLUMNS)
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return _first_profile(response.data)

    def count_medals(self, user_id: UUID) -> int:
        """Return the number of unlocked achievements."""
        response = (
            self.client.table("user_achievements")
            .select("achievement_id")
            .eq("user_id", str(user_id))
            .execute()
        )
        return len(response.data or [])


def _first_profile(rows: list[dict[str, object]] | None) -> ProfileSummary | None:
    if not rows:
        return None
    row = rows[0]
    profile_id = parse_uuid(row.get("id"))
    if profile_id is None:
        return None
    display_name = row.get("display_name")
    timezone = row.get("timezone")
    return ProfileSummary(
        id=profile_id,
        username=str(row.get("username") or ""),
        display_name=display_name if isinstance(display_name, str) else None,
        friend_count=int(row.get("friend_count") or 0),
        timezone=timezone if isinstance(timezone, str) else None,
    )
