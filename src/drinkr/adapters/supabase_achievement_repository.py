"""Supabase repository for the achievement catalog and unlocks."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from drinkr.adapters.supabase_rows import parse_timestamp, parse_uuid
from drinkr.domain.achievements import Achievement, Difficulty
from drinkr.services.achievements import AchievementRepository

ACHIEVEMENT_COLUMNS = (
    "id, category, name, description, requirement_type, requirement_value, "
    "difficulty, icon"
)


@dataclass
class SupabaseAchievementRepository(AchievementRepository):
    """Supabase implementation for achievements."""

    client: Client

    def list_achievements(self) -> list[Achievement]:
        """Return the full achievement catalog."""
        response = (
            self.client.table("achievements").select(ACHIEVEMENT_COLUMNS).execute()
        )
        achievements = []
        for row in response.data or []:
            achievement_id = parse_uuid(row.get("id"))
            if achievement_id is None:
                continue
            achievements.append(
                Achievement(
                    id=achievement_id,
                    name=str(row.get("name") or ""),
                    requirement_type=str(row.get("requirement_type") or ""),
                    requirement_value=str(row.get("requirement_value") or ""),
                    category=str(row.get("category") or ""),
                    description=str(row.get("description") or ""),
                    difficulty=_parse_difficulty(row.get("difficulty")),
                    icon=str(row.get("icon") or ""),
                )
            )
        return achievements

    def list_unlocked_ids(self, user_id: UUID) -> set[UUID]:
        """Return achievement ids already unlocked by the user."""
        response = (
            self.client.table("user_achievements")
            .select("achievement_id")
            .eq("user_id", str(user_id))
            .execute()
        )
        ids = (parse_uuid(row.get("achievement_id")) for row in response.data or [])
        return {achievement_id for achievement_id in ids if achievement_id}

    def unlock(self, user_id: UUID, achievement_id: UUID) -> None:
        """Insert an unlock row."""
        self.client.table("user_achievements").insert(
            {"user_id": str(user_id), "achievement_id": str(achievement_id)}
        ).execute()

    def get_account_created_at(self, user_id: UUID) -> datetime | None:
        """Return the profile creation time."""
        response = (
            self.client.table("profiles")
            .select("created_at")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_timestamp(response.data[0].get("created_at"))


def _parse_difficulty(raw: object) -> Difficulty:
    try:
        return Difficulty(raw)
    except ValueError:
        return Difficulty.BRONZE
