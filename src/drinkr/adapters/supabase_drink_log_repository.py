"""Supabase repository for drink logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from drinkr.adapters.supabase_rows import parse_timestamp, parse_uuid
from drinkr.domain.logs import DrinkLogEntry, DrinkType
from drinkr.services.stats import DrinkLogRepository

LOG_COLUMNS = "id, user_id, drink_type, drink_id, caption, created_at"
RECENT_LOGS_LIMIT = 5000


@dataclass
class SupabaseDrinkLogRepository(DrinkLogRepository):
    """Supabase implementation for drink log queries."""

    client: Client

    def list_drink_logs(self, user_id: UUID) -> list[DrinkLogEntry]:
        """Return a user's drink logs ordered by creation time."""
        response = (
            self.client.table("drink_logs")
            .select(LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=False)
            .execute()
        )
        return _parse_rows(response.data)

    def list_logs_since(self, since: datetime) -> list[DrinkLogEntry]:
        """Return recent logs from every user, newest first."""
        response = (
            self.client.table("drink_logs")
            .select(LOG_COLUMNS)
            .gte("created_at", since.isoformat())
            .order("created_at", desc=True)
            .limit(RECENT_LOGS_LIMIT)
            .execute()
        )
        return _parse_rows(response.data)

    def get_drink_names(self, drink_ids: list[UUID]) -> dict[UUID, tuple[str, str]]:
        """Return (name, category) for catalog drinks."""
        response = (
            self.client.table("drinks")
            .select("id, name, category")
            .in_("id", [str(drink_id) for drink_id in drink_ids])
            .execute()
        )
        names = {}
        for row in response.data or []:
            drink_id = parse_uuid(row.get("id"))
            if drink_id is None:
                continue
            names[drink_id] = (
                str(row.get("name") or "Unknown"),
                str(row.get("category") or DrinkType.OTHER.value),
            )
        return names


def _parse_rows(rows: list[dict[str, object]] | None) -> list[DrinkLogEntry]:
    entries = []
    for row in rows or []:
        log_id = parse_uuid(row.get("id"))
        user_id = parse_uuid(row.get("user_id"))
        if log_id is None or user_id is None:
            continue
        caption = row.get("caption")
        entries.append(
            DrinkLogEntry(
                id=log_id,
                user_id=user_id,
                drink_type=DrinkType.parse(row.get("drink_type")),
                created_at=parse_timestamp(row.get("created_at")),
                caption=caption if isinstance(caption, str) else None,
                drink_id=parse_uuid(row.get("drink_id")),
            )
        )
    return entries
