"""Supabase repository for cheers."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from drinkr.adapters.supabase_rows import parse_timestamp, parse_uuid
from drinkr.domain.social import CheerRow
from drinkr.services.social import CheersRepository


@dataclass
class SupabaseCheersRepository(CheersRepository):
    """Supabase implementation for cheers queries."""

    client: Client

    def list_received(self, drink_log_ids: list[UUID]) -> list[CheerRow]:
        """Return cheers on the given posts."""
        response = (
            self.client.table("drink_cheers")
            .select("drink_log_id, user_id, created_at")
            .in_("drink_log_id", [str(drink_id) for drink_id in drink_log_ids])
            .execute()
        )
        return _parse_rows(response.data)

    def list_received_for_owner(self, owner_id: UUID) -> list[CheerRow]:
        """Return cheers on every post owned by the user."""
        response = (
            self.client.table("drink_cheers")
            .select("drink_log_id, user_id, created_at, drink_logs!inner(user_id)")
            .eq("drink_logs.user_id", str(owner_id))
            .execute()
        )
        return _parse_rows(response.data)

    def list_given(self, user_id: UUID) -> list[CheerRow]:
        """Return cheers the user left, with the owner of each post."""
        response = (
            self.client.table("drink_cheers")
            .select("drink_log_id, user_id, created_at, drink_logs(user_id)")
            .eq("user_id", str(user_id))
            .execute()
        )
        return _parse_rows(response.data)


def _parse_rows(rows: list[dict[str, object]] | None) -> list[CheerRow]:
    cheers = []
    for row in rows or []:
        drink_log_id = parse_uuid(row.get("drink_log_id"))
        user_id = parse_uuid(row.get("user_id"))
        if drink_log_id is None or user_id is None:
            continue
        post = row.get("drink_logs")
        cheers.append(
            CheerRow(
                drink_log_id=drink_log_id,
                user_id=user_id,
                created_at=parse_timestamp(row.get("created_at")),
                owner_id=parse_uuid(post.get("user_id"))
                if isinstance(post, dict)
                else None,
            )
        )
    return cheers
