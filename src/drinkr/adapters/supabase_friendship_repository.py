"""Supabase repository for friendships."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from drinkr.adapters.supabase_rows import parse_timestamp, parse_uuid
from drinkr.domain.social import ACCEPTED, FriendshipRow
from drinkr.services.social import FriendshipRepository

FRIENDSHIP_COLUMNS = "requester_id, addressee_id, status, created_at"
FRIENDSHIP_LIMIT = 500


@dataclass
class SupabaseFriendshipRepository(FriendshipRepository):
    """Supabase implementation for friendship queries."""

    client: Client

    def list_for_user(self, user_id: UUID) -> list[FriendshipRow]:
        """Return friendship rows in either direction."""
        response = (
            self.client.table("friendships")
            .select(FRIENDSHIP_COLUMNS)
            .or_(f"requester_id.eq.{user_id},addressee_id.eq.{user_id}")
            .limit(FRIENDSHIP_LIMIT)
            .execute()
        )
        return _parse_rows(response.data)

    def list_accepted_for_users(self, user_ids: list[UUID]) -> list[FriendshipRow]:
        """Return accepted friendships touching any of the users."""
        ids = ",".join(str(user_id) for user_id in user_ids)
        response = (
            self.client.table("friendships")
            .select(FRIENDSHIP_COLUMNS)
            .eq("status", ACCEPTED)
            .or_(f"requester_id.in.({ids}),addressee_id.in.({ids})")
            .limit(FRIENDSHIP_LIMIT)
            .execute()
        )
        return _parse_rows(response.data)


def _parse_rows(rows: list[dict[str, object]] | None) -> list[FriendshipRow]:
    friendships = []
    for row in rows or []:
        requester_id = parse_uuid(row.get("requester_id"))
        addressee_id = parse_uuid(row.get("addressee_id"))
        if requester_id is None or addressee_id is None:
            continue
        friendships.append(
            FriendshipRow(
                requester_id=requester_id,
                addressee_id=addressee_id,
                status=str(row.get("status") or ""),
                created_at=parse_timestamp(row.get("created_at")),
            )
        )
    return friendships
