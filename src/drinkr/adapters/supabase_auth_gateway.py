"""Bearer token verification through Supabase auth."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from supabase import AuthError, Client

logger = logging.getLogger(__name__)


class AuthGateway(Protocol):
    """Interface for resolving access tokens to users."""

    def resolve_user_id(self, token: str) -> UUID | None:
        """Return the user id for a valid token, else None."""


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Supabase-backed token verification."""

    client: Client

    def resolve_user_id(self, token: str) -> UUID | None:
        """Validate the JWT with Supabase and return its user id."""
        try:
            response = self.client.auth.get_user(token)
        except AuthError as exc:
            logger.info("Rejected access token: %s", exc)
            return None
        if response is None or response.user is None:
            return None
        return UUID(response.user.id)
