"""Bearer token authentication for API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Depends, Header, HTTPException, Request, status

from drinkr.adapters.supabase_auth_gateway import AuthGateway  # noqa: TC001

if TYPE_CHECKING:
    from drinkr.containers import AppContainer

UNAUTHORIZED = "Unauthorized"


def _get_auth_gateway(request: Request) -> AuthGateway:
    container: AppContainer = request.app.state.container
    return container.auth_gateway


def require_viewer(
    authorization: str | None = Header(default=None),
    auth_gateway: AuthGateway = Depends(_get_auth_gateway),
) -> UUID:
    """Resolve the bearer token to the signed-in user's id."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED
        )
    user_id = auth_gateway.resolve_user_id(token.strip())
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED
        )
    return user_id
