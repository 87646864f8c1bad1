"""Bearer token dependency for user-scoped endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> str:
    """Return the authenticated user id or reject the request."""
    container: AppContainer = request.app.state.container
    user_id = container.auth_service.authenticate(authorization)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
