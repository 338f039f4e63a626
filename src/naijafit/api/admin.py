"""Admin API endpoints with simple token auth."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from naijafit.domain.codec import stats_to_dict

if TYPE_CHECKING:
    from naijafit.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def require_admin(
    request: Request, x_admin_token: str | None = Header(default=None)
) -> None:
    """Reject requests without the configured admin token."""
    expected = _container(request).settings.admin_token
    if not x_admin_token or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/stats", dependencies=[Depends(require_admin)])
def app_stats(request: Request) -> dict[str, int]:
    """Return application-wide counters."""
    return _container(request).admin_service.app_stats()


@router.get("/users/{user_id}/stats", dependencies=[Depends(require_admin)])
def stored_stats(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the stored stats record for a user."""
    stats = _container(request).stats_service.repository.get_stats(user_id)
    if stats is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"stats": stats_to_dict(stats)}


@router.post("/users/{user_id}/recompute", dependencies=[Depends(require_admin)])
def recompute_user(user_id: UUID, request: Request) -> dict[str, object]:
    """Rebuild a user's stats from their remaining meals."""
    container = _container(request)
    with container.meal_log_service.locks.hold(user_id):
        stats = container.admin_service.recompute_user(user_id)
    return {"stats": stats_to_dict(stats)}
