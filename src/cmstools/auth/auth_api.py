"""Session API endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .auth_dependencies import SessionPrincipal, require_session

router = APIRouter(prefix="/api", tags=["auth"])


class SessionResponse(BaseModel):
    user: str
    claims: dict[str, Any]


@router.get("/session", response_model=SessionResponse)
async def read_session(
    principal: SessionPrincipal = Depends(require_session),
) -> SessionResponse:
    return SessionResponse(user=principal.user, claims=principal.claims)
