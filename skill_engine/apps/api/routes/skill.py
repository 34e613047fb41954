"""Skill request endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request, status
from fastapi.responses import JSONResponse

from skill_engine.core.exceptions import ProtocolError
from skill_engine.core.logging import get_logger
from skill_engine.services.skill import Skill

router = APIRouter(tags=["skill"])
logger = get_logger(__name__)


def _get_skill(request: Request) -> Skill:
    """Retrieve the hosted skill from app state."""
    skill = getattr(request.app.state, "skill", None)
    if not isinstance(skill, Skill):
        raise RuntimeError("Skill is not configured on app.state.")
    return skill


@router.post("/skill")
async def handle_skill_request(
    request: Request, payload: dict[str, Any] = Body(...)
) -> JSONResponse:
    """Dispatch a platform request and return the protocol response.

    Dispatch runs in the default executor so slow handlers do not block the
    event loop. Requests refused by validation answer 400 with the protocol
    error body; handler failures are left to the server's error handling.
    """
    skill = _get_skill(request)
    try:
        response = await skill.handle_async(payload, offload=True)
    except ProtocolError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.as_dict()},
        )
    return JSONResponse(response)


__all__ = ["router"]
