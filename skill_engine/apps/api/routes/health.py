"""Health routes."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
def read_root(request: Request) -> dict[str, str]:
    """Health/info endpoint naming the hosted skill."""
    return {"status": "ok", "skill": request.app.state.skill.name}


__all__ = ["router"]
