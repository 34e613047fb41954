"""FastAPI application factory hosting a single skill."""

from __future__ import annotations

from fastapi import FastAPI

from skill_engine.apps.api.middleware import CorrelationIdMiddleware
from skill_engine.core.logging import get_logger
from skill_engine.services.skill import Skill

logger = get_logger(__name__)


def create_app(skill: Skill | None = None) -> FastAPI:
    """Build the FastAPI application serving ``skill``."""
    if skill is None:
        raise RuntimeError("A skill must be provided when creating the app.")
    app = FastAPI(title=skill.name)
    app.state.skill = skill
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import health, skill as skill_routes  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(skill_routes.router)
    logger.info("Serving skill %s", skill.name)
    return app


__all__ = ["create_app"]
