"""Request pipeline: dispatch, transition policy, handler invocation, responses."""

from __future__ import annotations

from .dispatcher import dispatch, handle_request
from .skill import Skill

__all__ = ["Skill", "dispatch", "handle_request"]
