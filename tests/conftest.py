"""Pytest configuration: ensure env vars and import path are set early.

This runs before any tests, so modules can import without local path hacks.
Also load .env before setting defaults so local overrides are honored.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

# Ensure repository root is on sys.path for local package imports
sys.path.append(str(Path(__file__).resolve().parents[1]))

load_dotenv(override=False)

# Skills built in tests accept any application id unless they declare their own.
os.environ["SKILL_APPLICATION_IDS"] = "[]"
os.environ.setdefault("SKILL_RESPONSE_VERSION", "0.0.1")


def make_request(
    request_type: str = "IntentRequest",
    *,
    intent: str | None = None,
    slots: Any = None,
    new: bool = False,
    attributes: dict[str, Any] | None = None,
    application_id: str = "amzn1.ask.skill.test",
) -> dict[str, Any]:
    """Build a raw platform request payload."""
    session: dict[str, Any] = {
        "new": new,
        "sessionId": "amzn1.echo-api.session.test",
        "application": {"applicationId": application_id},
    }
    if attributes is not None:
        session["attributes"] = attributes
    body: dict[str, Any] = {"type": request_type, "requestId": "amzn1.echo-api.request.test"}
    if intent is not None:
        body["intent"] = {"name": intent}
        if slots is not None:
            body["intent"]["slots"] = slots
    return {"version": "1.0", "session": session, "request": body}


@pytest.fixture
def request_factory():
    """Expose :func:`make_request` to tests."""
    return make_request
