"""Wire models for inbound skill requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Base model accepting camelCase wire names and ignoring unknown fields."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SlotValue(_WireModel):
    """One recognized slot; platforms omit ``value`` for unfilled slots."""

    name: str
    value: Any = None


class IntentPayload(_WireModel):
    """Recognized intent with its slots in list or keyed-mapping form."""

    name: str
    slots: list[SlotValue] | dict[str, SlotValue] | None = None


class RequestBody(_WireModel):
    """The ``request`` section describing the spoken-language event."""

    type: str
    request_id: str | None = Field(default=None, alias="requestId")
    intent: IntentPayload | None = None


class ApplicationRef(_WireModel):
    """Identity of the skill the platform believes it is calling."""

    application_id: str = Field(..., alias="applicationId")


class SessionPayload(_WireModel):
    """The ``session`` section carrying conversation state between turns."""

    new: bool = False
    session_id: str | None = Field(default=None, alias="sessionId")
    attributes: dict[str, Any] | None = None
    application: ApplicationRef


class SkillRequest(_WireModel):
    """Top-level request envelope posted by the voice platform."""

    version: str | None = None
    session: SessionPayload
    request: RequestBody

    @property
    def application_id(self) -> str:
        return self.session.application.application_id

    @property
    def request_type(self) -> str:
        return self.request.type


__all__ = [
    "SlotValue",
    "IntentPayload",
    "RequestBody",
    "ApplicationRef",
    "SessionPayload",
    "SkillRequest",
]
