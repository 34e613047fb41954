"""Tests for the inbound request wire models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from skill_engine.core.api_models import SkillRequest, SlotValue

# pylint: disable=missing-function-docstring


def test_parses_camel_case_wire_fields(request_factory) -> None:
    request = SkillRequest.model_validate(
        request_factory(intent="Hello", new=True, attributes={"count": 1})
    )

    assert request.application_id == "amzn1.ask.skill.test"
    assert request.request_type == "IntentRequest"
    assert request.session.new is True
    assert request.session.session_id == "amzn1.echo-api.session.test"
    assert request.session.attributes == {"count": 1}
    assert request.request.intent is not None
    assert request.request.intent.name == "Hello"


def test_accepts_list_and_mapping_slot_forms(request_factory) -> None:
    as_list = SkillRequest.model_validate(
        request_factory(intent="Order", slots=[{"name": "size", "value": "large"}])
    )
    as_mapping = SkillRequest.model_validate(
        request_factory(intent="Order", slots={"size": {"name": "size", "value": "large"}})
    )

    assert as_list.request.intent is not None
    assert as_list.request.intent.slots == [SlotValue(name="size", value="large")]
    assert as_mapping.request.intent is not None
    assert as_mapping.request.intent.slots == {"size": SlotValue(name="size", value="large")}


def test_missing_attributes_stay_none(request_factory) -> None:
    request = SkillRequest.model_validate(request_factory("LaunchRequest"))
    assert request.session.attributes is None
    assert request.request.intent is None


def test_missing_application_is_rejected() -> None:
    with pytest.raises(PydanticValidationError):
        SkillRequest.model_validate({"session": {"new": True}, "request": {"type": "LaunchRequest"}})
