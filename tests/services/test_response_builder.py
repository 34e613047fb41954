"""Unit tests for protocol response synthesis."""

from __future__ import annotations

from skill_engine.core.models import DEFAULT_RESPONSE_VERSION, AppOptions, Application
from skill_engine.services import response_builder as rb

# pylint: disable=missing-function-docstring

APP = Application(options=AppOptions(version="1.2.3"))


def test_plain_text_shorthand_ends_session_by_default() -> None:
    response = rb.build_response("Hello", {}, {"previousIntent": "Hi"}, APP)

    assert response == {
        "version": "1.2.3",
        "sessionAttributes": {"previousIntent": "Hi"},
        "response": {
            "outputSpeech": {"type": "PlainText", "text": "Hello"},
            "shouldEndSession": True,
        },
    }


def test_ssml_flag_reinterprets_text_as_markup() -> None:
    response = rb.build_response({"text": "<speak>Hi</speak>", "ssml": True}, {}, {}, APP)
    assert response["response"]["outputSpeech"] == {"type": "SSML", "ssml": "<speak>Hi</speak>"}


def test_end_flag_is_used_verbatim_when_defined() -> None:
    assert rb.build_response({"text": "x", "end": False}, {}, {}, APP)["response"][
        "shouldEndSession"
    ] is False
    assert rb.should_end_session({"text": "x", "end": None}) is True
    assert rb.should_end_session({"text": "x", "end": 0}) == 0
    assert rb.should_end_session(None) is True


def test_reprompt_reuses_ssml_flag() -> None:
    plain = rb.build_response({"text": "Q?", "reprompt": "Still there?"}, {}, {}, APP)
    ssml = rb.build_response(
        {"text": "<speak>Q?</speak>", "reprompt": "<speak>Hm?</speak>", "ssml": True},
        {},
        {},
        APP,
    )

    assert plain["response"]["reprompt"] == {
        "outputSpeech": {"type": "PlainText", "text": "Still there?"}
    }
    assert ssml["response"]["reprompt"] == {
        "outputSpeech": {"type": "SSML", "ssml": "<speak>Hm?</speak>"}
    }
    assert "reprompt" not in rb.build_response("x", {}, {}, APP)["response"]


def test_card_gets_default_type_without_mutating_input() -> None:
    card = {"title": "Title", "content": "Body"}
    response = rb.build_response({"text": "x", "card": card}, {}, {}, APP)

    assert response["response"]["card"] == {"title": "Title", "content": "Body", "type": "Simple"}
    assert "type" not in card


def test_card_type_is_preserved() -> None:
    card = {"type": "Standard", "title": "T", "text": "Body"}
    assert rb.build_card(card) == card
    assert rb.build_card(None) is None
    assert "card" not in rb.build_response("x", {}, {}, APP)["response"]


def test_supplied_attrs_replace_carried_but_keep_previous_intent() -> None:
    supplied = {"score": 3, "previousIntent": "Spoofed"}
    response = rb.build_response(
        {"text": "x", "attrs": supplied}, {}, {"previousIntent": "Quiz", "old": True}, APP
    )

    assert response["sessionAttributes"] == {"score": 3, "previousIntent": "Quiz"}
    assert supplied["previousIntent"] == "Spoofed"


def test_supplied_attrs_drop_previous_intent_when_none_is_carried() -> None:
    response = rb.build_response(
        {"text": "x", "attrs": {"previousIntent": "Spoofed", "a": 1}}, {}, {}, APP
    )
    assert response["sessionAttributes"] == {"a": 1}


def test_version_falls_back_to_default() -> None:
    assert rb.build_response("x", {}, {}, Application())["version"] == DEFAULT_RESPONSE_VERSION
    assert (
        rb.build_response("x", {}, {}, Application(options=AppOptions()))["version"]
        == DEFAULT_RESPONSE_VERSION
    )
