"""Assemble protocol responses from handler output."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from skill_engine.core.models import (
    DEFAULT_RESPONSE_VERSION,
    Application,
    Attributes,
    ResponseOptions,
    Slots,
)

DEFAULT_CARD_TYPE = "Simple"


def build_output_speech(text: Any, ssml: Any = False) -> dict[str, Any]:
    """Return an ``outputSpeech`` object; with ``ssml`` set, ``text`` is SSML markup."""
    if not ssml:
        return {"type": "PlainText", "text": text}
    return {"type": "SSML", "ssml": text}


def build_card(card: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    """Copy ``card`` and default its type to ``Simple``; ``None`` when absent."""
    if card is None:
        return None
    result = dict(card)
    if not result.get("type"):
        result["type"] = DEFAULT_CARD_TYPE
    return result


def should_end_session(options: Optional[Mapping[str, Any]]) -> Any:
    """Read ``end`` from options, defaulting to ``True`` when unset."""
    if not options or options.get("end") is None:
        return True
    return options["end"]


def _session_attributes(options: Mapping[str, Any], attrs: Attributes) -> Attributes:
    supplied = options.get("attrs")
    if supplied is None:
        return dict(attrs)
    # Handlers may replace attributes but never the conversation position.
    session_attributes = dict(supplied)
    if "previousIntent" in attrs:
        session_attributes["previousIntent"] = attrs["previousIntent"]
    else:
        session_attributes.pop("previousIntent", None)
    return session_attributes


def _response_version(app: Application) -> str:
    if app.options is not None and app.options.version:
        return app.options.version
    return DEFAULT_RESPONSE_VERSION


def build_response(
    options: ResponseOptions,
    slots: Slots,
    attrs: Attributes,
    app: Application,
) -> dict[str, Any]:
    """Build the protocol response for a handler's ``options``.

    ``options`` is either plain text or a mapping with ``text`` and the
    optional ``ssml``, ``end``, ``reprompt``, ``card`` and ``attrs`` keys.
    ``slots`` are accepted for parity with the handler signature; the
    response does not echo them.
    """
    del slots
    if isinstance(options, str):
        options = {"text": options}

    ssml = options.get("ssml")
    body: dict[str, Any] = {
        "outputSpeech": build_output_speech(options.get("text"), ssml),
        "shouldEndSession": should_end_session(options),
    }

    reprompt = options.get("reprompt")
    if reprompt:
        body["reprompt"] = {"outputSpeech": build_output_speech(reprompt, ssml)}

    card = build_card(options.get("card"))
    if card is not None:
        body["card"] = card

    return {
        "version": _response_version(app),
        "sessionAttributes": _session_attributes(options, attrs),
        "response": body,
    }


__all__ = [
    "DEFAULT_CARD_TYPE",
    "build_output_speech",
    "build_card",
    "should_end_session",
    "build_response",
]
