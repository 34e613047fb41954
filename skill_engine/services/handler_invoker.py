"""Invoke tagged handlers and hand their output to the response builder."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Union

from skill_engine.core.api_models import SkillRequest, SlotValue
from skill_engine.core.exceptions import HandlerContractError
from skill_engine.core.logging import get_logger
from skill_engine.core.models import Application, Attributes, Handler, ResponseOptions, Slots
from skill_engine.services.response_builder import build_response

logger = get_logger(__name__)

RawSlots = Union[Iterable[Any], Mapping[str, Any], None]
ResponseReady = Callable[[dict[str, Any]], None]


def _slot_pair(slot: Any) -> tuple[str, Any]:
    if isinstance(slot, SlotValue):
        return slot.name, slot.value
    return slot["name"], slot.get("value")


def normalize_slots(raw: RawSlots) -> Slots:
    """Flatten ``[{name, value}, ...]`` (or the keyed mapping form) into ``{name: value}``.

    Duplicate names resolve to the last occurrence.
    """
    if not raw:
        return {}
    items = raw.values() if isinstance(raw, Mapping) else raw
    slots: Slots = {}
    for slot in items:
        name, value = _slot_pair(slot)
        slots[name] = value
    return slots


def invoke_handler(
    handler: Handler,
    slots: RawSlots,
    attrs: Attributes,
    app: Application,
    request: SkillRequest,
    on_ready: ResponseReady,
) -> None:
    """Run ``handler`` and pass the synthesized response to ``on_ready``.

    Synchronous handlers answer immediately. Asynchronous handlers receive a
    completion callback and the pipeline resumes only when it is called; a
    handler that never calls it leaves ``on_ready`` uncalled.
    """
    normalized = normalize_slots(slots)

    if not handler.is_async:
        options = handler.fn(normalized, attrs, request)
        on_ready(build_response(options, normalized, attrs, app))
        return

    completed = False

    def complete(options: ResponseOptions) -> None:
        nonlocal completed
        if completed:
            raise HandlerContractError(
                f"Handler {getattr(handler.fn, '__name__', handler.fn)!r} completed more than once"
            )
        completed = True
        on_ready(build_response(options, normalized, attrs, app))

    logger.debug("Awaiting completion from async handler %s", getattr(handler.fn, "__name__", "?"))
    handler.fn(normalized, attrs, request, complete)


__all__ = ["RawSlots", "ResponseReady", "normalize_slots", "invoke_handler"]
