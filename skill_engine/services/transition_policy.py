"""Conversation-flow policy deciding which intent may follow which.

Applications declare allowed transitions as :class:`Action` edges. When no
edges are declared every intent is always reachable. Otherwise an intent runs
only when an edge from the previous intent (or a wildcard edge) allows it and
the edge's condition holds; everything else is routed to a fail handler and
the conversation position stays where it was.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from skill_engine.core.logging import get_logger
from skill_engine.core.models import (
    WILDCARD,
    Action,
    Application,
    Attributes,
    FallbackHandlers,
    Handler,
    Intent,
)
from skill_engine.services.handler_invoker import RawSlots, normalize_slots

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of a policy decision."""

    handler: Handler
    attributes: Attributes
    accepted: bool


def find_action(
    actions: Sequence[Action], previous_intent: Optional[str], intent_name: str
) -> Optional[Action]:
    """Return the first action allowing ``previous_intent`` → ``intent_name``.

    Exact edges win over ``previous → *`` edges, which win over ``* → intent``
    edges; within a tier declaration order decides.
    """
    tiers = (
        (previous_intent, intent_name),
        (previous_intent, WILDCARD),
        (WILDCARD, intent_name),
    )
    for from_intent, to_intent in tiers:
        for action in actions:
            if action.matches(from_intent, to_intent):
                return action
    return None


def _accept(intent: Intent, attrs: Attributes) -> Transition:
    updated = dict(attrs)
    updated["previousIntent"] = intent.name
    return Transition(handler=intent.handler, attributes=updated, accepted=True)


def evaluate(
    intent: Intent,
    slots: RawSlots,
    attrs: Attributes,
    app: Application,
    handlers: FallbackHandlers,
) -> Transition:
    """Decide which handler answers ``intent`` given the conversation state.

    ``attrs`` is not modified; the returned transition carries the attributes
    the rest of the pipeline should use.
    """
    if not app.actions:
        return _accept(intent, attrs)

    previous_intent = attrs.get("previousIntent")
    action = find_action(app.actions, previous_intent, intent.name)
    if action is None:
        logger.info(
            "No action allows transition %s -> %s; using default fail handler",
            previous_intent,
            intent.name,
        )
        return Transition(
            handler=handlers.default_action_fail, attributes=dict(attrs), accepted=False
        )

    if action.condition is None or action.condition(normalize_slots(slots), attrs):
        return _accept(intent, attrs)

    logger.info(
        "Condition rejected transition %s -> %s (action %s -> %s)",
        previous_intent,
        intent.name,
        action.from_intent,
        action.to_intent,
    )
    fail_handler = action.fail or handlers.default_action_fail
    return Transition(handler=fail_handler, attributes=dict(attrs), accepted=False)


__all__ = ["Transition", "find_action", "evaluate"]
