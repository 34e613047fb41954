"""Application definition types consumed by the dispatch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

START_INTENT = "@start"
WILDCARD = "*"
DEFAULT_RESPONSE_VERSION = "0.0.1"

Slots = dict[str, Any]
Attributes = dict[str, Any]
ResponseOptions = Union[str, Mapping[str, Any]]
Condition = Callable[[Slots, Attributes], bool]


class HandlerKind(str, Enum):
    """Calling convention chosen when a handler is registered."""

    SYNC = "sync"
    ASYNC = "async"


@dataclass(frozen=True, slots=True)
class Handler:
    """A callable tagged with its calling convention.

    ``SYNC`` handlers are called as ``fn(slots, attrs, request)`` and return the
    response options. ``ASYNC`` handlers are called as
    ``fn(slots, attrs, request, complete)`` and must call ``complete(options)``
    exactly once.
    """

    fn: Callable[..., Any]
    kind: HandlerKind = HandlerKind.SYNC

    @property
    def is_async(self) -> bool:
        return self.kind is HandlerKind.ASYNC


def sync_handler(fn: Callable[..., ResponseOptions]) -> Handler:
    """Tag ``fn`` as a synchronous handler."""
    return Handler(fn=fn, kind=HandlerKind.SYNC)


def async_handler(fn: Callable[..., None]) -> Handler:
    """Tag ``fn`` as a handler that answers through a completion callback."""
    return Handler(fn=fn, kind=HandlerKind.ASYNC)


@dataclass(frozen=True, slots=True)
class Intent:
    """A named intent bound to the handler that answers it."""

    name: str
    handler: Handler


@dataclass(frozen=True, slots=True)
class Action:
    """An allowed (or guarded) transition between two intents.

    ``from_intent`` and ``to_intent`` accept :data:`WILDCARD` to match any intent.
    """

    from_intent: str
    to_intent: str
    condition: Optional[Condition] = None
    fail: Optional[Handler] = None

    def matches(self, from_intent: str | None, to_intent: str) -> bool:
        return self.from_intent == from_intent and self.to_intent == to_intent


@dataclass(frozen=True, slots=True)
class AppOptions:
    """Identity and protocol version settings of a skill."""

    ids: frozenset[str] = frozenset()
    version: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Application:
    """Read-only snapshot of a configured skill."""

    intents: Mapping[str, Intent] = field(default_factory=dict)
    actions: tuple[Action, ...] = ()
    options: Optional[AppOptions] = None


@dataclass(frozen=True, slots=True)
class FallbackHandlers:
    """Handlers for session start, session end, and rejected transitions."""

    on_start: Handler
    on_end: Handler
    default_action_fail: Handler


__all__ = [
    "START_INTENT",
    "WILDCARD",
    "DEFAULT_RESPONSE_VERSION",
    "Slots",
    "Attributes",
    "ResponseOptions",
    "Condition",
    "HandlerKind",
    "Handler",
    "sync_handler",
    "async_handler",
    "Intent",
    "Action",
    "AppOptions",
    "Application",
    "FallbackHandlers",
]
