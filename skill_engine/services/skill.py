"""Skill registry: intents, transition actions, and fallback handlers."""

from __future__ import annotations

from typing import Any, Callable, Iterable, MutableMapping, Optional, Union

from skill_engine.core.config import settings
from skill_engine.core.logging import get_logger
from skill_engine.core.models import (
    Action,
    AppOptions,
    Application,
    Condition,
    FallbackHandlers,
    Handler,
    Intent,
    async_handler,
    sync_handler,
)
from skill_engine.services.dispatcher import Done, RequestData, dispatch, handle_request

logger = get_logger(__name__)

HandlerLike = Union[Handler, Callable[..., Any]]

DEFAULT_START_TEXT = "Welcome."
DEFAULT_END_TEXT = "Goodbye."
DEFAULT_ACTION_FAIL_TEXT = "Sorry, your command is invalid."


def _as_handler(fn: HandlerLike, asynchronous: bool = False) -> Handler:
    if isinstance(fn, Handler):
        return fn
    return async_handler(fn) if asynchronous else sync_handler(fn)


def _default_start(slots, attrs, request):  # pylint: disable=unused-argument
    return {"text": DEFAULT_START_TEXT, "end": False}


def _default_end(slots, attrs, request):  # pylint: disable=unused-argument
    return DEFAULT_END_TEXT


def _default_action_fail(slots, attrs, request):  # pylint: disable=unused-argument
    return DEFAULT_ACTION_FAIL_TEXT


class Skill:
    """Register intents and transitions, then dispatch requests against them.

    Handler registration helpers double as decorators::

        skill = Skill("greeter")

        @skill.intent("Hello")
        def hello(slots, attrs, request):
            return "Hi there"

        @skill.intent("Lookup", asynchronous=True)
        def lookup(slots, attrs, request, complete):
            complete({"text": "Found it", "end": False})
    """

    def __init__(
        self,
        name: str,
        *,
        ids: Optional[Iterable[str]] = None,
        version: Optional[str] = None,
    ) -> None:
        self.name = name
        self.options = AppOptions(
            ids=frozenset(settings.SKILL_APPLICATION_IDS if ids is None else ids),
            version=version or settings.SKILL_RESPONSE_VERSION,
        )
        self._intents: MutableMapping[str, Intent] = {}
        self._actions: list[Action] = []
        self._on_start = sync_handler(_default_start)
        self._on_end = sync_handler(_default_end)
        self._default_action_fail = sync_handler(_default_action_fail)

    def intent(
        self,
        name: str,
        handler: Optional[HandlerLike] = None,
        *,
        asynchronous: bool = False,
    ) -> Any:
        """Register or replace the handler for intent ``name``."""

        def register(fn: HandlerLike) -> HandlerLike:
            if name in self._intents:
                logger.warning("Replacing handler for intent %s in skill %s", name, self.name)
            self._intents[name] = Intent(name=name, handler=_as_handler(fn, asynchronous))
            return fn

        if handler is None:
            return register
        return register(handler)

    def action(
        self,
        from_intent: str,
        to_intent: str,
        condition: Optional[Condition] = None,
        fail: Optional[HandlerLike] = None,
        *,
        asynchronous_fail: bool = False,
    ) -> Action:
        """Declare an allowed transition; ``*`` on either side matches any intent."""
        action = Action(
            from_intent=from_intent,
            to_intent=to_intent,
            condition=condition,
            fail=_as_handler(fail, asynchronous_fail) if fail is not None else None,
        )
        self._actions.append(action)
        return action

    def on_start(self, fn: HandlerLike, *, asynchronous: bool = False) -> HandlerLike:
        """Set the handler answering ``LaunchRequest``."""
        self._on_start = _as_handler(fn, asynchronous)
        return fn

    def on_end(self, fn: HandlerLike, *, asynchronous: bool = False) -> HandlerLike:
        """Set the handler answering ``SessionEndedRequest``."""
        self._on_end = _as_handler(fn, asynchronous)
        return fn

    def default_action_fail(self, fn: HandlerLike, *, asynchronous: bool = False) -> HandlerLike:
        """Set the handler used when a transition is not allowed."""
        self._default_action_fail = _as_handler(fn, asynchronous)
        return fn

    def application(self) -> Application:
        """Return an immutable snapshot of the registered intents and actions."""
        return Application(
            intents=dict(self._intents),
            actions=tuple(self._actions),
            options=self.options,
        )

    def fallbacks(self) -> FallbackHandlers:
        return FallbackHandlers(
            on_start=self._on_start,
            on_end=self._on_end,
            default_action_fail=self._default_action_fail,
        )

    def handle(self, data: RequestData, done: Done) -> None:
        """Dispatch ``data`` and deliver the response to ``done``."""
        dispatch(self.application(), data, self.fallbacks(), done)

    async def handle_async(self, data: RequestData, *, offload: bool = False) -> dict[str, Any]:
        """Dispatch ``data`` and return the response once the handler completes.

        ``offload`` runs the dispatch in the default executor; see
        :func:`~skill_engine.services.dispatcher.handle_request`.
        """
        return await handle_request(
            self.application(), data, self.fallbacks(), offload=offload
        )


__all__ = [
    "Skill",
    "DEFAULT_START_TEXT",
    "DEFAULT_END_TEXT",
    "DEFAULT_ACTION_FAIL_TEXT",
]
