"""Entry point turning a skill request into a protocol response."""

from __future__ import annotations

import asyncio
import logging
from contextvars import copy_context
from typing import Any, Callable, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from skill_engine.core.api_models import SkillRequest
from skill_engine.core.exceptions import ProtocolError, ValidationError, to_protocol_error
from skill_engine.core.logging import get_logger, session_context
from skill_engine.core.models import START_INTENT, Application, Attributes, FallbackHandlers
from skill_engine.services.handler_invoker import invoke_handler
from skill_engine.services.transition_policy import evaluate

logger = get_logger(__name__)

LAUNCH_REQUEST = "LaunchRequest"
INTENT_REQUEST = "IntentRequest"
SESSION_ENDED_REQUEST = "SessionEndedRequest"

RequestData = Union[SkillRequest, Mapping[str, Any]]
Done = Callable[[dict[str, Any]], None]


def _refuse(message: str) -> ProtocolError:
    logger.warning("Refusing request: %s", message)
    return to_protocol_error(ValidationError(message))


def _parse_request(data: RequestData) -> SkillRequest:
    if isinstance(data, SkillRequest):
        return data
    try:
        return SkillRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise _refuse(f"Malformed request: {exc.error_count()} validation error(s)") from exc


def _check_application_id(app: Application, request: SkillRequest) -> None:
    ids = app.options.ids if app.options is not None else frozenset()
    if ids and request.application_id not in ids:
        raise _refuse(f"Application id: '{request.application_id}' is not valid")


def _bootstrap_attributes(request: SkillRequest) -> Attributes:
    session = request.session
    if session.new:
        return {"previousIntent": START_INTENT}
    if session.attributes is None:
        return {}
    return dict(session.attributes)


def dispatch(
    app: Application,
    data: RequestData,
    handlers: FallbackHandlers,
    done: Done,
) -> None:
    """Handle ``data`` and call ``done`` once with the response.

    Validation failures (unknown application id, unknown intent, unsupported
    request type, malformed payload) raise a
    :class:`~skill_engine.core.exceptions.ProtocolError` before any handler
    runs and ``done`` is never called. Handler exceptions propagate unchanged.
    """
    request = _parse_request(data)
    with session_context(request.session.session_id, request.application_id):
        _check_application_id(app, request)
        attrs = _bootstrap_attributes(request)
        request_type = request.request_type

        logger.info("Handling request: %s", request_type)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Request payload: %s",
                request.model_dump_json(by_alias=True, exclude_none=True, indent=2),
            )

        if request_type == LAUNCH_REQUEST:
            invoke_handler(handlers.on_start, None, attrs, app, request, done)
        elif request_type == INTENT_REQUEST:
            payload = request.request.intent
            if payload is None:
                raise _refuse("Intent request without an intent")
            logger.info("Handling intent: %s", payload.name)
            intent = app.intents.get(payload.name)
            if intent is None:
                raise _refuse(f"Nonexistent intent: '{payload.name}'")
            transition = evaluate(intent, payload.slots, attrs, app, handlers)
            invoke_handler(
                transition.handler, payload.slots, transition.attributes, app, request, done
            )
        elif request_type == SESSION_ENDED_REQUEST:
            invoke_handler(handlers.on_end, None, attrs, app, request, done)
        else:
            raise _refuse(f"Unsupported request: '{request_type}'")


def _resolve(future: asyncio.Future[dict[str, Any]], response: dict[str, Any]) -> None:
    # The awaiting side may have timed out or been cancelled meanwhile.
    if future.done():
        logger.debug("Dropping response for an abandoned request")
        return
    future.set_result(response)


def _deliver_to(
    loop: asyncio.AbstractEventLoop, future: asyncio.Future[dict[str, Any]]
) -> Done:
    def _done(response: dict[str, Any]) -> None:
        if loop.is_closed():
            logger.debug("Dropping response; event loop already closed")
            return
        loop.call_soon_threadsafe(_resolve, future, response)

    return _done


async def handle_request(
    app: Application,
    data: RequestData,
    handlers: FallbackHandlers,
    *,
    offload: bool = False,
) -> dict[str, Any]:
    """Awaitable form of :func:`dispatch` for asyncio hosts.

    Callback-style handlers may complete from any thread; the response is
    delivered back onto the running loop, and completions arriving after the
    caller stopped waiting are dropped. With ``offload`` the dispatch itself
    (including synchronous handlers) runs in the loop's default executor so a
    slow handler does not stall other requests. There is no timeout: wrap the
    call in :func:`asyncio.wait_for` when handlers might never complete.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[dict[str, Any]] = loop.create_future()
    done = _deliver_to(loop, future)

    if offload:
        ctx = copy_context()
        await loop.run_in_executor(None, ctx.run, dispatch, app, data, handlers, done)
    else:
        dispatch(app, data, handlers, done)
    return await future


__all__ = [
    "LAUNCH_REQUEST",
    "INTENT_REQUEST",
    "SESSION_ENDED_REQUEST",
    "dispatch",
    "handle_request",
]
