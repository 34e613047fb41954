"""Core exception types shared across layers."""

from __future__ import annotations

from typing import Any


class SkillEngineError(Exception):
    """Base class for errors raised by the skill engine."""


class ValidationError(SkillEngineError):
    """Raised when an inbound request is refused before any handler runs."""


class HandlerContractError(SkillEngineError):
    """Raised when a handler breaks its calling convention."""


class ProtocolError(SkillEngineError):
    """Protocol-shaped error surfaced to the hosting layer."""

    def __init__(self, message: str, error_type: str = "INTERNAL_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type

    def as_dict(self) -> dict[str, Any]:
        """Return the error body sent back to the platform."""
        return {"type": self.error_type, "message": self.message}


_ERROR_TYPES: dict[type[Exception], str] = {
    ValidationError: "INVALID_REQUEST",
    HandlerContractError: "INTERNAL_ERROR",
}


def to_protocol_error(exc: Exception) -> ProtocolError:
    """Convert ``exc`` into a :class:`ProtocolError` chained to the original."""

    if isinstance(exc, ProtocolError):
        return exc
    error_type = next(
        (name for kind, name in _ERROR_TYPES.items() if isinstance(exc, kind)),
        "INTERNAL_ERROR",
    )
    error = ProtocolError(str(exc), error_type=error_type)
    error.__cause__ = exc
    return error


__all__ = [
    "SkillEngineError",
    "ValidationError",
    "HandlerContractError",
    "ProtocolError",
    "to_protocol_error",
]
