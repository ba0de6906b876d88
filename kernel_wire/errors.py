# SPDX-License-Identifier: Apache-2.0
"""
Validation failure taxonomy for kernel-wire.

Every validator in this package raises a subclass of ``ValidationFailure``.
The failure carries the dotted path of the offending field (``field``) and a
``details`` dict suitable for structured logging, so callers can reject and
log a payload without re-deriving what was wrong with it.

    try:
        validate_kernel_message(msg)
    except ValidationFailure as exc:
        logger.warning("dropping message", extra={"field": exc.field, **exc.details})
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

ROOT_PATH = "<root>"


def _preview(value: Any, limit: int = 80) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


class ValidationFailure(Exception):
    """Base exception for all shape validation failures."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.field = field
        self.details = details or {}

        field_info = f" (field: {field})" if field else ""
        super().__init__(f"{message}{field_info}")


class MissingField(ValidationFailure):
    """A required field is absent."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Missing property '{path}'",
            field=path,
            details={"reason": "missing"},
        )


class WrongType(ValidationFailure):
    """A field is present but holds the wrong primitive kind."""

    def __init__(self, path: str, expected: str, actual: Any):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Property '{path}' is not of type '{expected}', "
            f"got {type(actual).__name__} {_preview(actual)}",
            field=path,
            details={
                "reason": "wrong_type",
                "expected": expected,
                "actual_type": type(actual).__name__,
            },
        )


class UnknownMessageType(ValidationFailure):
    """A notification-channel message type has no registered content shape."""

    def __init__(self, msg_type: Any, channel: str):
        self.msg_type = msg_type
        self.channel = channel
        super().__init__(
            f"Invalid kernel message: {channel} message type {msg_type!r} not handled",
            field="header.msg_type",
            details={
                "reason": "unknown_message_type",
                "msg_type": msg_type,
                "channel": channel,
            },
        )


class InvalidEnumValue(ValidationFailure):
    """A restricted string field holds a value outside its enumeration."""

    def __init__(self, path: str, value: Any, allowed: Sequence[str]):
        self.path = path
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Property '{path}' is not one of the valid values {list(self.allowed)}, "
            f"got {_preview(value)}",
            field=path,
            details={
                "reason": "invalid_enum_value",
                "value": value,
                "allowed": list(self.allowed),
            },
        )


__all__ = [
    "ROOT_PATH",
    "ValidationFailure",
    "MissingField",
    "WrongType",
    "UnknownMessageType",
    "InvalidEnumValue",
]
