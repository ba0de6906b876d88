# SPDX-License-Identifier: Apache-2.0
"""
Content shapes for messages broadcast on the iopub channel.

Only iopub is a closed set of well-known event types that clients dispatch on
by ``msg_type``; shell, stdin and control carry caller-defined content and are
not looked up here. Adding a notification type is a table edit.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from kernel_wire.errors import UnknownMessageType
from kernel_wire.shapes import Kind, Shape, optional, required, shape

IOPUB_CHANNEL = "iopub"

EXECUTION_STATES: Tuple[str, ...] = ("starting", "idle", "busy", "restarting", "dead")


def _content(msg_type: str, *fields) -> Shape:
    return shape(f"{msg_type}.content", fields)


IOPUB_CONTENT_SHAPES: Mapping[str, Shape] = MappingProxyType({
    "stream": _content(
        "stream",
        required("name", Kind.STRING),
        required("text", Kind.STRING),
    ),
    "display_data": _content(
        "display_data",
        required("data", Kind.OBJECT),
        required("metadata", Kind.OBJECT),
        optional("transient", Kind.OBJECT),
    ),
    "update_display_data": _content(
        "update_display_data",
        required("data", Kind.OBJECT),
        required("metadata", Kind.OBJECT),
        optional("transient", Kind.OBJECT),
    ),
    "execute_input": _content(
        "execute_input",
        required("code", Kind.STRING),
        required("execution_count", Kind.NUMBER),
    ),
    "execute_result": _content(
        "execute_result",
        required("execution_count", Kind.NUMBER),
        required("data", Kind.OBJECT),
        required("metadata", Kind.OBJECT),
    ),
    "error": _content(
        "error",
        required("ename", Kind.STRING),
        required("evalue", Kind.STRING),
        required("traceback", Kind.ARRAY),
    ),
    "status": _content(
        "status",
        required("execution_state", Kind.STRING, values=EXECUTION_STATES),
    ),
    "clear_output": _content(
        "clear_output",
        required("wait", Kind.BOOLEAN),
    ),
    "comm_open": _content(
        "comm_open",
        required("comm_id", Kind.STRING),
        required("target_name", Kind.STRING),
        required("data", Kind.OBJECT),
    ),
    "comm_msg": _content(
        "comm_msg",
        required("comm_id", Kind.STRING),
        required("data", Kind.OBJECT),
    ),
    "comm_close": _content(
        "comm_close",
        required("comm_id", Kind.STRING),
        optional("data", Kind.OBJECT),
    ),
    "shutdown_reply": _content(
        "shutdown_reply",
        required("restart", Kind.BOOLEAN),
    ),
})


def get_content_shape(msg_type: str, channel: str = IOPUB_CHANNEL) -> Shape:
    """Return the content shape for an iopub message type."""
    found = IOPUB_CONTENT_SHAPES.get(msg_type) if isinstance(msg_type, str) else None
    if found is None:
        raise UnknownMessageType(msg_type, channel)
    return found


def iopub_message_types() -> Tuple[str, ...]:
    """All registered iopub message types, sorted."""
    return tuple(sorted(IOPUB_CONTENT_SHAPES))


__all__ = [
    "IOPUB_CHANNEL",
    "EXECUTION_STATES",
    "IOPUB_CONTENT_SHAPES",
    "get_content_shape",
    "iopub_message_types",
]
