# SPDX-License-Identifier: Apache-2.0
"""
Kernel message envelope validation.

A kernel message is checked in a fixed order, stopping at the first failure:

  1. channel        - present and a string (and a known channel when strict)
  2. header         - five required string fields
  3. parent_header  - same rule as header, unless absent or empty
  4. metadata       - an object; buffers, when present, a list of binary blobs;
                      content present
  5. content        - on iopub only, the shape registered for header.msg_type

Content on shell, stdin and control is caller-defined and accepted as-is.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from kernel_wire import config as _config
from kernel_wire.content_schemas import IOPUB_CHANNEL, get_content_shape
from kernel_wire.errors import ROOT_PATH, InvalidEnumValue, ValidationFailure, WrongType
from kernel_wire.shapes import Kind, check_field, check_shape, optional, required, shape

logger = logging.getLogger(__name__)

CHANNELS: Tuple[str, ...] = ("shell", "iopub", "stdin", "control")

BINARY_TYPES = (bytes, bytearray, memoryview)

HEADER_SHAPE = shape("header", (
    required("msg_id", Kind.STRING),
    required("username", Kind.STRING),
    required("session", Kind.STRING),
    required("msg_type", Kind.STRING),
    required("version", Kind.STRING),
))

ENVELOPE_SHAPE = shape("kernel_message", (
    required("channel", Kind.STRING),
    required("header", Kind.OBJECT),
    optional("parent_header", Kind.OBJECT, nullable=True),
    required("metadata", Kind.OBJECT),
    optional("buffers", Kind.ARRAY),
    required("content", Kind.ANY),
))


def validate_header(header: Any, path: str = "header") -> None:
    """
    Validate a message header record.

    Args:
        header: Candidate header.
        path: Field path prefix, ``"header"`` or ``"parent_header"``.

    Raises:
        ValidationFailure: If any of the five header fields is missing or not a string.
    """
    check_shape(header, HEADER_SHAPE, path)


def _is_empty_parent(parent: Any) -> bool:
    return parent is None or (isinstance(parent, Mapping) and len(parent) == 0)


def _validate_channel(msg: Mapping, strict: bool) -> str:
    check_field(msg, ENVELOPE_SHAPE.get("channel"))
    channel = msg["channel"]
    if strict and channel not in CHANNELS:
        raise InvalidEnumValue("channel", channel, CHANNELS)
    return channel


def _validate_buffers(buffers: Any) -> None:
    for i, buf in enumerate(buffers):
        if not isinstance(buf, BINARY_TYPES):
            raise WrongType(f"buffers[{i}]", "binary", buf)


def _validate_envelope(msg: Any, strict: bool) -> None:
    if not isinstance(msg, Mapping):
        raise WrongType(ROOT_PATH, Kind.OBJECT.value, msg)

    channel = _validate_channel(msg, strict)

    check_field(msg, ENVELOPE_SHAPE.get("header"))
    validate_header(msg["header"], "header")

    parent = msg.get("parent_header")
    if not _is_empty_parent(parent):
        validate_header(parent, "parent_header")

    check_field(msg, ENVELOPE_SHAPE.get("metadata"))
    check_field(msg, ENVELOPE_SHAPE.get("buffers"))
    if "buffers" in msg:
        _validate_buffers(msg["buffers"])
    check_field(msg, ENVELOPE_SHAPE.get("content"))

    if channel == IOPUB_CHANNEL:
        content_shape = get_content_shape(msg["header"]["msg_type"], channel)
        check_shape(msg["content"], content_shape, "content")


def validate_kernel_message(msg: Any, *, strict_channels: Optional[bool] = None) -> None:
    """
    Validate a full kernel message envelope.

    Args:
        msg: Candidate message, as produced by deserializing a wire payload.
        strict_channels: Require ``channel`` to be one of ``CHANNELS``.
            Defaults to ``CONFIG.strict_channels``.

    Raises:
        MissingField: If a required envelope, header or content field is absent.
        WrongType: If a field holds the wrong primitive kind.
        UnknownMessageType: If an iopub message type has no registered content shape.
        InvalidEnumValue: If a restricted field is outside its enumeration.
    """
    strict = _config.CONFIG.strict_channels if strict_channels is None else strict_channels
    try:
        _validate_envelope(msg, strict)
    except ValidationFailure as exc:
        logger.debug(f"Rejected kernel message: {exc}")
        raise


__all__ = [
    "CHANNELS",
    "HEADER_SHAPE",
    "ENVELOPE_SHAPE",
    "validate_header",
    "validate_kernel_message",
]
