# SPDX-License-Identifier: Apache-2.0
"""
Shared payload fixtures for the kernel-wire test suite.

``make_message`` stands in for the message construction layer: it builds a
well-formed envelope the way a client would before putting it on the wire.
"""

from __future__ import annotations

import copy
import uuid
from typing import Any, Dict, Optional

PYTHON_SPEC: Dict[str, Any] = {
    "name": "Python",
    "spec": {
        "language": "python",
        "argv": [],
        "display_name": "python",
        "env": {},
    },
    "resources": {"foo": "bar"},
}

DEFAULT_FILE: Dict[str, Any] = {
    "name": "test",
    "path": "",
    "type": "file",
    "created": "yesterday",
    "last_modified": "today",
    "writable": True,
    "mimetype": "text/plain",
    "content": "hello, world!",
    "format": "text",
}

HEADER_FIELDS = ("msg_id", "username", "session", "msg_type", "version")


def make_message(
    msg_type: str,
    channel: str,
    session: str,
    content: Optional[Any] = None,
    *,
    username: str = "",
    msg_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a well-formed kernel message envelope."""
    return {
        "header": {
            "username": username,
            "version": "5.0",
            "session": session,
            "msg_id": msg_id or uuid.uuid4().hex,
            "msg_type": msg_type,
        },
        "parent_header": {},
        "channel": channel,
        "content": {} if content is None else content,
        "metadata": {},
        "buffers": [],
    }


def clone(payload: Dict[str, Any]) -> Dict[str, Any]:
    return copy.deepcopy(payload)
