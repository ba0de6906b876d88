# SPDX-License-Identifier: Apache-2.0
"""
Validators for the REST-side records: kernel and session identities, kernel
specifications, contents models and checkpoints.

Each validator is a direct shape check; session ids additionally run the
kernel id validator on their embedded ``kernel`` record.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Tuple

from kernel_wire.errors import ValidationFailure, WrongType
from kernel_wire.shapes import Kind, check_shape, join_path, optional, required, shape

logger = logging.getLogger(__name__)

CONTENT_TYPES: Tuple[str, ...] = ("file", "directory", "notebook")
CONTENT_FORMATS: Tuple[str, ...] = ("json", "text", "base64")

KERNEL_ID_SHAPE = shape("kernel_id", (
    required("name", Kind.STRING),
    required("id", Kind.STRING),
))

SESSION_ID_SHAPE = shape("session_id", (
    required("id", Kind.STRING),
    required("kernel", Kind.OBJECT),
    required("notebook", Kind.OBJECT),
))

NOTEBOOK_REF_SHAPE = shape("notebook_ref", (
    required("path", Kind.STRING),
))

KERNEL_SPEC_SHAPE = shape("kernel_spec", (
    required("name", Kind.STRING),
    required("spec", Kind.OBJECT),
    required("resources", Kind.OBJECT),
))

KERNEL_SPEC_FILE_SHAPE = shape("kernel_spec.spec", (
    required("language", Kind.STRING),
    required("display_name", Kind.STRING),
    required("argv", Kind.ARRAY),
    optional("env", Kind.OBJECT),
))

CONTENTS_MODEL_SHAPE = shape("contents_model", (
    required("path", Kind.STRING),
    optional("name", Kind.STRING),
    optional("type", Kind.STRING, values=CONTENT_TYPES),
    optional("created", Kind.STRING),
    optional("last_modified", Kind.STRING),
    optional("writable", Kind.BOOLEAN),
    optional("mimetype", Kind.STRING, nullable=True),
    optional("content", Kind.ANY),
    optional("format", Kind.STRING, nullable=True, values=CONTENT_FORMATS),
))

CHECKPOINT_MODEL_SHAPE = shape("checkpoint_model", (
    required("id", Kind.STRING),
    required("last_modified", Kind.STRING),
))


def _logs_rejection(record: str) -> Callable[[Callable[..., None]], Callable[..., None]]:
    def decorator(func: Callable[..., None]) -> Callable[..., None]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            try:
                func(*args, **kwargs)
            except ValidationFailure as exc:
                logger.debug(f"Rejected {record}: {exc}")
                raise
        return wrapper
    return decorator


def _check_kernel_id(candidate: Any, path: str = "") -> None:
    check_shape(candidate, KERNEL_ID_SHAPE, path)


@_logs_rejection("kernel id")
def validate_kernel_id(candidate: Any, path: str = "") -> None:
    """Validate a running kernel's ``{name, id}`` identity."""
    _check_kernel_id(candidate, path)


@_logs_rejection("session id")
def validate_session_id(candidate: Any) -> None:
    """
    Validate a session identity.

    The embedded ``kernel`` record is validated as a kernel id, and the
    ``notebook`` reference must carry a string ``path``.
    """
    check_shape(candidate, SESSION_ID_SHAPE)
    _check_kernel_id(candidate["kernel"], "kernel")
    check_shape(candidate["notebook"], NOTEBOOK_REF_SHAPE, "notebook")


@_logs_rejection("kernel spec")
def validate_kernel_spec(candidate: Any) -> None:
    """Validate a kernel specification as served by the kernelspecs API."""
    check_shape(candidate, KERNEL_SPEC_SHAPE)
    check_shape(candidate["spec"], KERNEL_SPEC_FILE_SHAPE, "spec")

    for key, value in candidate["resources"].items():
        if not isinstance(value, str):
            raise WrongType(join_path("resources", str(key)), Kind.STRING.value, value)


@_logs_rejection("contents model")
def validate_contents_model(candidate: Any) -> None:
    """Validate a filesystem entry as returned by the contents API."""
    check_shape(candidate, CONTENTS_MODEL_SHAPE)


@_logs_rejection("checkpoint model")
def validate_checkpoint_model(candidate: Any) -> None:
    """Validate a checkpoint record."""
    check_shape(candidate, CHECKPOINT_MODEL_SHAPE)


__all__ = [
    "CONTENT_TYPES",
    "CONTENT_FORMATS",
    "KERNEL_ID_SHAPE",
    "SESSION_ID_SHAPE",
    "NOTEBOOK_REF_SHAPE",
    "KERNEL_SPEC_SHAPE",
    "KERNEL_SPEC_FILE_SHAPE",
    "CONTENTS_MODEL_SHAPE",
    "CHECKPOINT_MODEL_SHAPE",
    "validate_kernel_id",
    "validate_session_id",
    "validate_kernel_spec",
    "validate_contents_model",
    "validate_checkpoint_model",
]
