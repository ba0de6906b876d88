# SPDX-License-Identifier: Apache-2.0
"""
kernel-wire: structural validation for kernel protocol messages and the
kernel, session, kernelspec, contents and checkpoint records of the notebook
server API.

Every validator returns ``None`` on success and raises a
``ValidationFailure`` subclass on the first offending field.
"""

from __future__ import annotations

from kernel_wire.config import CONFIG, ValidatorConfig
from kernel_wire.content_schemas import (
    IOPUB_CONTENT_SHAPES,
    get_content_shape,
    iopub_message_types,
)
from kernel_wire.errors import (
    InvalidEnumValue,
    MissingField,
    UnknownMessageType,
    ValidationFailure,
    WrongType,
)
from kernel_wire.messages import (
    CHANNELS,
    validate_header,
    validate_kernel_message,
)
from kernel_wire.models import (
    validate_checkpoint_model,
    validate_contents_model,
    validate_kernel_id,
    validate_kernel_spec,
    validate_session_id,
)
from kernel_wire.shapes import Field, Kind, Shape, check_shape

__version__ = "0.1.0"

__all__ = [
    "CONFIG",
    "ValidatorConfig",
    "ValidationFailure",
    "MissingField",
    "WrongType",
    "UnknownMessageType",
    "InvalidEnumValue",
    "Kind",
    "Field",
    "Shape",
    "check_shape",
    "CHANNELS",
    "IOPUB_CONTENT_SHAPES",
    "get_content_shape",
    "iopub_message_types",
    "validate_header",
    "validate_kernel_message",
    "validate_kernel_id",
    "validate_session_id",
    "validate_kernel_spec",
    "validate_contents_model",
    "validate_checkpoint_model",
]
