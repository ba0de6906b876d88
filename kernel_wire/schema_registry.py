# SPDX-License-Identifier: Apache-2.0
"""
JSON Schema registry (Draft 2020-12) for kernel-wire shapes.

Renders every registered ``Shape`` as a JSON Schema document so that peers
outside Python can validate with the same rules, and exposes:

    list_schemas() -> Dict[str, str]          name -> $id
    get_schema(name) -> dict                  copy of the document
    get_validator(name) -> Draft202012Validator
    validate_json(name, obj) -> None          raises SchemaValidationFailure
    export_schemas(directory) -> List[Path]

Documents reference each other by absolute ``$id`` (the envelope points at the
header and at every iopub content document) and are resolved through a
``referencing.Registry``. Documents and validators are built lazily and cached
under a single lock.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as JSONSchemaValidationError
from jsonschema.validators import extend
from referencing import Registry
from referencing.jsonschema import DRAFT202012

from kernel_wire import config as _config
from kernel_wire.content_schemas import IOPUB_CHANNEL, IOPUB_CONTENT_SHAPES, iopub_message_types
from kernel_wire.errors import ROOT_PATH, ValidationFailure
from kernel_wire.messages import ENVELOPE_SHAPE, HEADER_SHAPE
from kernel_wire.models import (
    CHECKPOINT_MODEL_SHAPE,
    CONTENTS_MODEL_SHAPE,
    KERNEL_ID_SHAPE,
    KERNEL_SPEC_FILE_SHAPE,
    KERNEL_SPEC_SHAPE,
    NOTEBOOK_REF_SHAPE,
    SESSION_ID_SHAPE,
)
from kernel_wire.shapes import Field, Kind, Shape

logger = logging.getLogger(__name__)

DRAFT_202012 = "https://json-schema.org/draft/2020-12/schema"

# Container types follow Kind.matches: any Mapping is an object and a tuple
# is an array, as they are for check_shape.
ShapeValidator = extend(
    Draft202012Validator,
    type_checker=Draft202012Validator.TYPE_CHECKER.redefine_many({
        "object": lambda checker, instance: Kind.OBJECT.matches(instance),
        "array": lambda checker, instance: Kind.ARRAY.matches(instance),
    }),
)

_STORE_LOCK = threading.RLock()
_SCHEMA_STORE: Dict[str, dict] = {}
_VALIDATOR_CACHE: Dict[str, Draft202012Validator] = {}
_REGISTRY: Optional[Registry] = None


class SchemaValidationFailure(ValidationFailure):
    """A document failed validation against an exported JSON Schema."""


# ---------------------------------------------------------------------------
# Shape -> JSON Schema rendering
# ---------------------------------------------------------------------------

def schema_id(name: str) -> str:
    """Absolute ``$id`` for a registered document name."""
    return f"{_config.CONFIG.schema_base_url}/{name}.json"


def field_to_json_schema(rule: Field) -> dict:
    """Render one field rule as a JSON Schema fragment."""
    if rule.kind is Kind.ANY:
        return {}

    fragment: Dict[str, Any] = {"type": [rule.kind.value, "null"] if rule.nullable else rule.kind.value}
    if rule.values:
        fragment["enum"] = list(rule.values) + ([None] if rule.nullable else [])
    return fragment


def to_json_schema(
    shape: Shape,
    name: Optional[str] = None,
    overrides: Optional[Mapping[str, dict]] = None,
) -> dict:
    """
    Render a shape as an object schema.

    Args:
        shape: Shape to render.
        name: Registry name; when given the document gets ``$schema`` and ``$id``.
        overrides: Per-field fragments that replace the rendered ones, used to
            point nested records at their own documents.
    """
    overrides = overrides or {}
    properties = {
        rule.name: overrides.get(rule.name, field_to_json_schema(rule))
        for rule in shape.fields
    }
    document: Dict[str, Any] = {}
    if name is not None:
        document["$schema"] = DRAFT_202012
        document["$id"] = schema_id(name)
    document.update({
        "title": shape.name,
        "type": "object",
        "properties": properties,
        "required": [rule.name for rule in shape.fields if rule.required],
    })
    return document


def _ref(name: str) -> dict:
    return {"$ref": schema_id(name)}


def _envelope_document() -> dict:
    empty_parent = [{"type": "object", "maxProperties": 0}, {"type": "null"}]
    document = to_json_schema(
        ENVELOPE_SHAPE,
        "kernel_message",
        overrides={
            "header": _ref("header"),
            "parent_header": {"anyOf": [_ref("header")] + empty_parent},
        },
    )

    rules: List[dict] = [{
        "if": {"required": ["channel"], "properties": {"channel": {"const": IOPUB_CHANNEL}}},
        "then": {"properties": {"header": {"properties": {
            "msg_type": {"enum": list(iopub_message_types())},
        }}}},
    }]
    for msg_type in iopub_message_types():
        rules.append({
            "if": {
                "required": ["channel", "header"],
                "properties": {
                    "channel": {"const": IOPUB_CHANNEL},
                    "header": {
                        "required": ["msg_type"],
                        "properties": {"msg_type": {"const": msg_type}},
                    },
                },
            },
            "then": {"properties": {"content": _ref(f"iopub/{msg_type}")}},
        })
    document["allOf"] = rules
    return document


def _build_documents() -> Dict[str, dict]:
    documents: Dict[str, dict] = {
        "header": to_json_schema(HEADER_SHAPE, "header"),
        "kernel_message": _envelope_document(),
        "kernel_id": to_json_schema(KERNEL_ID_SHAPE, "kernel_id"),
        "session_id": to_json_schema(
            SESSION_ID_SHAPE,
            "session_id",
            overrides={
                "kernel": _ref("kernel_id"),
                "notebook": to_json_schema(NOTEBOOK_REF_SHAPE),
            },
        ),
        "kernel_spec": to_json_schema(
            KERNEL_SPEC_SHAPE,
            "kernel_spec",
            overrides={
                "spec": to_json_schema(KERNEL_SPEC_FILE_SHAPE),
                "resources": {"type": "object", "additionalProperties": {"type": "string"}},
            },
        ),
        "contents_model": to_json_schema(CONTENTS_MODEL_SHAPE, "contents_model"),
        "checkpoint_model": to_json_schema(CHECKPOINT_MODEL_SHAPE, "checkpoint_model"),
    }
    for msg_type, content_shape in IOPUB_CONTENT_SHAPES.items():
        name = f"iopub/{msg_type}"
        documents[name] = to_json_schema(content_shape, name)
    return documents


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def _load_all_schemas() -> None:
    global _REGISTRY
    with _STORE_LOCK:
        if _SCHEMA_STORE:
            return

        documents = _build_documents()
        for name, document in documents.items():
            Draft202012Validator.check_schema(document)
            _SCHEMA_STORE[name] = document

        # $ref targets must not declare $schema: jsonschema switches to the
        # stock validator class for a subschema that does, dropping the
        # redefined type checker.
        _REGISTRY = Registry().with_resources(
            (document["$id"], DRAFT202012.create_resource(
                {k: v for k, v in document.items() if k != "$schema"}
            ))
            for document in documents.values()
        )
        logger.debug(f"Registered {len(documents)} schemas: {sorted(documents)}")


def _lookup(name: str) -> dict:
    _load_all_schemas()
    if name not in _SCHEMA_STORE:
        suggestions = [n for n in _SCHEMA_STORE if name in n]
        error_msg = f"Schema not found: {name}"
        if suggestions:
            error_msg += "\nDid you mean one of:\n  " + "\n  ".join(sorted(suggestions)[:5])
        raise KeyError(error_msg)
    return _SCHEMA_STORE[name]


def list_schemas() -> Dict[str, str]:
    """Mapping of every registered document name to its ``$id``."""
    with _STORE_LOCK:
        _load_all_schemas()
        return {name: document["$id"] for name, document in _SCHEMA_STORE.items()}


def get_schema(name: str) -> dict:
    """Return a copy of the document registered under ``name``."""
    with _STORE_LOCK:
        return copy.deepcopy(_lookup(name))


def get_validator(name: str) -> Draft202012Validator:
    """Return a cached Draft 2020-12 validator for a registered document."""
    with _STORE_LOCK:
        if name in _VALIDATOR_CACHE:
            return _VALIDATOR_CACHE[name]

        document = _lookup(name)
        validator = ShapeValidator(
            document,
            registry=_REGISTRY,
            format_checker=Draft202012Validator.FORMAT_CHECKER,
        )
        _VALIDATOR_CACHE[name] = validator
        return validator


def validate_json(name: str, obj: Any) -> None:
    """
    Validate ``obj`` against the document registered under ``name``.

    Raises:
        SchemaValidationFailure: If validation fails.
        KeyError: If ``name`` is not registered.
    """
    try:
        get_validator(name).validate(obj)
    except JSONSchemaValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) or ROOT_PATH
        raise SchemaValidationFailure(
            f"JSON Schema validation failed against {name}: {e.message}",
            field=path,
            details={"schema": name, "schema_path": [str(p) for p in e.absolute_schema_path]},
        ) from e


def export_schemas(directory: Path) -> List[Path]:
    """Write every registered document to ``directory`` as ``<name>.json``."""
    directory = Path(directory)
    written = []
    for name in sorted(list_schemas()):
        target = directory / f"{name}.json"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(get_schema(name), indent=2, sort_keys=True) + "\n", encoding="utf-8")
        written.append(target)
    logger.debug(f"Exported {len(written)} schemas to {directory}")
    return written


def clear_cache() -> None:
    """Drop all built documents and validators (primarily for testing)."""
    global _REGISTRY
    with _STORE_LOCK:
        _SCHEMA_STORE.clear()
        _VALIDATOR_CACHE.clear()
        _REGISTRY = None


__all__ = [
    "DRAFT_202012",
    "ShapeValidator",
    "SchemaValidationFailure",
    "schema_id",
    "field_to_json_schema",
    "to_json_schema",
    "list_schemas",
    "get_schema",
    "get_validator",
    "validate_json",
    "export_schemas",
    "clear_cache",
]
