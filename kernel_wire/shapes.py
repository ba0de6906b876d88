# SPDX-License-Identifier: Apache-2.0
"""
Shape checker: the primitive every kernel-wire validator is built on.

A ``Shape`` is an ordered tuple of ``Field`` rules. ``check_shape`` walks the
rules in declared order and raises on the first violation:

  - required field absent            -> MissingField
  - present field of the wrong kind  -> WrongType
  - string outside its enumeration   -> InvalidEnumValue

Fields the shape does not declare are ignored so that newer peers can add
fields without breaking older validators. The checker knows nothing about
messages, kernels or sessions; higher layers compose it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, FrozenSet, Iterable, Tuple

from kernel_wire import config as _config
from kernel_wire.errors import (
    ROOT_PATH,
    InvalidEnumValue,
    MissingField,
    WrongType,
)

logger = logging.getLogger(__name__)


class Kind(str, Enum):
    """Primitive kinds a field may be declared with."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    ANY = "any"

    def matches(self, value: Any) -> bool:
        if self is Kind.STRING:
            return isinstance(value, str)
        if self is Kind.NUMBER:
            # bool is an int subclass but never a JSON number
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self is Kind.BOOLEAN:
            return isinstance(value, bool)
        if self is Kind.OBJECT:
            return isinstance(value, Mapping)
        if self is Kind.ARRAY:
            return isinstance(value, (list, tuple))
        return True


@dataclass(frozen=True)
class Field:
    """A single field rule inside a shape."""

    name: str
    kind: Kind
    required: bool = True
    nullable: bool = False
    values: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.values and self.kind is not Kind.STRING:
            raise ValueError(f"Field {self.name}: enumerations are only allowed on string fields")


@dataclass(frozen=True)
class Shape:
    """An ordered, immutable record schema."""

    name: str
    fields: Tuple[Field, ...]
    names: FrozenSet[str] = dataclass_field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Shape {self.name}: duplicate fields {duplicates}")
        object.__setattr__(self, "names", frozenset(names))

    def get(self, name: str) -> Field:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(f"Shape {self.name} has no field '{name}'")


def required(name: str, kind: Kind, **kwargs: Any) -> Field:
    return Field(name, kind, required=True, **kwargs)


def optional(name: str, kind: Kind, **kwargs: Any) -> Field:
    return Field(name, kind, required=False, **kwargs)


def shape(name: str, fields: Iterable[Field]) -> Shape:
    return Shape(name, tuple(fields))


def join_path(path: str, name: str) -> str:
    """Build a dotted field path, e.g. ``join_path("header", "msg_id")``."""
    return f"{path}.{name}" if path else name


def check_value(value: Any, rule: Field, path: str) -> None:
    """Check a single present value against its field rule."""
    if value is None and rule.nullable:
        return

    if not rule.kind.matches(value):
        raise WrongType(path, rule.kind.value, value)

    if rule.values and value not in rule.values:
        raise InvalidEnumValue(path, value, rule.values)


def check_field(candidate: Mapping, rule: Field, path: str = "") -> None:
    """Check one field of an already type-checked mapping."""
    field_path = join_path(path, rule.name)
    if rule.name not in candidate:
        if rule.required:
            raise MissingField(field_path)
        return
    check_value(candidate[rule.name], rule, field_path)


def check_shape(candidate: Any, schema: Shape, path: str = "") -> None:
    """
    Validate ``candidate`` against ``schema``.

    Args:
        candidate: Loosely typed record, usually straight out of ``json.loads``.
        schema: Shape to check against.
        path: Dotted prefix for reported field paths (``""`` at the root).

    Raises:
        WrongType: If the candidate is not a mapping, or a field has the wrong kind.
        MissingField: If a required field is absent.
        InvalidEnumValue: If a restricted string field is outside its enumeration.
    """
    if not isinstance(candidate, Mapping):
        raise WrongType(path or ROOT_PATH, Kind.OBJECT.value, candidate)

    for rule in schema.fields:
        check_field(candidate, rule, path)

    if _config.CONFIG.log_extension_fields and logger.isEnabledFor(logging.DEBUG):
        extra = sorted(str(k) for k in candidate.keys() if k not in schema.names)
        if extra:
            logger.debug(f"{schema.name} at '{path or ROOT_PATH}' has extension fields: {extra}")


__all__ = [
    "Kind",
    "Field",
    "Shape",
    "required",
    "optional",
    "shape",
    "join_path",
    "check_value",
    "check_field",
    "check_shape",
]
