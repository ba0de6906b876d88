# SPDX-License-Identifier: Apache-2.0
"""
Shape checker behavior.

Covers:
  • Required vs optional fields
  • Primitive kind matching (bool is never a number)
  • Nullable fields and string enumerations
  • Extension fields are ignored
  • Declared-order reporting and dotted paths
"""

import logging

import pytest

from kernel_wire.errors import InvalidEnumValue, MissingField, ValidationFailure, WrongType
from kernel_wire.shapes import Field, Kind, Shape, check_shape, optional, required, shape

SAMPLE = shape("sample", (
    required("name", Kind.STRING),
    required("count", Kind.NUMBER),
    optional("enabled", Kind.BOOLEAN),
    optional("tags", Kind.ARRAY),
    optional("extra", Kind.OBJECT),
    optional("mode", Kind.STRING, nullable=True, values=("fast", "slow")),
    optional("anything", Kind.ANY),
))


def test_valid_record_passes():
    check_shape({"name": "x", "count": 1.5, "enabled": False, "tags": [], "mode": "fast"}, SAMPLE)


def test_optional_fields_may_be_absent():
    check_shape({"name": "x", "count": 0}, SAMPLE)


def test_extension_fields_are_ignored():
    check_shape({"name": "x", "count": 3, "unknown": object()}, SAMPLE)


def test_extension_fields_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="kernel_wire.shapes"):
        check_shape({"name": "x", "count": 3, "unknown": 1}, SAMPLE)
    assert "unknown" in caplog.text


def test_extension_field_logging_can_be_disabled(caplog, override_config):
    override_config(log_extension_fields=False)
    with caplog.at_level(logging.DEBUG, logger="kernel_wire.shapes"):
        check_shape({"name": "x", "count": 3, "unknown": 1}, SAMPLE)
    assert "extension fields" not in caplog.text


def test_missing_required_field():
    with pytest.raises(MissingField) as exc_info:
        check_shape({"name": "x"}, SAMPLE)
    assert exc_info.value.field == "count"


@pytest.mark.parametrize("value", ["1", None, [], {}])
def test_number_rejects_non_numbers(value):
    with pytest.raises(WrongType):
        check_shape({"name": "x", "count": value}, SAMPLE)


def test_bool_is_not_a_number():
    with pytest.raises(WrongType) as exc_info:
        check_shape({"name": "x", "count": True}, SAMPLE)
    assert exc_info.value.expected == "number"
    assert exc_info.value.details["actual_type"] == "bool"


def test_int_is_not_a_boolean():
    with pytest.raises(WrongType):
        check_shape({"name": "x", "count": 1, "enabled": 1}, SAMPLE)


def test_present_optional_field_is_type_checked():
    with pytest.raises(WrongType) as exc_info:
        check_shape({"name": "x", "count": 1, "tags": "a,b"}, SAMPLE)
    assert exc_info.value.field == "tags"


def test_tuple_counts_as_array():
    check_shape({"name": "x", "count": 1, "tags": ("a", "b")}, SAMPLE)


def test_nullable_field_accepts_none():
    check_shape({"name": "x", "count": 1, "mode": None}, SAMPLE)


def test_non_nullable_field_rejects_none():
    with pytest.raises(WrongType):
        check_shape({"name": None, "count": 1}, SAMPLE)


def test_enum_value_outside_allowed_set():
    with pytest.raises(InvalidEnumValue) as exc_info:
        check_shape({"name": "x", "count": 1, "mode": "medium"}, SAMPLE)
    assert exc_info.value.allowed == ("fast", "slow")
    assert exc_info.value.value == "medium"


def test_enum_field_still_type_checked():
    with pytest.raises(WrongType):
        check_shape({"name": "x", "count": 1, "mode": 2}, SAMPLE)


def test_any_kind_accepts_every_value():
    for value in (None, 0, "", [], {}, b"\x00"):
        check_shape({"name": "x", "count": 1, "anything": value}, SAMPLE)


@pytest.mark.parametrize("candidate", [None, "record", 1, ["name", "count"]])
def test_non_mapping_candidate(candidate):
    with pytest.raises(WrongType) as exc_info:
        check_shape(candidate, SAMPLE)
    assert exc_info.value.field == "<root>"


def test_nested_path_prefix():
    with pytest.raises(MissingField) as exc_info:
        check_shape({"name": "x"}, SAMPLE, "outer.inner")
    assert exc_info.value.field == "outer.inner.count"
    assert "outer.inner.count" in str(exc_info.value)


def test_nested_non_mapping_reports_prefix():
    with pytest.raises(WrongType) as exc_info:
        check_shape("nope", SAMPLE, "outer")
    assert exc_info.value.field == "outer"


def test_first_failure_in_declared_order():
    with pytest.raises(ValidationFailure) as exc_info:
        check_shape({"count": "bad"}, SAMPLE)
    assert exc_info.value.field == "name"


def test_input_is_not_mutated():
    record = {"name": "x", "count": 1, "unknown": [1, 2]}
    snapshot = {"name": "x", "count": 1, "unknown": [1, 2]}
    check_shape(record, SAMPLE)
    assert record == snapshot


def test_duplicate_field_names_rejected():
    with pytest.raises(ValueError):
        Shape("dup", (Field("a", Kind.STRING), Field("a", Kind.NUMBER)))


def test_enum_only_on_string_fields():
    with pytest.raises(ValueError):
        Field("n", Kind.NUMBER, values=("1",))


def test_shape_lookup_by_name():
    assert SAMPLE.get("count").kind is Kind.NUMBER
    with pytest.raises(KeyError):
        SAMPLE.get("missing")
