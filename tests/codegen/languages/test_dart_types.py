"""
Tests for Dart decode/encode expression mapping.

Tests cover:
- Plain, enum and nested field expressions
- Custom parsing taking priority over every other kind
- Nullable type and copyWith parameter types
"""

import pytest

from dto_generator.codegen.core.schema import CustomParsing, FieldKind, SourceField
from dto_generator.codegen.languages.dart import DartTypeMapper


@pytest.fixture
def mapper():
    return DartTypeMapper()


def make_field(declared_type, name, nullable=False, key=None, **kwargs):
    return SourceField(
        declared_type=declared_type,
        name=name,
        nullable=nullable,
        converted_name=key or name,
        **kwargs,
    )


def test_plain_field(mapper):
    """Built-in values are cast on decode and passed through on encode."""
    dart_field = mapper.map_field(make_field("String", "userName", key="user_name"))

    assert dart_field.type == "String"
    assert dart_field.copy_type == "String?"
    assert dart_field.key == "user_name"
    assert dart_field.decode == "map['user_name'] as String"
    assert dart_field.encode == "userName"


def test_nullable_plain_field_gets_marker(mapper):
    """An optional field without ``?`` is emitted with one."""
    dart_field = mapper.map_field(make_field("int", "age", nullable=True))

    assert dart_field.type == "int?"
    assert dart_field.copy_type == "int?"
    assert dart_field.decode == "map['age'] as int?"


def test_enum_field(mapper):
    """Enums go through the ``<name>FromString``/``<name>ToString`` helpers."""
    dart_field = mapper.map_field(make_field("Count", "count", kind=FieldKind.ENUM))

    assert dart_field.decode == "countFromString(map['count'])"
    assert dart_field.encode == "countToString(count)"


def test_required_nested_field(mapper):
    """A required nested value fails loudly when the key is missing."""
    dart_field = mapper.map_field(
        make_field("Address", "address", kind=FieldKind.NESTED)
    )

    assert dart_field.decode == (
        "map['address'] != null "
        "? Address.fromMap(map['address'] as Map<String, dynamic>) "
        ": throw ArgumentError.notNull('address')"
    )
    assert dart_field.encode == "address.toMap()"


def test_optional_nested_field(mapper):
    """An optional nested value decodes to null and encodes null-safely."""
    dart_field = mapper.map_field(
        make_field(
            "Address?", "billingAddress", nullable=True, key="billing_address",
            kind=FieldKind.NESTED,
        )
    )

    assert dart_field.decode == (
        "map['billing_address'] != null "
        "? Address.fromMap(map['billing_address'] as Map<String, dynamic>) "
        ": null"
    )
    assert dart_field.encode == "billingAddress?.toMap()"


def test_custom_parsing_beats_enum(mapper):
    """A parsing directive wins over the enum marker."""
    dart_field = mapper.map_field(
        make_field(
            "Count",
            "count",
            kind=FieldKind.ENUM,
            custom_parsing=CustomParsing("Count.values.byName(value)", "value.name"),
        )
    )

    assert dart_field.decode == "Count.values.byName(map['count'])"
    assert dart_field.encode == "count.name"


def test_custom_decode_only_falls_back_for_encode(mapper):
    """A missing ``toExpr`` leaves encoding to the field kind."""
    dart_field = mapper.map_field(
        make_field(
            "DateTime",
            "createdAt",
            kind=FieldKind.NESTED,
            custom_parsing=CustomParsing("DateTime.parse(value)", None),
        )
    )

    assert dart_field.decode == "DateTime.parse(map['createdAt'])"
    assert dart_field.encode == "createdAt.toMap()"


def test_required_nested_field_with_nullable_type(mapper):
    """A ``Type?`` field the constructor requires still encodes null-safely."""
    dart_field = mapper.map_field(
        make_field("Sub?", "sub", nullable=False, kind=FieldKind.NESTED)
    )

    assert dart_field.type == "Sub?"
    assert dart_field.encode == "sub?.toMap()"
    assert dart_field.decode.endswith(": throw ArgumentError.notNull('sub')")
