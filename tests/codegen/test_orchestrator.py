"""
Tests for the generation pipeline and edit application.

Tests cover:
- Single-class generation replacing the whole text
- Directives flowing through to the generated expressions
- Multi-class generation with per-class failures and import insertion
- Aborted and failed runs
- Edit application and its validation
"""

import pytest

from dto_generator.codegen import (
    DtoOrchestrator,
    GenerationConfig,
    GeneratorError,
    UserAbort,
    apply_edits,
    generate_dto_edits,
    quick_generate,
)
from dto_generator.codegen.core.extractor import NO_FIELDS_MESSAGE
from dto_generator.codegen.core.locator import NO_CLASS_MESSAGE, locate_classes
from dto_generator.codegen.core.schema import EditOperation, FieldKind
from dto_generator.codegen.orchestrator import (
    NO_STYLE_MESSAGE,
    NO_TARGET_MESSAGE,
    SUFFIX_CANCELLED_MESSAGE,
)


def test_single_mode_replaces_whole_text(user_source, single_config):
    """One edit spanning the text, holding imports and the DTO."""
    # Act
    result = DtoOrchestrator(single_config).run(user_source)

    # Assert
    assert result.success
    assert len(result.edits) == 1
    assert result.import_edit is None
    edit = result.edits[0]
    assert edit.range == (0, len(user_source))
    assert edit.replacement_text.startswith("import 'dart:convert';\n")
    assert "class UserDTO {" in edit.replacement_text
    assert "    required this.name,\n    this.age,\n" in edit.replacement_text


def test_resolve_fields_applies_directives_and_naming(profile_source):
    """Field kinds, nullability and keys are resolved together."""
    # Arrange
    config = GenerationConfig(suffix="DTO", naming_style="snake_case")
    orchestrator = DtoOrchestrator(config)
    unit = next(locate_classes(profile_source))

    # Act
    fields = {f.name: f for f in orchestrator.resolve_fields(unit)}

    # Assert
    assert fields["userName"].kind == FieldKind.PLAIN
    assert fields["userName"].converted_name == "user_name"
    assert fields["count"].kind == FieldKind.ENUM
    assert fields["address"].kind == FieldKind.NESTED
    assert not fields["address"].nullable
    assert fields["billingAddress"].nullable
    assert fields["createdAt"].custom_parsing.from_external == "DateTime.parse(value)"


def test_profile_generation_expressions(profile_source):
    """Enum, nested, custom and Equatable handling reach the output."""
    result = generate_dto_edits(profile_source, "DTO", "snake_case")

    code = result.edits[0].replacement_text
    assert "import 'package:equatable/equatable.dart';" in code
    assert "class ProfileDTO extends Equatable {" in code
    assert "count: countFromString(map['count'])," in code
    assert "'count': countToString(count)," in code
    assert "createdAt: DateTime.parse(map['created_at'])," in code
    assert "'created_at': createdAt.toIso8601String()," in code
    assert ": throw ArgumentError.notNull('address')" in code
    assert "'billing_address': billingAddress?.toMap()," in code
    assert "final Address? billingAddress;" in code
    assert "List<Object?> get props => [userName, count, address, billingAddress, createdAt];" in code


def test_directive_aware_mode_reads_comment_above():
    """A directive written above the declaration applies in strict mode."""
    source = (
        "class Counter {\n"
        "  // Type: enum\n"
        "  final Count count;\n"
        "  final int total;\n"
        "}\n"
    )

    result = generate_dto_edits(
        source, "DTO", "original", options={"directive_aware": True}
    )

    code = result.edits[0].replacement_text
    assert "count: countFromString(map['count'])," in code
    assert "total: map['total'] as int," in code


def test_multi_mode_skips_class_without_fields(multi_source, multi_config):
    """Classes are independent: one failure does not stop the others."""
    # Act
    result = DtoOrchestrator(multi_config).run(multi_source)

    # Assert
    assert result.success
    assert len(result.edits) == 2
    assert [str(d) for d in result.errors] == [f"Marker: {NO_FIELDS_MESSAGE}"]
    assert result.metadata["classes"] == ["Address", "Order"]
    assert result.metadata["field_count"] == 4


def test_multi_mode_rewrites_each_class_and_adds_imports(multi_source, multi_config):
    """Each class span is replaced and missing imports follow the last import."""
    # Act
    result = DtoOrchestrator(multi_config).run(multi_source)
    new_text = apply_edits(multi_source, result.all_edits)

    # Assert
    assert result.import_edit.replacement_text == "\nimport 'dart:convert';"
    assert new_text.startswith(
        "import 'package:meta/meta.dart';\nimport 'dart:convert';\n\n@immutable\nclass AddressDTO {"
    )
    assert "class Marker {\n  void describe() {}\n}" in new_text
    assert "class OrderDTO {" in new_text
    assert "'shipping': shipping?.toMap()," in new_text
    assert "class Address {" not in new_text


def test_multi_mode_inserts_imports_at_top_without_existing_imports(multi_config):
    """Imports go to the start of a text that has none."""
    source = "class Tag {\n  final String label;\n}\n"

    result = DtoOrchestrator(multi_config).run(source)

    assert result.import_edit == EditOperation(
        (0, 0), "import 'dart:convert';\nimport 'package:meta/meta.dart';\n\n"
    )


def test_multi_mode_skips_import_already_present(multi_config):
    source = (
        "import 'dart:convert';\nimport 'package:meta/meta.dart';\n\n"
        "class Tag {\n  final String label;\n}\n"
    )

    result = DtoOrchestrator(multi_config).run(source)

    assert result.import_edit is None
    assert result.all_edits == result.edits


def test_single_mode_without_fields_fails(single_config):
    """In single-class mode a fieldless class fails the run."""
    result = DtoOrchestrator(single_config).run("class Empty {}\n")

    assert not result.success
    assert result.edits == []
    assert result.error_message == NO_FIELDS_MESSAGE
    assert [d.class_name for d in result.errors] == ["Empty"]


@pytest.mark.parametrize("mode", ["single", "multi"])
def test_no_class_produces_no_edits(mode):
    """Text without a class yields an error and nothing to apply."""
    result = generate_dto_edits(
        "void main() {}\n", "DTO", "original", options={"discovery_mode": mode}
    )

    assert not result.success
    assert result.all_edits == []
    assert result.error_message == NO_CLASS_MESSAGE


def test_multi_mode_with_only_fieldless_classes_fails(multi_config):
    result = DtoOrchestrator(multi_config).run("class A {}\n\nclass B {}\n")

    assert not result.success
    assert result.edits == []
    assert len(result.errors) == 2


@pytest.mark.parametrize(
    "text, suffix, style, message",
    [
        (None, "DTO", "original", NO_TARGET_MESSAGE),
        ("class A { int a; }", None, "original", SUFFIX_CANCELLED_MESSAGE),
        ("class A { int a; }", "DTO", None, NO_STYLE_MESSAGE),
    ],
)
def test_missing_input_aborts(text, suffix, style, message):
    """A missing target, suffix or style aborts without edits."""
    result = generate_dto_edits(text, suffix, style)

    assert not result.success
    assert result.edits == []
    assert result.error_message == message
    assert isinstance(result.exception, UserAbort)


def test_empty_suffix_is_allowed(user_source):
    """An empty suffix is a valid choice, not a dismissed prompt."""
    result = generate_dto_edits(user_source, "", "original")

    assert result.success
    assert "class User {" in result.edits[0].replacement_text


def test_invalid_option_is_reported():
    result = generate_dto_edits(
        "class A { int a; }", "DTO", "original", options={"discovery_mode": "all"}
    )

    assert not result.success
    assert result.error_message.startswith("Configuration error:")


def test_apply_edits_in_one_pass():
    """Offsets refer to the original text regardless of earlier edits."""
    text = "0123456789"
    edits = [
        EditOperation((6, 8), "B"),
        EditOperation((0, 0), ">>"),
        EditOperation((1, 3), "AAAA"),
    ]

    assert apply_edits(text, edits) == ">>0AAAA345B89"


def test_apply_edits_rejects_overlap():
    """Overlapping edits are refused and nothing is applied."""
    with pytest.raises(GeneratorError, match="Overlapping"):
        apply_edits("0123456789", [EditOperation((0, 5), "a"), EditOperation((4, 6), "b")])


def test_apply_edits_rejects_out_of_bounds():
    with pytest.raises(GeneratorError, match="out of bounds"):
        apply_edits("abc", [EditOperation((2, 9), "x")])


def test_quick_generate_returns_rewritten_text(user_source):
    code = quick_generate(user_source, suffix="Model", naming_style="kebab")

    assert code.startswith("import 'dart:convert';")
    assert "class UserModel {" in code


def test_quick_generate_raises_on_failure():
    with pytest.raises(GeneratorError, match=NO_CLASS_MESSAGE):
        quick_generate("enum Count { one }")



def test_enum_directive_on_line_after_declaration():
    """A directive comment on the next line still marks the field as an enum."""
    source = "class User {\n  final Count count;\n  // Type: enum\n}\n"

    result = generate_dto_edits(source, "DTO", "original")

    code = result.edits[0].replacement_text
    assert "count: countFromString(map['count'])," in code
    assert "'count': countToString(count)," in code
    assert "Count.fromMap" not in code


def test_required_constructor_parameter_with_nullable_nested_type():
    """The generated class compiles: a ``Sub?`` field is read with ``?.``."""
    source = (
        "class User {\n"
        "  final Sub? sub;\n"
        "\n"
        "  const User({required this.sub});\n"
        "}\n"
    )

    code = generate_dto_edits(source, "DTO", "original").edits[0].replacement_text

    assert "  final Sub? sub;" in code
    assert "    required this.sub," in code
    assert "'sub': sub?.toMap()," in code


def test_string_literal_is_not_a_constructor():
    """``'User(...)'`` in toString leaves the fields required."""
    source = (
        "class User {\n"
        "  final String name;\n"
        "\n"
        "  @override\n"
        "  String toString() => 'User(name: $name)';\n"
        "}\n"
    )

    code = generate_dto_edits(source, "DTO", "original").edits[0].replacement_text

    assert "  final String name;" in code
    assert "    required this.name," in code


def test_equatable_source_with_equality_disabled():
    """Disabling equality drops the Equatable base class and its import."""
    source = (
        "import 'package:equatable/equatable.dart';\n\n"
        "class User extends Equatable {\n  final String name;\n}\n"
    )

    result = generate_dto_edits(source, "DTO", "original", options={"equality": False})

    code = result.edits[0].replacement_text
    assert "class UserDTO {" in code
    assert "Equatable" not in code


def test_configuration_warnings_are_reported(user_source):
    """Unknown options and odd suffixes surface as warnings, not errors."""
    result = generate_dto_edits(user_source, "D-T-O", "original", options={"target": "web"})

    assert result.success
    assert result.errors == []
    assert [d.message for d in result.warnings] == [
        "Suffix is not a valid identifier part: 'D-T-O'",
        "Unknown configuration key: target",
    ]
