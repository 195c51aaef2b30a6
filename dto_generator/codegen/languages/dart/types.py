"""
Dart-specific expression mapping for transfer classes.

Turns a resolved SourceField into the declarations and map/JSON
decode/encode expressions the templates render.
"""

from dataclasses import dataclass

from ...core.directives import substitute_value
from ...core.schema import SourceField


MAP_PARAMETER = "map"
MAP_TYPE = "Map<String, dynamic>"


@dataclass(frozen=True)
class DartField:
    """Template-ready view of one generated field."""

    name: str
    type: str  # declared type, made nullable when the field is optional
    copy_type: str  # copyWith parameter type, always nullable
    key: str  # external map/JSON key
    nullable: bool
    decode: str  # expression read in fromMap
    encode: str  # expression written in toMap


class DartTypeMapper:
    """
    Maps resolved fields to Dart expressions.

    Decode priority: custom ``fromExpr`` > ``<name>FromString`` for enums >
    null-guarded ``Type.fromMap`` for nested classes > plain cast.
    Encode priority mirrors it: custom ``toExpr`` > ``<name>ToString`` >
    ``toMap()`` > the field itself.
    """

    def map_field(self, field: SourceField) -> DartField:
        """Build the template view of a field."""
        field_type = self.field_type(field)
        return DartField(
            name=field.name,
            type=field_type,
            copy_type=field_type if field_type.endswith("?") else f"{field_type}?",
            key=field.converted_name,
            nullable=field.nullable,
            decode=self.decode_expression(field),
            encode=self.encode_expression(field),
        )

    def field_type(self, field: SourceField) -> str:
        """Declared type, with ``?`` appended when the field is optional."""
        declared = field.declared_type
        if field.nullable and not declared.endswith("?"):
            return f"{declared}?"
        return declared

    def map_access(self, field: SourceField) -> str:
        """Expression reading the field's entry from the external map."""
        return f"{MAP_PARAMETER}['{field.converted_name}']"

    def decode_expression(self, field: SourceField) -> str:
        """Expression producing the field value inside ``fromMap``."""
        access = self.map_access(field)

        if field.custom_parsing.from_external is not None:
            return substitute_value(field.custom_parsing.from_external, access)

        if field.is_enum_valued:
            return f"{field.name}FromString({access})"

        if field.is_nested_class_valued:
            fallback = (
                "null"
                if field.nullable
                else f"throw ArgumentError.notNull('{field.converted_name}')"
            )
            return (
                f"{access} != null "
                f"? {field.base_type}.fromMap({access} as {MAP_TYPE}) "
                f": {fallback}"
            )

        return f"{access} as {self.field_type(field)}"

    def encode_expression(self, field: SourceField) -> str:
        """Expression producing the map value inside ``toMap``."""
        if field.custom_parsing.to_external is not None:
            return substitute_value(field.custom_parsing.to_external, field.name)

        if field.is_enum_valued:
            return f"{field.name}ToString({field.name})"

        if field.is_nested_class_valued:
            access = "?." if self.field_type(field).endswith("?") else "."
            return f"{field.name}{access}toMap()"

        return field.name
