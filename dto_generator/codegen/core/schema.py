"""
Core data structures for DTO generation.

Located classes, their resolved fields, and the edits produced from them.
All of these are created once per generation pass and never mutated.
"""

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple
from enum import Enum


# Types whose values pass through a map/JSON unchanged
BUILTIN_TYPES = frozenset(
    {"String", "int", "double", "num", "bool", "dynamic", "Object", "List", "Map", "Set"}
)


class FieldKind(Enum):
    """How a field's value crosses the map/JSON boundary."""

    PLAIN = "plain"
    ENUM = "enum"
    NESTED = "nested"


@dataclass(frozen=True)
class CustomParsing:
    """User supplied decode/encode expression templates for one field."""

    from_external: Optional[str] = None
    to_external: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return self.from_external is not None or self.to_external is not None


@dataclass(frozen=True)
class SourceField:
    """A single field declaration resolved from the source class."""

    declared_type: str
    name: str
    nullable: bool
    converted_name: str
    kind: FieldKind = FieldKind.PLAIN
    custom_parsing: CustomParsing = field(default_factory=CustomParsing)

    # Comment lines found directly above the declaration (directive-aware scan)
    comments: Tuple[str, ...] = ()

    @property
    def is_enum_valued(self) -> bool:
        return self.kind == FieldKind.ENUM

    @property
    def is_nested_class_valued(self) -> bool:
        return self.kind == FieldKind.NESTED

    @property
    def base_type(self) -> str:
        """Declared type without nullability marker or generic arguments."""
        return strip_type(self.declared_type)


def strip_type(declared_type: str) -> str:
    """Reduce ``List<String>?`` to ``List``."""
    base = declared_type.strip().rstrip("?")
    return re.split(r"[<\s]", base, maxsplit=1)[0]


def is_builtin_type(declared_type: str) -> bool:
    """Check whether a declared type belongs to the built-in set."""
    return strip_type(declared_type) in BUILTIN_TYPES


@dataclass(frozen=True)
class ClassUnit:
    """One located class declaration, the unit of independent generation."""

    name: str
    body_text: str
    source_range: Tuple[int, int]

    # Text from the class header onwards, scanned for the constructor
    source_text: str = ""
    uses_equatable: bool = False
    fields: Tuple[SourceField, ...] = ()

    def with_fields(self, fields: Tuple[SourceField, ...]) -> "ClassUnit":
        """Return a copy of this unit carrying resolved fields."""
        return ClassUnit(
            name=self.name,
            body_text=self.body_text,
            source_range=self.source_range,
            source_text=self.source_text,
            uses_equatable=self.uses_equatable,
            fields=tuple(fields),
        )


@dataclass(frozen=True)
class EditOperation:
    """Replace ``text[range[0]:range[1]]`` with ``replacement_text``."""

    range: Tuple[int, int]
    replacement_text: str

    @property
    def start(self) -> int:
        return self.range[0]

    @property
    def end(self) -> int:
        return self.range[1]
