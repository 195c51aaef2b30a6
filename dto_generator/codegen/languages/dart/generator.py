"""
Dart transfer class generator.

Renders, per located class, a ``<Name><suffix>`` class with constructor,
fromMap/fromJson factories, copyWith, toMap/toJson, toString and either
Equatable props or ==/hashCode.
"""

from typing import List, Optional, Sequence
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GenerationConfig
from ...core.generator import CodeGenerator
from ...core.schema import ClassUnit
from .types import DartTypeMapper

logger = get_logger(__name__)

CONVERT_IMPORT = "import 'dart:convert';"
EQUATABLE_IMPORT = "import 'package:equatable/equatable.dart';"
META_IMPORT = "import 'package:meta/meta.dart';"

CLASS_TEMPLATE = "dto_class.dart.j2"


class DartGenerator(CodeGenerator):
    """Code generator for Dart transfer classes."""

    def __init__(self, config: Optional[GenerationConfig] = None):
        """Initialize Dart generator with configuration."""
        super().__init__(config or GenerationConfig())
        self.type_mapper = DartTypeMapper()

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "dart"

    @property
    def file_extension(self) -> str:
        """Return Dart file extension."""
        return ".dart"

    def get_template_directory(self) -> Path:
        """Return the Dart templates directory."""
        return Path(__file__).parent / "templates"

    def dto_name(self, unit: ClassUnit) -> str:
        """Name of the generated class."""
        return f"{unit.name}{self.config.suffix}"

    def generate_class(self, unit: ClassUnit) -> str:
        """Render the transfer class for one unit."""
        dto_name = self.dto_name(unit)
        fields = [self.type_mapper.map_field(field) for field in unit.fields]

        context = {
            "dto_name": dto_name,
            "fields": fields,
            "equatable": unit.uses_equatable,
            "copy_with": self.config.copy_with,
            "equality": self.config.equality,
        }

        logger.debug("Rendering %s with %d field(s)", dto_name, len(fields))
        return self.format_code(self.render_template(CLASS_TEMPLATE, context))

    def get_import_statements(self, units: Sequence[ClassUnit]) -> List[str]:
        """Imports for JSON helpers, Equatable when props are emitted, and @immutable."""
        imports = [CONVERT_IMPORT]
        if self.config.equality and any(unit.uses_equatable for unit in units):
            imports.append(EQUATABLE_IMPORT)
        imports.append(META_IMPORT)
        return imports


def create_dart_generator(config: GenerationConfig = None, **overrides) -> DartGenerator:
    """Create a Dart generator, optionally overriding config values."""
    if config is None:
        config = GenerationConfig(**overrides)
    return DartGenerator(config)
