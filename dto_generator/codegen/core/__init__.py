"""
Core DTO generation components.

Scanning (locator, extractor, directives), naming, configuration and the
base generator used by the language generators.
"""

from .generator import (
    CodeGenerator,
    Diagnostic,
    GeneratorError,
    GenerationResult,
    StructuralMismatch,
    UserAbort,
)
from .schema import (
    BUILTIN_TYPES,
    ClassUnit,
    CustomParsing,
    EditOperation,
    FieldKind,
    SourceField,
)
from .naming import CaseConverter, NamingStyle, convert_case
from .config import (
    ConfigError,
    ConfigManager,
    DiscoveryMode,
    GenerationConfig,
    load_config,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .locator import locate_classes
from .extractor import RawField, extract_fields, resolve_nullability
from .directives import EnumMarker, parse_directive, interpret_field

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "Diagnostic",
    "GeneratorError",
    "GenerationResult",
    "StructuralMismatch",
    "UserAbort",
    # Data model
    "BUILTIN_TYPES",
    "ClassUnit",
    "CustomParsing",
    "EditOperation",
    "FieldKind",
    "SourceField",
    # Naming
    "CaseConverter",
    "NamingStyle",
    "convert_case",
    # Configuration system
    "ConfigError",
    "ConfigManager",
    "DiscoveryMode",
    "GenerationConfig",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Scanning
    "locate_classes",
    "RawField",
    "extract_fields",
    "resolve_nullability",
    "EnumMarker",
    "parse_directive",
    "interpret_field",
]
