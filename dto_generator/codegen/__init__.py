"""
DTO Code Generation Module

Generates transfer classes from data-class declarations found in source text.
"""

from .core.generator import (
    CodeGenerator,
    Diagnostic,
    GenerationResult,
    GeneratorError,
    StructuralMismatch,
    UserAbort,
)
from .core.schema import ClassUnit, EditOperation, SourceField
from .core.naming import NamingStyle, list_naming_styles
from .core.config import (
    DEFAULT_SUFFIX,
    ConfigManager,
    DiscoveryMode,
    GenerationConfig,
    load_config,
)
from .orchestrator import DtoOrchestrator, apply_edits, generate_dto_edits


def quick_generate(source: str, suffix: str = DEFAULT_SUFFIX,
                   naming_style="original", **options) -> str:
    """
    Generate transfer classes and return the rewritten text.

    Args:
        source: Dart source text
        suffix: Class name suffix
        naming_style: Key naming style
        **options: Further generation options

    Returns:
        Source text with the edits applied
    """
    result = generate_dto_edits(source, suffix, naming_style, options)

    if result.success:
        return apply_edits(source, result.all_edits)
    else:
        raise GeneratorError(f"Code generation failed: {result.error_message}")


__all__ = [
    "CodeGenerator",
    "Diagnostic",
    "GenerationResult",
    "GeneratorError",
    "StructuralMismatch",
    "UserAbort",
    "ClassUnit",
    "EditOperation",
    "SourceField",
    "NamingStyle",
    "list_naming_styles",
    "DEFAULT_SUFFIX",
    "ConfigManager",
    "DiscoveryMode",
    "GenerationConfig",
    "load_config",
    "DtoOrchestrator",
    "apply_edits",
    "generate_dto_edits",
    "quick_generate",
]
