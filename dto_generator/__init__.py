"""
DTO Generator

Derives Dart transfer classes with map/JSON (de)serialization, copyWith,
toString and equality from data-class declarations in source text.
"""

from .codegen import (
    GenerationConfig,
    GenerationResult,
    NamingStyle,
    apply_edits,
    generate_dto_edits,
    quick_generate,
)

__version__ = "0.1.0"

__all__ = [
    "GenerationConfig",
    "GenerationResult",
    "NamingStyle",
    "apply_edits",
    "generate_dto_edits",
    "quick_generate",
]
