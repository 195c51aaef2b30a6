"""
Generation pipeline.

Runs locate -> extract -> interpret -> convert -> synthesize for every class
in a text and turns the results into edits plus diagnostics. Nothing is
applied to the text here; ``apply_edits`` does that in a single pass.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..logging_config import get_logger
from .core.config import (
    ConfigError,
    GenerationConfig,
    get_config_manager,
    load_config,
)
from .core.directives import interpret_field
from .core.extractor import extract_fields, resolve_nullability
from .core.generator import (
    CodeGenerator,
    Diagnostic,
    GenerationResult,
    GeneratorError,
    StructuralMismatch,
    UserAbort,
)
from .core.locator import locate_classes
from .core.naming import CaseConverter, NamingStyle
from .core.schema import (
    ClassUnit,
    EditOperation,
    FieldKind,
    SourceField,
    is_builtin_type,
)
from .languages.dart import DartGenerator

logger = get_logger(__name__)

IMPORT_LINE_PATTERN = re.compile(r"^[ \t]*import\s+['\"][^\n]*$", re.MULTILINE)

NO_TARGET_MESSAGE = "No active editor found."
SUFFIX_CANCELLED_MESSAGE = "Suffix prompt was cancelled."
NO_STYLE_MESSAGE = "No naming style selected."


class DtoOrchestrator:
    """Drives one generation pass over a text with a fixed configuration."""

    def __init__(
        self, config: GenerationConfig, generator: Optional[CodeGenerator] = None
    ):
        """
        Initialize orchestrator.

        Args:
            config: Settings shared by every class in the pass
            generator: Code synthesizer (defaults to the Dart generator)
        """
        self.config = config
        self.generator = generator or DartGenerator(config)
        self.converter = CaseConverter(config.naming_style)

    def run(self, text: str) -> GenerationResult:
        """
        Generate edits for every class found in ``text``.

        In single-class mode any structural problem fails the whole run; in
        multi-class mode a class without fields is reported and skipped.
        """
        units: List[ClassUnit] = []
        diagnostics: List[Diagnostic] = []

        try:
            for unit in locate_classes(text, self.config.discovery_mode):
                try:
                    units.append(unit.with_fields(self.resolve_fields(unit)))
                except StructuralMismatch as e:
                    if not self.config.multi_class:
                        raise
                    logger.warning("Skipping class %s: %s", unit.name, e)
                    diagnostics.append(Diagnostic("error", str(e), unit.name))
        except StructuralMismatch as e:
            logger.warning("Generation aborted: %s", e)
            result = GenerationResult.error(str(e), exception=e)
            if e.class_name:
                result.diagnostics = [Diagnostic("error", str(e), e.class_name)]
            return result

        if self.config.multi_class:
            edits = [
                EditOperation(unit.source_range, self.generator.generate_class(unit))
                for unit in units
            ]
            import_edit = self._build_import_edit(text, units)
        else:
            edits = [EditOperation(units[0].source_range, self.generator.generate(units))]
            import_edit = None

        for unit in units:
            logger.info(
                "Generated %s from %s (%d field(s))",
                f"{unit.name}{self.config.suffix}",
                unit.name,
                len(unit.fields),
            )

        result = GenerationResult(
            edits=edits,
            diagnostics=diagnostics,
            metadata=self._build_metadata(units),
            import_edit=import_edit,
        )
        if not edits:
            result.success = False
            result.error_message = "No class could be generated."
        return result

    def resolve_fields(self, unit: ClassUnit) -> Tuple[SourceField, ...]:
        """Extract, interpret and name every field of ``unit``, in order."""
        raw_fields = extract_fields(
            unit.body_text, self.config.directive_aware, class_name=unit.name
        )
        nullability = resolve_nullability(raw_fields, unit.name, unit.source_text)

        fields = []
        for raw in raw_fields:
            directives = interpret_field(
                raw.name,
                unit.body_text,
                preceding_comments=raw.comments,
                directive_aware=self.config.directive_aware,
            )

            if directives.enum_marker:
                kind = FieldKind.ENUM
            elif is_builtin_type(raw.declared_type):
                kind = FieldKind.PLAIN
            else:
                kind = FieldKind.NESTED

            fields.append(
                SourceField(
                    declared_type=raw.declared_type,
                    name=raw.name,
                    nullable=nullability[raw.name],
                    converted_name=self.converter(raw.name),
                    kind=kind,
                    custom_parsing=directives.custom_parsing,
                    comments=raw.comments,
                )
            )

        return tuple(fields)

    def _build_import_edit(
        self, text: str, units: Sequence[ClassUnit]
    ) -> Optional[EditOperation]:
        """Insert the imports the generated classes need and the text lacks."""
        if not units:
            return None

        missing = [
            statement
            for statement in self.generator.get_import_statements(units)
            if statement not in text
        ]
        if not missing:
            return None

        existing = list(IMPORT_LINE_PATTERN.finditer(text))
        block = "\n".join(missing)
        if not existing:
            return EditOperation((0, 0), f"{block}\n\n")

        offset = existing[-1].end()
        return EditOperation((offset, offset), f"\n{block}")

    def _build_metadata(self, units: Sequence[ClassUnit]) -> Dict[str, Any]:
        return {
            "language": self.generator.language_name,
            "file_extension": self.generator.file_extension,
            "discovery_mode": self.config.discovery_mode.value,
            "naming_style": self.config.naming_style.value,
            "suffix": self.config.suffix,
            "class_count": len(units),
            "classes": [unit.name for unit in units],
            "field_count": sum(len(unit.fields) for unit in units),
        }


def generate_dto_edits(
    text: Optional[str],
    suffix: Optional[str],
    naming_style: Optional[Union[str, NamingStyle]],
    options: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GenerationResult:
    """
    Generate transfer classes for the classes in ``text``.

    Args:
        text: Target text; None means there is no active target
        suffix: Class name suffix; None means the prompt was dismissed
        naming_style: Key naming style; None means nothing was selected
        options: Further GenerationConfig values (discovery_mode, ...)
        config_file: JSON configuration file read before the overrides

    Returns:
        GenerationResult holding the edits and diagnostics
    """
    if text is None:
        return GenerationResult.error(NO_TARGET_MESSAGE, UserAbort(NO_TARGET_MESSAGE))
    if suffix is None:
        return GenerationResult.error(
            SUFFIX_CANCELLED_MESSAGE, UserAbort(SUFFIX_CANCELLED_MESSAGE)
        )
    if not naming_style:
        return GenerationResult.error(NO_STYLE_MESSAGE, UserAbort(NO_STYLE_MESSAGE))

    try:
        config = load_config(
            custom_config={
                **(options or {}),
                "suffix": suffix,
                "naming_style": naming_style,
            },
            config_file=config_file,
        )
    except ConfigError as e:
        return GenerationResult.error(f"Configuration error: {e}", exception=e)

    result = DtoOrchestrator(config).run(text)
    result.diagnostics.extend(
        Diagnostic("warning", warning)
        for warning in get_config_manager().validate_config(config)
    )
    return result


def apply_edits(text: str, edits: Sequence[EditOperation]) -> str:
    """
    Apply all edits to ``text`` in one pass and return the new text.

    Raises:
        GeneratorError: If an edit is out of bounds or edits overlap
    """
    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))

    previous_end = 0
    for edit in ordered:
        if not 0 <= edit.start <= edit.end <= len(text):
            raise GeneratorError(f"Edit range out of bounds: {edit.range}")
        if edit.start < previous_end:
            raise GeneratorError(f"Overlapping edit at {edit.range}")
        previous_end = edit.end

    pieces = []
    cursor = 0
    for edit in ordered:
        pieces.append(text[cursor:edit.start])
        pieces.append(edit.replacement_text)
        cursor = edit.end
    pieces.append(text[cursor:])

    return "".join(pieces)
