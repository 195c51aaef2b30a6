"""
Base generator interface for DTO code generation.

Defines the contract language generators implement, the error hierarchy,
and the result container returned by a generation pass.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Any, Optional, Sequence
from pathlib import Path
from .schema import ClassUnit, EditOperation
from .templates import TemplateEngine, create_template_engine


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class UserAbort(GeneratorError):
    """No target text, or a prompt was dismissed without a value."""

    pass


class StructuralMismatch(GeneratorError):
    """
    No class declaration, or no field declarations, could be found.

    ``class_name`` names the class whose body had no fields; it is None
    when no class was found at all.
    """

    def __init__(self, message: str, class_name: Optional[str] = None):
        super().__init__(message)
        self.class_name = class_name


class CodeGenerator(ABC):
    """Abstract base class for DTO generators."""

    def __init__(self, config=None):
        """Initialize generator with configuration."""
        self.config = config
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'dart')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.dart')."""
        pass

    @abstractmethod
    def get_template_directory(self) -> Path:
        """Return the directory containing templates for this generator."""
        pass

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate_class(self, unit: ClassUnit) -> str:
        """
        Generate the transfer class for one located class.

        Args:
            unit: Class unit with resolved fields

        Returns:
            Generated class source (no imports)
        """
        pass

    def get_import_statements(self, units: Sequence[ClassUnit]) -> List[str]:
        """
        Get import statements required by the generated classes.

        Args:
            units: All class units being generated

        Returns:
            List of import statements (can be empty)
        """
        return []

    def generate(self, units: Sequence[ClassUnit]) -> str:
        """Generate a complete file: imports followed by every class."""
        imports = self.get_import_statements(units)
        classes = [self.generate_class(unit) for unit in units]
        header = "\n".join(imports)
        body = "\n\n".join(classes)
        return self.format_code(f"{header}\n\n{body}" if header else body)

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n")

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


@dataclass(frozen=True)
class Diagnostic:
    """A user-facing message produced during a generation pass."""

    level: str  # "error" or "warning"
    message: str
    class_name: Optional[str] = None

    def __str__(self) -> str:
        if self.class_name:
            return f"{self.class_name}: {self.message}"
        return self.message


class GenerationResult:
    """Container for generated edits, diagnostics and metadata."""

    def __init__(
        self,
        edits: List[EditOperation] = None,
        diagnostics: List[Diagnostic] = None,
        metadata: Dict[str, Any] = None,
        import_edit: Optional[EditOperation] = None,
    ):
        """
        Initialize generation result.

        Args:
            edits: One edit per successfully processed class
            diagnostics: Errors and warnings collected along the way
            metadata: Additional metadata about generation
            import_edit: Insertion of missing imports (multi-class mode only)
        """
        self.edits = edits or []
        self.diagnostics = diagnostics or []
        self.metadata = metadata or {}
        self.import_edit = import_edit
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "error"]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    @property
    def all_edits(self) -> List[EditOperation]:
        """Class edits plus the import insertion, if any."""
        if self.import_edit is None:
            return list(self.edits)
        return [self.import_edit, *self.edits]

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(diagnostics=[Diagnostic("error", message)])
        result.success = False
        result.error_message = message
        result.exception = exception
        return result
