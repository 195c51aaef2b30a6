"""
Field extractor.

Recognizes field declarations in a class body and resolves their
nullability. Two scanning strategies are available:

* permissive: any ``Type name;`` pair anywhere in the body
* strict (directive-aware): physical lines starting with ``final``,
  ``late final`` or ``late``, each paired with the comment block above it
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ...logging_config import get_logger
from .directives import strip_comment_marker
from .generator import StructuralMismatch

logger = get_logger(__name__)

PERMISSIVE_FIELD_PATTERN = re.compile(r"(\w+\??)\s+(\w+);")
STRICT_FIELD_PATTERN = re.compile(
    r"^\s*(?:late\s+final|final|late)\s+(?P<type>[\w<>,? ]+?)\s+(?P<name>\w+)\s*;"
)
COMMENT_LINE_PATTERN = re.compile(r"^\s*//")

# Words that can precede ``name;`` without being a type
STATEMENT_KEYWORDS = frozenset(
    {
        "return", "throw", "await", "yield", "break", "continue", "new",
        "const", "final", "var", "late", "case", "else", "in", "is", "as",
        "static", "part", "import", "export", "library",
    }
)

NO_FIELDS_MESSAGE = "No valid fields found in class."


@dataclass(frozen=True)
class RawField:
    """A field declaration as captured from source text."""

    declared_type: str
    name: str
    comments: Tuple[str, ...] = ()
    line_no: Optional[int] = None

    @property
    def marked_nullable(self) -> bool:
        return self.declared_type.endswith("?")


def extract_fields(
    body_text: str, directive_aware: bool = False, class_name: Optional[str] = None
) -> List[RawField]:
    """
    Extract field declarations in declaration order.

    Args:
        body_text: Class body text
        directive_aware: Use the strict line scan with comment association
        class_name: Owning class, used in the error raised on no match

    Raises:
        StructuralMismatch: If no field declaration is recognized
    """
    if directive_aware:
        fields = _scan_lines(body_text)
    else:
        fields = _scan_permissive(body_text)

    if not fields:
        raise StructuralMismatch(NO_FIELDS_MESSAGE, class_name=class_name)

    logger.debug(
        "Extracted %d field(s) from %s: %s",
        len(fields),
        class_name or "class",
        ", ".join(f.name for f in fields),
    )
    return fields


def _scan_permissive(body_text: str) -> List[RawField]:
    """Match every ``Type name;`` pair."""
    fields = []
    seen = set()

    for match in PERMISSIVE_FIELD_PATTERN.finditer(body_text):
        declared_type, name = match.group(1), match.group(2)
        if declared_type.rstrip("?") in STATEMENT_KEYWORDS or name in seen:
            continue
        seen.add(name)
        fields.append(RawField(declared_type=declared_type, name=name))

    return fields


def _scan_lines(body_text: str) -> List[RawField]:
    """Walk physical lines, pairing each declaration with the comments above it."""
    lines = body_text.splitlines()
    fields = []
    seen = set()

    for index, line in enumerate(lines):
        match = STRICT_FIELD_PATTERN.match(line)
        if not match or match.group("name") in seen:
            continue

        seen.add(match.group("name"))
        fields.append(
            RawField(
                declared_type=re.sub(r"\s+", " ", match.group("type").strip()),
                name=match.group("name"),
                comments=tuple(_comments_above(lines, index)),
                line_no=index + 1,
            )
        )

    return fields


def _comments_above(lines: Sequence[str], index: int) -> List[str]:
    """Collect the contiguous comment lines directly above ``lines[index]``."""
    comments = []
    cursor = index - 1
    while cursor >= 0 and COMMENT_LINE_PATTERN.match(lines[cursor]):
        comments.append(strip_comment_marker(lines[cursor]))
        cursor -= 1

    comments.reverse()
    return comments


def find_constructor_params(class_name: str, source_text: str) -> Optional[str]:
    """
    Return the parameter list of the unnamed constructor, if one is present.

    The constructor has to open its line (optionally after ``const`` or
    ``factory``), so ``ClassName(`` inside a string or an expression is not
    taken for it.
    """
    pattern = re.compile(
        rf"^[ \t]*(?:const\s+|factory\s+)?{re.escape(class_name)}\s*\(([^)]*)\)",
        re.MULTILINE,
    )
    match = pattern.search(source_text)
    if not match:
        return None

    params = match.group(1).strip()
    return params or None


def resolve_nullability(
    fields: Sequence[RawField], class_name: str, source_text: str
) -> Dict[str, bool]:
    """
    Decide which fields are nullable.

    A trailing ``?`` on the type makes a field nullable. When a constructor
    parameter list is found, a field is nullable exactly when
    ``required this.<name>`` is absent from it, and that reading replaces the
    type marker.
    """
    nullability = {f.name: f.marked_nullable for f in fields}

    params = find_constructor_params(class_name, source_text)
    if params is None:
        return nullability

    for raw in fields:
        required = re.search(rf"\brequired\s+this\.{re.escape(raw.name)}\b", params)
        nullable = required is None
        if nullable != nullability[raw.name]:
            logger.debug(
                "Constructor of %s overrides nullability of %s: %s",
                class_name,
                raw.name,
                nullable,
            )
        nullability[raw.name] = nullable

    return nullability
