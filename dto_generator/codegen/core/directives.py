"""
Field directives carried in line comments.

A directive is one comment line with one of two productions::

    Type: enum                          -> EnumMarker
    Parsing: <fromExpr>, <toExpr>       -> CustomParsing(from, to)

``parse_directive`` works on the comment *text* only, so the grammar does
not depend on the host comment syntax. ``interpret_field`` finds the comment
lines attached to one field declaration and folds their directives.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Union

from ...logging_config import get_logger
from .schema import CustomParsing

logger = get_logger(__name__)

ENUM_DIRECTIVE_PATTERN = re.compile(r"^type\s*:\s*enum\s*$", re.IGNORECASE)
PARSING_DIRECTIVE_PATTERN = re.compile(r"^parsing\s*:\s*(.+)$", re.IGNORECASE)
COMMENT_MARKER_PATTERN = re.compile(r"^\s*//+\s?")
VALUE_PLACEHOLDER_PATTERN = re.compile(r"\bvalue\b")


@dataclass(frozen=True)
class EnumMarker:
    """The field holds an enum value."""


Directive = Union[EnumMarker, CustomParsing]


@dataclass(frozen=True)
class FieldDirectives:
    """Directives resolved for one field."""

    enum_marker: bool = False
    custom_parsing: CustomParsing = field(default_factory=CustomParsing)


def parse_directive(text: str) -> Optional[Directive]:
    """
    Parse one comment line's text into a directive.

    Args:
        text: Comment text with the comment marker already removed

    Returns:
        The directive, or None for ordinary comments
    """
    text = text.strip()

    if ENUM_DIRECTIVE_PATTERN.match(text):
        return EnumMarker()

    match = PARSING_DIRECTIVE_PATTERN.match(text)
    if match:
        from_expr, to_expr = _split_expressions(match.group(1))
        return CustomParsing(from_external=from_expr, to_external=to_expr)

    return None


def _split_expressions(source: str) -> tuple[Optional[str], Optional[str]]:
    """
    Split ``from, to`` on the first comma outside brackets.

    ``<`` only opens a type argument list when a ``>`` follows it, so a
    comparison such as ``value < 0`` does not swallow the separator.
    """
    depth = 0
    angle_depth = 0
    for index, char in enumerate(source):
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth = max(depth - 1, 0)
        elif char == "<" and ">" in source[index + 1:]:
            angle_depth += 1
        elif char == ">" and angle_depth and source[index - 1] != "=":
            angle_depth -= 1
        elif char == "," and depth == 0 and angle_depth == 0:
            from_expr = source[:index].strip() or None
            to_expr = source[index + 1:].strip() or None
            return from_expr, to_expr

    return source.strip() or None, None


def strip_comment_marker(line: str) -> str:
    """Remove a leading ``//`` or ``///`` from a comment line."""
    return COMMENT_MARKER_PATTERN.sub("", line, count=1).strip()


def find_trailing_comments(
    field_name: str, body_text: str, include_following: bool = True
) -> List[str]:
    """
    Find the comment anchored right after ``<field_name>;``.

    The comment may sit on the declaration's line or, when
    ``include_following`` is set, start on the next line.

    Args:
        field_name: Field whose declaration anchors the comment
        body_text: Class (or method) body to search
        include_following: Also take comment-only lines directly below

    Returns:
        Comment texts, markers removed, in source order
    """
    next_line = r"(?:\n[ \t]*)?" if include_following else ""
    pattern = re.compile(
        rf"\b{re.escape(field_name)}\s*;[ \t]*{next_line}//+([^\n]*)"
        r"((?:\n[ \t]*//[^\n]*)*)"
    )
    match = pattern.search(body_text)
    if not match:
        return []

    comments = [match.group(1).strip()]
    if include_following and match.group(2):
        comments.extend(
            strip_comment_marker(line)
            for line in match.group(2).split("\n")
            if line.strip()
        )
    return comments


def collect_directives(comments: Iterable[str]) -> FieldDirectives:
    """Fold comment texts into the directives they carry; first Parsing wins."""
    enum_marker = False
    custom_parsing = None

    for comment in comments:
        directive = parse_directive(comment)
        if isinstance(directive, EnumMarker):
            enum_marker = True
        elif isinstance(directive, CustomParsing) and custom_parsing is None:
            custom_parsing = directive

    return FieldDirectives(
        enum_marker=enum_marker,
        custom_parsing=custom_parsing or CustomParsing(),
    )


def interpret_field(
    field_name: str,
    body_text: str,
    preceding_comments: Sequence[str] = (),
    directive_aware: bool = False,
) -> FieldDirectives:
    """
    Resolve the directives attached to one field.

    In directive-aware mode the comment block above the declaration is read
    as well, and only the same-line trailing comment is taken from below so
    the next field's leading block is not claimed twice.
    """
    trailing = find_trailing_comments(
        field_name, body_text, include_following=not directive_aware
    )
    comments = [*preceding_comments, *trailing] if directive_aware else trailing
    directives = collect_directives(comments)

    if directives.enum_marker or directives.custom_parsing.is_set:
        logger.debug(
            "Directives for %s: enum=%s parsing=%s",
            field_name,
            directives.enum_marker,
            directives.custom_parsing,
        )
    return directives


def substitute_value(template: str, expression: str) -> str:
    """Replace the whole-word ``value`` placeholder with ``expression``."""
    return VALUE_PLACEHOLDER_PATTERN.sub(lambda _: expression, template)
