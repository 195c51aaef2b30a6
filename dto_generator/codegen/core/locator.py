"""
Class locator.

Finds class declarations in loosely structured Dart text. Bodies are
matched up to the first closing brace; nested braces (a constructor's
named parameter list, a method body) are not balanced, so such a body is
cut short. This is the accepted limit of the line/regex scanner.
"""

import re
from typing import Iterator

from ...logging_config import get_logger
from .config import DiscoveryMode
from .generator import StructuralMismatch
from .schema import ClassUnit

logger = get_logger(__name__)

CLASS_HEADER_PATTERN = re.compile(r"\bclass\s+(\w+)")
CLASS_BLOCK_PATTERN = re.compile(r"\bclass\s+(\w+)[^{;]*\{(.*?)\}", re.DOTALL)
EQUATABLE_MARKER = "Equatable"

NO_CLASS_MESSAGE = "No valid Dart class found."


def locate_classes(
    text: str, mode: DiscoveryMode = DiscoveryMode.SINGLE
) -> Iterator[ClassUnit]:
    """
    Lazily yield the class units found in ``text``.

    Args:
        text: Source text (whole document or selection)
        mode: SINGLE uses the first class keyword and the rest of the text;
            MULTI yields every ``class Name ... { ... }`` block

    Raises:
        StructuralMismatch: If no class declaration is found
    """
    if mode == DiscoveryMode.SINGLE:
        yield _locate_single(text)
        return

    found = 0
    for match in CLASS_BLOCK_PATTERN.finditer(text):
        found += 1
        class_text = match.group(0)
        logger.debug(
            "Located class %s at %d-%d", match.group(1), match.start(), match.end()
        )
        yield ClassUnit(
            name=match.group(1),
            body_text=match.group(2),
            source_range=(match.start(), match.end()),
            source_text=text[match.start():],
            uses_equatable=EQUATABLE_MARKER in class_text,
        )

    if not found:
        raise StructuralMismatch(NO_CLASS_MESSAGE)


def _locate_single(text: str) -> ClassUnit:
    """Locate the first class; its unit spans the whole text."""
    match = CLASS_HEADER_PATTERN.search(text)
    if not match:
        raise StructuralMismatch(NO_CLASS_MESSAGE)

    logger.debug("Located class %s at offset %d", match.group(1), match.start())
    return ClassUnit(
        name=match.group(1),
        body_text=text[match.end():],
        source_range=(0, len(text)),
        source_text=text,
        uses_equatable=EQUATABLE_MARKER in text,
    )
