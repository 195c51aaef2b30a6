"""
Naming utilities for generated map/JSON keys.

Translates field identifiers between naming styles. Every conversion is a
single regex pass; runs of underscores, acronyms and already mixed-case
inputs are not normalized any further.
"""

import re
from typing import Callable, Dict, Union
from enum import Enum


class NamingStyle(Enum):
    """Naming styles selectable for the external keys."""
    CAMEL_CASE = "camelCase"      # userName
    SNAKE_CASE = "snake_case"     # user_name
    PASCAL_CASE = "PascalCase"    # UserName
    KEBAB_CASE = "kebab-case"     # user-name
    ORIGINAL = "original"         # unchanged

    @classmethod
    def from_value(cls, value: Union[str, "NamingStyle"]) -> "NamingStyle":
        """
        Resolve a style from its display value or a short alias.

        Accepts ``"snake_case"`` as well as ``"snake"``, case-insensitively.

        Raises:
            ValueError: If the value names no known style
        """
        if isinstance(value, NamingStyle):
            return value

        key = str(value).strip().lower()
        for style in cls:
            if key == style.value.lower():
                return style

        if key in _STYLE_ALIASES:
            return _STYLE_ALIASES[key]

        valid = ", ".join(style.value for style in cls)
        raise ValueError(f"Unknown naming style: {value!r}. Valid styles: {valid}")


_STYLE_ALIASES = {
    "camel": NamingStyle.CAMEL_CASE,
    "snake": NamingStyle.SNAKE_CASE,
    "pascal": NamingStyle.PASCAL_CASE,
    "kebab": NamingStyle.KEBAB_CASE,
    "none": NamingStyle.ORIGINAL,
}


def to_camel_case(name: str) -> str:
    """Convert to camelCase by folding each ``_x`` into ``X``."""
    return re.sub(r"_(.)", lambda m: m.group(1).upper(), name)


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    return re.sub(r"([a-z])([A-Z])", r"\1_\2", name).lower()


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return re.sub(
        r"(^\w|_\w)", lambda m: m.group(0).replace("_", "", 1).upper(), name
    )


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case."""
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", name).lower()


def _identity(name: str) -> str:
    return name


CONVERTERS: Dict[NamingStyle, Callable[[str], str]] = {
    NamingStyle.CAMEL_CASE: to_camel_case,
    NamingStyle.SNAKE_CASE: to_snake_case,
    NamingStyle.PASCAL_CASE: to_pascal_case,
    NamingStyle.KEBAB_CASE: to_kebab_case,
    NamingStyle.ORIGINAL: _identity,
}


class CaseConverter:
    """Converts field names to one naming style, selected once per run."""

    def __init__(self, style: Union[str, NamingStyle] = NamingStyle.ORIGINAL):
        """
        Initialize converter.

        Args:
            style: Target naming style (enum member or display value)
        """
        self.style = NamingStyle.from_value(style)
        self._convert = CONVERTERS[self.style]
        self._name_cache: Dict[str, str] = {}

    def convert(self, name: str) -> str:
        """Convert a field name to the configured style."""
        if name not in self._name_cache:
            self._name_cache[name] = self._convert(name)
        return self._name_cache[name]

    __call__ = convert


def convert_case(name: str, style: Union[str, NamingStyle]) -> str:
    """Convenience wrapper converting a single name."""
    return CONVERTERS[NamingStyle.from_value(style)](name)


def list_naming_styles() -> list[str]:
    """Display values of all naming styles, in prompt order."""
    return [style.value for style in NamingStyle]
