"""
Declaration modifiers.

Members are listed in the order the keywords must appear in source,
so emitting a set of modifiers is a matter of sorting by declaration order.
"""

from enum import Enum
from typing import Iterable, List


class Modifier(Enum):
    """TypeScript declaration modifiers."""

    EXPORT = "export"
    DECLARE = "declare"
    DEFAULT = "default"
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    STATIC = "static"
    ABSTRACT = "abstract"
    READONLY = "readonly"
    ASYNC = "async"
    GET = "get"
    SET = "set"
    CONST = "const"
    LET = "let"
    VAR = "var"

    @property
    def keyword(self) -> str:
        return self.value

    def is_one_of(self, *modifiers: "Modifier") -> bool:
        return self in modifiers

    @classmethod
    def from_keyword(cls, keyword: str) -> "Modifier":
        """Look up a modifier by its source keyword (case-insensitive)."""
        try:
            return cls(keyword.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown modifier: {keyword!r}") from None


# Modifiers that turn a constructor parameter into a parameter property
PARAMETER_PROPERTY_MODIFIERS = frozenset(
    {Modifier.PUBLIC, Modifier.PRIVATE, Modifier.PROTECTED, Modifier.READONLY}
)

_ORDER = {modifier: index for index, modifier in enumerate(Modifier)}


def ordered(modifiers: Iterable[Modifier]) -> List[Modifier]:
    """Return modifiers in source order."""
    return sorted(set(modifiers), key=_ORDER.__getitem__)
