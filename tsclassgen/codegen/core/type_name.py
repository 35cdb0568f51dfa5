"""
Type references.

Every type is an immutable value with structural equality, rendered by
``reference(scope, writer)``. When a writer is given, imported symbols are
recorded on it so the caller can emit the import block.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .writer import CodeWriter


def _relative_name(name: str, scope: Optional[Sequence[str]]) -> Tuple[str, bool]:
    """Strip the leading namespaces of ``name`` that are already in scope.

    Returns:
        Tuple of (visible name, whether any namespace was stripped)
    """
    if not scope:
        return name, False

    segments = name.split(".")
    depth = 0
    while (
        depth < len(scope)
        and depth < len(segments) - 1
        and segments[depth] == scope[depth]
    ):
        depth += 1

    return ".".join(segments[depth:]), depth > 0


class TypeName(ABC):
    """Base class for all type references."""

    @abstractmethod
    def reference(
        self,
        scope: Optional[Sequence[str]] = None,
        writer: Optional["CodeWriter"] = None,
    ) -> str:
        """Render this type as it should appear in source."""

    def __str__(self) -> str:
        return self.reference()

    # Factories

    @staticmethod
    def named(name: str, module: Optional[str] = None) -> "NamedType":
        return NamedType(name, module)

    @staticmethod
    def parse_symbol(symbol: str) -> "NamedType":
        """Parse ``Name`` or ``Name@module`` into a named type."""
        name, _, module = symbol.partition("@")
        if not name:
            raise ValueError(f"Invalid type symbol: {symbol!r}")
        return NamedType(name, module or None)

    @staticmethod
    def parameterized(raw: "TypeName", *arguments: "TypeName") -> "ParameterizedType":
        if isinstance(raw, str):
            raw = TypeName.parse_symbol(raw)
        return ParameterizedType(raw, tuple(arguments))

    @staticmethod
    def type_variable(name: str, *bounds: "TypeName") -> "TypeVariable":
        return TypeVariable(name, tuple(bounds))

    @staticmethod
    def union(*types: "TypeName") -> "UnionType":
        return UnionType(tuple(types))

    @staticmethod
    def array(element: "TypeName") -> "ArrayType":
        return ArrayType(element)


@dataclass(frozen=True)
class NamedType(TypeName):
    """A plain or imported type, e.g. ``string`` or ``Observable`` from ``rxjs``."""

    name: str
    module: Optional[str] = None

    def reference(self, scope=None, writer=None) -> str:
        visible, in_scope = _relative_name(self.name, scope)
        if writer is not None and self.module and not in_scope:
            writer.add_import(self.module, self.name.split(".")[0])
        return visible


@dataclass(frozen=True)
class ParameterizedType(TypeName):
    """A generic type applied to arguments, e.g. ``Map<string, number>``."""

    raw: TypeName
    arguments: Tuple[TypeName, ...] = ()

    def reference(self, scope=None, writer=None) -> str:
        raw = self.raw.reference(scope, writer)
        if not self.arguments:
            return raw
        args = ", ".join(arg.reference(scope, writer) for arg in self.arguments)
        return f"{raw}<{args}>"


@dataclass(frozen=True)
class TypeVariable(TypeName):
    """A generic type variable, optionally bounded."""

    name: str
    bounds: Tuple[TypeName, ...] = field(default=())

    def reference(self, scope=None, writer=None) -> str:
        return self.name

    def declaration(self, scope=None, writer=None) -> str:
        """Render the variable as declared in a type parameter list."""
        if not self.bounds:
            return self.name
        bounds = " & ".join(bound.reference(scope, writer) for bound in self.bounds)
        return f"{self.name} extends {bounds}"


@dataclass(frozen=True)
class UnionType(TypeName):
    """``A | B | ...``"""

    types: Tuple[TypeName, ...]

    def reference(self, scope=None, writer=None) -> str:
        return " | ".join(t.reference(scope, writer) for t in self.types)


@dataclass(frozen=True)
class ArrayType(TypeName):
    """``T[]``"""

    element: TypeName

    def reference(self, scope=None, writer=None) -> str:
        element = self.element.reference(scope, writer)
        if isinstance(self.element, UnionType):
            return f"({element})[]"
        return f"{element}[]"


STRING = NamedType("string")
NUMBER = NamedType("number")
BOOLEAN = NamedType("boolean")
ANY = NamedType("any")
UNKNOWN = NamedType("unknown")
VOID = NamedType("void")
UNDEFINED = NamedType("undefined")
NULL = NamedType("null")
NEVER = NamedType("never")
OBJECT = NamedType("object")

BUILTIN_TYPES = {
    t.name: t
    for t in (STRING, NUMBER, BOOLEAN, ANY, UNKNOWN, VOID, UNDEFINED, NULL, NEVER, OBJECT)
}


def as_type_name(value) -> TypeName:
    """Accept a TypeName, or a ``Name``/``Name@module`` string."""
    if isinstance(value, TypeName):
        return value
    if isinstance(value, str):
        return BUILTIN_TYPES.get(value) or TypeName.parse_symbol(value)
    raise TypeError(f"Expected a TypeName or str but was {type(value).__name__}")
