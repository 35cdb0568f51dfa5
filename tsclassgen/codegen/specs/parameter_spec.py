"""Function and constructor parameters."""

from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

from ..core.code_block import CodeBlock
from ..core.modifier import Modifier
from ..core.type_name import TypeName, as_type_name
from .decorator_spec import DecoratorSpec


@dataclass(frozen=True)
class ParameterSpec:
    """An immutable parameter declaration."""

    name: str
    type_name: TypeName
    optional: bool = False
    decorators: Tuple[DecoratorSpec, ...] = ()
    modifiers: FrozenSet[Modifier] = frozenset()
    default_value: Optional[CodeBlock] = None

    @staticmethod
    def builder(
        name: str,
        type_name: Union[str, TypeName],
        optional: bool = False,
        *modifiers: Modifier,
    ) -> "ParameterSpecBuilder":
        return ParameterSpecBuilder(name, as_type_name(type_name), optional).add_modifiers(
            *modifiers
        )

    def emit(
        self,
        writer,
        is_rest: bool = False,
        optional_allowed: bool = True,
        scope=None,
    ) -> None:
        """
        Emit the parameter, including its default value.

        Args:
            writer: Target CodeWriter
            is_rest: Emit as a ``...rest`` parameter
            optional_allowed: Whether ``name?: T`` may be used; otherwise an
                optional parameter is emitted as ``name: T | undefined``
            scope: Naming scope for type references
        """
        writer.emit_decorators(self.decorators, inline=True, scope=scope)
        writer.emit_modifiers(self.modifiers)
        if is_rest:
            writer.emit("...")
        writer.emit(self.name)

        if self.optional and not is_rest:
            if optional_allowed:
                writer.emit_code(CodeBlock.of("?: %T", self.type_name), scope)
            else:
                writer.emit_code(CodeBlock.of(": %T | undefined", self.type_name), scope)
        else:
            writer.emit_code(CodeBlock.of(": %T", self.type_name), scope)

        self.emit_default_value(writer, scope)

    def emit_default_value(self, writer, scope=None) -> None:
        if self.default_value is not None:
            writer.emit_code(CodeBlock.of(" = %L", self.default_value), scope)

    def to_builder(self) -> "ParameterSpecBuilder":
        builder = ParameterSpecBuilder(self.name, self.type_name, self.optional)
        builder.decorators.extend(self.decorators)
        builder.modifiers.update(self.modifiers)
        builder._default_value = self.default_value
        return builder


class ParameterSpecBuilder:
    def __init__(self, name: str, type_name: TypeName, optional: bool = False):
        if not name:
            raise ValueError("parameter name must not be empty")
        self.name = name
        self.type_name = type_name
        self.optional = optional
        self.decorators: List[DecoratorSpec] = []
        self.modifiers: Set[Modifier] = set()
        self._default_value: Optional[CodeBlock] = None

    def add_decorators(self, decorators: Iterable[DecoratorSpec]) -> "ParameterSpecBuilder":
        self.decorators.extend(decorators)
        return self

    def add_decorator(self, decorator: DecoratorSpec) -> "ParameterSpecBuilder":
        self.decorators.append(decorator)
        return self

    def add_modifiers(self, *modifiers: Modifier) -> "ParameterSpecBuilder":
        self.modifiers.update(modifiers)
        return self

    def default_value(self, code: Union[str, CodeBlock], *args: Any) -> "ParameterSpecBuilder":
        self._default_value = code if isinstance(code, CodeBlock) else CodeBlock.of(code, *args)
        return self

    def build(self) -> ParameterSpec:
        return ParameterSpec(
            name=self.name,
            type_name=self.type_name,
            optional=self.optional,
            decorators=tuple(self.decorators),
            modifiers=frozenset(self.modifiers),
            default_value=self._default_value,
        )
