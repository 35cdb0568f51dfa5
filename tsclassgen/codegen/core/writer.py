"""
Code writer.

Accumulates generated text line by line, applying indentation lazily at the
start of each non-empty line, expanding CodeBlock placeholders and tracking
the imports that emitted type references require.
"""

from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional, Sequence, Set

from .code_block import CodeBlock, literal_text, name_text, string_literal
from .config import EmitterConfig
from .modifier import Modifier, ordered
from .type_name import TypeVariable, as_type_name

if TYPE_CHECKING:
    from ..specs.decorator_spec import DecoratorSpec
    from ..specs.parameter_spec import ParameterSpec

Scope = Optional[Sequence[str]]

# Called for each parameter with (parameter, is_rest, optional_allowed, scope)
ParameterEmitter = Callable[["ParameterSpec", bool, bool, Scope], None]


class CodeWriter:
    """Writes formatted TypeScript source."""

    def __init__(self, config: Optional[EmitterConfig] = None):
        """
        Initialize an empty writer.

        Args:
            config: Indentation, quoting and line ending settings
        """
        self.config = config or EmitterConfig()
        self._chunks: List[str] = []
        self._indent_level = 0
        self._at_line_start = True
        self._imports: Dict[str, Set[str]] = {}

    # Indentation

    def indent(self, levels: int = 1) -> "CodeWriter":
        self._indent_level += levels
        return self

    def unindent(self, levels: int = 1) -> "CodeWriter":
        if self._indent_level - levels < 0:
            raise ValueError(f"cannot unindent {levels} from {self._indent_level}")
        self._indent_level -= levels
        return self

    # Raw output

    def emit(self, text: str) -> "CodeWriter":
        """Emit literal text, indenting each line that has content."""
        for index, line in enumerate(text.split("\n")):
            if index:
                self._chunks.append("\n")
                self._at_line_start = True
            if line:
                if self._at_line_start:
                    self._chunks.append(self.config.indent * self._indent_level)
                    self._at_line_start = False
                self._chunks.append(line)
        return self

    def emit_code(self, code_block: CodeBlock, scope: Scope = None) -> "CodeWriter":
        """Emit a code block, expanding its placeholders."""
        args = iter(code_block.args)

        for part in code_block.formats:
            if part == "%L":
                arg = next(args)
                if isinstance(arg, CodeBlock):
                    self.emit_code(arg, scope)
                else:
                    self.emit(literal_text(arg))
            elif part == "%N":
                self.emit(name_text(next(args)))
            elif part == "%S":
                self.emit(string_literal(next(args), self.config.string_quote))
            elif part == "%T":
                self.emit(as_type_name(next(args)).reference(scope, self))
            elif part == "%W":
                self.emit(" ")
            elif part == "%>":
                self.indent()
            elif part == "%<":
                self.unindent()
            elif part == "%%":
                self.emit("%")
            else:
                self.emit(part)

        return self

    # Declarations

    def emit_doc(self, doc: CodeBlock, scope: Scope = None) -> "CodeWriter":
        """Emit a documentation comment, if there is any documentation."""
        if doc.is_empty():
            return self

        # Type references in the doc still need their imports
        nested = CodeWriter(self.config).emit_code(doc, scope)
        for module, names in nested._imports.items():
            self._imports.setdefault(module, set()).update(names)
        text = "".join(nested._chunks)

        self.emit("/**\n")
        for line in text.rstrip("\n").split("\n"):
            self.emit(f" * {line}\n" if line else " *\n")
        self.emit(" */\n")
        return self

    def emit_modifiers(
        self,
        modifiers: Iterable[Modifier],
        implicit_modifiers: Iterable[Modifier] = frozenset(),
    ) -> "CodeWriter":
        """Emit modifiers in source order, skipping the implicit ones."""
        implicit = set(implicit_modifiers)
        for modifier in ordered(modifiers):
            if modifier in implicit:
                continue
            self.emit(modifier.keyword)
            self.emit(" ")
        return self

    def emit_decorators(
        self,
        decorators: Iterable["DecoratorSpec"],
        inline: bool,
        scope: Scope = None,
    ) -> "CodeWriter":
        """Emit decorators, space separated when inline, one per line otherwise."""
        for decorator in decorators:
            decorator.emit(self, inline=inline, scope=scope)
            self.emit(" " if inline else "\n")
        return self

    def emit_type_variables(
        self, type_variables: Sequence[TypeVariable], scope: Scope = None
    ) -> "CodeWriter":
        if not type_variables:
            return self
        declarations = ", ".join(tv.declaration(scope, self) for tv in type_variables)
        self.emit(f"<{declarations}>")
        return self

    def emit_parameters(
        self,
        parameters: Sequence["ParameterSpec"],
        rest: Optional["ParameterSpec"] = None,
        scope: Scope = None,
        emit_param: Optional[ParameterEmitter] = None,
    ) -> "CodeWriter":
        """
        Emit a parenthesized parameter list.

        A parameter may use the compact optional form (``name?: T``) only when
        every parameter after it is optional as well.

        Args:
            parameters: Ordinary parameters
            rest: Trailing rest parameter, if any
            scope: Naming scope for type references
            emit_param: Replaces the default per-parameter emission
        """
        if emit_param is None:
            def emit_param(parameter, is_rest, optional_allowed, scope):
                parameter.emit(
                    self, is_rest=is_rest, optional_allowed=optional_allowed, scope=scope
                )

        last_required = max(
            (index for index, p in enumerate(parameters) if not p.optional),
            default=-1,
        )

        self.emit("(")
        for index, parameter in enumerate(parameters):
            if index:
                self.emit(", ")
            emit_param(parameter, False, index > last_required, scope)

        if rest is not None:
            if parameters:
                self.emit(", ")
            emit_param(rest, True, False, scope)

        self.emit(")")
        return self

    # Imports

    def add_import(self, module: str, name: str) -> None:
        self._imports.setdefault(module, set()).add(name)

    @property
    def imports(self) -> Dict[str, List[str]]:
        """Imported names by module, both sorted."""
        return {module: sorted(names) for module, names in sorted(self._imports.items())}

    # Output

    def to_string(self) -> str:
        text = "".join(self._chunks)
        if self.config.line_ending != "\n":
            text = text.replace("\n", self.config.line_ending)
        return text

    def __str__(self) -> str:
        return self.to_string()
