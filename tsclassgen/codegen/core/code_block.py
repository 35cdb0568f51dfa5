"""
Templated code fragments.

A CodeBlock is an immutable format/argument pair that is expanded by the
CodeWriter. Placeholders:

    %L  literal (a nested CodeBlock is emitted in place)
    %N  name (a string, or any object with a ``name`` attribute)
    %S  string literal, quoted and escaped
    %T  type reference (a TypeName, resolved against the scope)
    %W  space
    %>  increase indentation
    %<  decrease indentation
    %%  a literal percent sign
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Pattern, Tuple, Union

from .type_name import as_type_name

# Placeholders that consume an argument
ARG_PLACEHOLDERS = ("%L", "%N", "%S", "%T")
# Placeholders that don't
NO_ARG_PLACEHOLDERS = ("%W", "%>", "%<", "%%")

_PERCENT = re.compile(r"%(.?)", re.DOTALL)


def _parse_format(format_string: str, args: Tuple[Any, ...]) -> List[str]:
    """Split a format string into literal chunks and placeholder tokens."""
    parts = []
    expected = 0
    position = 0

    for match in _PERCENT.finditer(format_string):
        if match.start() > position:
            parts.append(format_string[position:match.start()])

        token = match.group(0)
        if token in ARG_PLACEHOLDERS:
            expected += 1
        elif token not in NO_ARG_PLACEHOLDERS:
            raise ValueError(
                f"Invalid placeholder {token!r} in format {format_string!r}"
            )

        parts.append(token)
        position = match.end()

    if position < len(format_string):
        parts.append(format_string[position:])

    if expected != len(args):
        raise ValueError(
            f"Format {format_string!r} expects {expected} argument(s), "
            f"got {len(args)}"
        )

    return parts


def _literal_parts(text: str) -> List[str]:
    """Turn raw text into format parts, escaping percent signs."""
    parts = []
    for index, chunk in enumerate(text.split("%")):
        if index:
            parts.append("%%")
        if chunk:
            parts.append(chunk)
    return parts


def literal_text(value: Any) -> str:
    """Text emitted for a non-CodeBlock %L argument."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def string_literal(value: Any, quote: str = "'") -> str:
    """Quote and escape a %S argument."""
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace(quote, "\\" + quote)
        .replace("\n", "\\n")
        .replace("\t", "\\t")
    )
    return f"{quote}{escaped}{quote}"


def name_text(value: Any) -> str:
    """Text emitted for a %N argument."""
    if isinstance(value, str):
        return value
    name = getattr(value, "name", None)
    if not isinstance(name, str):
        raise ValueError(f"Expected a name but was {value!r}")
    return name


@dataclass(frozen=True)
class CodeBlock:
    """An immutable fragment of code with deferred placeholder expansion."""

    formats: Tuple[str, ...] = ()
    args: Tuple[Any, ...] = ()

    @staticmethod
    def of(format_string: str, *args: Any) -> "CodeBlock":
        return CodeBlockBuilder().add(format_string, *args).build()

    @staticmethod
    def empty() -> "CodeBlock":
        return _EMPTY

    @staticmethod
    def builder() -> "CodeBlockBuilder":
        return CodeBlockBuilder()

    def is_empty(self) -> bool:
        return not self.formats

    def is_not_empty(self) -> bool:
        return bool(self.formats)

    def to_builder(self) -> "CodeBlockBuilder":
        builder = CodeBlockBuilder()
        builder.formats.extend(self.formats)
        builder.args.extend(self.args)
        return builder

    def __str__(self) -> str:
        # Local import: the writer depends on this module
        from .writer import CodeWriter

        writer = CodeWriter()
        writer.emit_code(self)
        return writer.to_string()


_EMPTY = CodeBlock()


class CodeBlockBuilder:
    """Mutable accumulator for CodeBlock."""

    def __init__(self):
        self.formats: List[str] = []
        self.args: List[Any] = []

    def is_empty(self) -> bool:
        return not self.formats

    def add(self, format_string: str, *args: Any) -> "CodeBlockBuilder":
        """Append a format string and its arguments."""
        self.formats.extend(_parse_format(format_string, args))
        self.args.extend(args)
        return self

    def add_code(self, code_block: CodeBlock) -> "CodeBlockBuilder":
        """Append another code block verbatim."""
        self.formats.extend(code_block.formats)
        self.args.extend(code_block.args)
        return self

    def add_statement(self, format_string: str, *args: Any) -> "CodeBlockBuilder":
        """Append a statement terminated by ``;`` and a newline."""
        self.add(format_string, *args)
        self.formats.append(";\n")
        return self

    def begin_control_flow(
        self, control_flow: str, *args: Any
    ) -> "CodeBlockBuilder":
        """Open a braced control-flow block, e.g. ``if (%L)``."""
        return self.add(control_flow + " {\n%>", *args)

    def next_control_flow(
        self, control_flow: str, *args: Any
    ) -> "CodeBlockBuilder":
        """Close the current block and open the next one, e.g. ``else``."""
        return self.add("%<} " + control_flow + " {\n%>", *args)

    def end_control_flow(self) -> "CodeBlockBuilder":
        return self.add("%<}\n")

    def indent(self) -> "CodeBlockBuilder":
        self.formats.append("%>")
        return self

    def unindent(self) -> "CodeBlockBuilder":
        self.formats.append("%<")
        return self

    def remove(self, pattern: Union[str, Pattern[str]]) -> "CodeBlockBuilder":
        """Remove every match of ``pattern`` from the block's text.

        Matching runs over the scope-less rendering of the block. Type and
        string placeholders overlapping a match are dropped with it;
        indentation markers are zero-width and always kept.
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern

        segments = _flatten(self.formats, self.args)
        text = "".join(segment_text for segment_text, _, _ in segments)
        spans = [m.span() for m in regex.finditer(text) if m.end() > m.start()]
        if not spans:
            return self

        formats: List[str] = []
        args: List[Any] = []
        offset = 0

        for segment_text, token, arg in segments:
            start, end = offset, offset + len(segment_text)
            offset = end

            if token is None:
                kept = "".join(
                    char
                    for index, char in enumerate(segment_text, start)
                    if not _inside(index, spans)
                )
                formats.extend(_literal_parts(kept))
            elif token in ("%>", "%<"):
                formats.append(token)
            elif not any(s < end and start < e for s, e in spans):
                formats.append(token)
                args.append(arg)

        self.formats = formats
        self.args = args
        return self

    def build(self) -> CodeBlock:
        return CodeBlock(tuple(self.formats), tuple(self.args))


def _inside(index: int, spans: List[Tuple[int, int]]) -> bool:
    return any(start <= index < end for start, end in spans)


def _flatten(
    formats: Iterable[str], args: Iterable[Any]
) -> List[Tuple[str, Optional[str], Any]]:
    """Expand a block into (text, token, arg) segments.

    Plain text has a ``None`` token. Literal and name arguments are expanded
    into plain text; nested blocks are flattened recursively.
    """
    segments: List[Tuple[str, Optional[str], Any]] = []
    arg_iter = iter(args)

    for part in formats:
        if part == "%%":
            segments.append(("%", None, None))
        elif part == "%W":
            segments.append((" ", None, None))
        elif part in ("%>", "%<"):
            segments.append(("", part, None))
        elif part == "%L":
            arg = next(arg_iter)
            if isinstance(arg, CodeBlock):
                segments.extend(_flatten(arg.formats, arg.args))
            else:
                segments.append((literal_text(arg), None, None))
        elif part == "%N":
            segments.append((name_text(next(arg_iter)), None, None))
        elif part == "%S":
            arg = next(arg_iter)
            segments.append((string_literal(arg), "%S", arg))
        elif part == "%T":
            arg = next(arg_iter)
            segments.append((as_type_name(arg).reference(), "%T", arg))
        else:
            segments.append((part, None, None))

    return segments


def join_to_code(
    code_blocks: Iterable[CodeBlock],
    separator: str = ", ",
    prefix: str = "",
    suffix: str = "",
) -> CodeBlock:
    """Join code blocks with a separator, wrapped in a prefix and suffix."""
    builder = CodeBlockBuilder()
    builder.formats.extend(_literal_parts(prefix))
    for index, code_block in enumerate(code_blocks):
        if index:
            builder.formats.extend(_literal_parts(separator))
        builder.add("%L", code_block)
    builder.formats.extend(_literal_parts(suffix))
    return builder.build()
