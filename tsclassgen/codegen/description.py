"""
JSON class descriptions.

Converts a JSON-shaped dictionary into a ClassSpec so classes can be
generated from files. Example::

    {
      "name": "User",
      "modifiers": ["export"],
      "superclass": "BaseEntity@./base",
      "properties": [{"name": "id", "type": "number", "modifiers": ["readonly"]}],
      "constructor": {
        "parameters": [{"name": "id", "type": "number"}],
        "body": ["super();", "this.id = id;"]
      },
      "functions": [{"name": "describe", "returns": "string", "body": "return `${this.id}`;"}]
    }

Types are written the way they appear in source, with ``@module`` marking an
import: ``string``, ``User[]``, ``Map<string, Order@./order>``, ``A | B``.
"""

from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger
from .core.code_block import CodeBlock
from .core.config import EmitterConfig
from .core.modifier import Modifier
from .core.type_name import TypeName, TypeVariable, as_type_name
from .specs.class_spec import ClassSpec
from .specs.decorator_spec import DecoratorSpec
from .specs.function_spec import FunctionSpec, FunctionSpecBuilder
from .specs.parameter_spec import ParameterSpec
from .specs.property_spec import PropertySpec

logger = get_logger(__name__)

CLASS_KEYS = {
    "name",
    "doc",
    "modifiers",
    "decorators",
    "type_variables",
    "superclass",
    "mixins",
    "properties",
    "constructor",
    "functions",
    "promote_constructor_properties",
}


class DescriptionError(Exception):
    """Exception raised for malformed class descriptions."""

    pass


# Types


def _split_top_level(text: str, separator: str) -> List[str]:
    """Split on ``separator`` outside of <> and () nesting."""
    parts = []
    depth = 0
    current = []

    for char in text:
        if char in "<(":
            depth += 1
        elif char in ">)":
            depth -= 1
            if depth < 0:
                raise DescriptionError(f"Unbalanced brackets in type: {text!r}")
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    if depth != 0:
        raise DescriptionError(f"Unbalanced brackets in type: {text!r}")

    parts.append("".join(current))
    return parts


def parse_type(text: str) -> TypeName:
    """
    Parse a type written in source form.

    Args:
        text: e.g. ``string``, ``User@./user``, ``Promise<User[]>``, ``A | null``

    Returns:
        The corresponding TypeName
    """
    if not isinstance(text, str):
        raise DescriptionError(f"Type must be a string, got {type(text).__name__}")

    text = text.strip()
    if not text:
        raise DescriptionError("Type must not be empty")

    members = _split_top_level(text, "|")
    if len(members) > 1:
        return TypeName.union(*(parse_type(member) for member in members))

    if text.endswith("[]"):
        return TypeName.array(parse_type(text[:-2]))

    if text.startswith("(") and text.endswith(")"):
        return parse_type(text[1:-1])

    if "<" in text:
        if not text.endswith(">"):
            raise DescriptionError(f"Malformed generic type: {text!r}")
        start = text.index("<")
        raw = parse_type(text[:start])
        arguments = [parse_type(arg) for arg in _split_top_level(text[start + 1:-1], ",")]
        return TypeName.parameterized(raw, *arguments)

    try:
        return as_type_name(text)
    except ValueError as e:
        raise DescriptionError(str(e)) from e


# Members


def _require_object(entry: Any, what: str) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        raise DescriptionError(
            f"{what} must be an object, got {type(entry).__name__}: {entry!r}"
        )
    return entry


def _require_name(entry: Any, what: str) -> str:
    name = _require_object(entry, what).get("name")
    if not isinstance(name, str) or not name:
        raise DescriptionError(f"{what} is missing a name: {entry!r}")
    return name


def _entries(entry: Dict[str, Any], key: str) -> List[Any]:
    """Return the list stored under ``key`` (empty when absent)."""
    value = entry.get(key, [])
    if not isinstance(value, list):
        raise DescriptionError(f"'{key}' must be a list, got {type(value).__name__}: {value!r}")
    return value


def _modifiers(keywords: List[Any]) -> List[Modifier]:
    modifiers = []
    for keyword in keywords:
        if not isinstance(keyword, str):
            raise DescriptionError(f"Modifier must be a string: {keyword!r}")
        try:
            modifiers.append(Modifier.from_keyword(keyword))
        except ValueError as e:
            raise DescriptionError(str(e)) from e
    return modifiers


def _code(source: Union[str, List[str]]) -> CodeBlock:
    """Turn a body given as text or a list of lines into a CodeBlock."""
    if isinstance(source, list):
        if not all(isinstance(line, str) for line in source):
            raise DescriptionError(f"Code lines must be strings: {source!r}")
        source = "\n".join(source)
    if not isinstance(source, str):
        raise DescriptionError(f"Code must be a string or list of lines: {source!r}")
    if not source:
        return CodeBlock.empty()
    if not source.endswith("\n"):
        source += "\n"
    return CodeBlock.of("%L", source)


def _decorator(entry: Union[str, Dict[str, Any]]) -> DecoratorSpec:
    if isinstance(entry, str):
        return DecoratorSpec.of(entry)

    builder = DecoratorSpec.builder(parse_type(_require_name(entry, "Decorator")))
    for argument in _entries(entry, "arguments"):
        builder.add_argument("%L", argument)
    if entry.get("factory"):
        builder.as_factory()
    return builder.build()


def _type_variable(entry: Union[str, Dict[str, Any]]) -> TypeVariable:
    if isinstance(entry, str):
        return TypeName.type_variable(entry)
    name = _require_name(entry, "Type variable")
    bounds = [parse_type(bound) for bound in _entries(entry, "bounds")]
    return TypeName.type_variable(name, *bounds)


def _parameter(entry: Dict[str, Any]) -> ParameterSpec:
    builder = ParameterSpec.builder(
        _require_name(entry, "Parameter"),
        parse_type(entry.get("type", "any")),
        bool(entry.get("optional", False)),
        *_modifiers(_entries(entry, "modifiers")),
    )
    builder.add_decorators(_decorator(d) for d in _entries(entry, "decorators"))
    if "default" in entry:
        builder.default_value("%L", entry["default"])
    return builder.build()


def _property(entry: Dict[str, Any]) -> PropertySpec:
    name = _require_name(entry, "Property")
    if "type" not in entry:
        raise DescriptionError(f"Property {name!r} is missing a type")

    builder = PropertySpec.builder(
        name,
        parse_type(entry["type"]),
        bool(entry.get("optional", False)),
        *_modifiers(_entries(entry, "modifiers")),
    )
    if entry.get("doc"):
        builder.add_doc("%L", entry["doc"])
    builder.add_decorators(_decorator(d) for d in _entries(entry, "decorators"))
    if "initializer" in entry:
        builder.initializer("%L", entry["initializer"])
    return builder.build()


def _fill_function(builder: FunctionSpecBuilder, entry: Dict[str, Any]) -> FunctionSpec:
    if entry.get("doc"):
        builder.add_doc("%L", entry["doc"])
    builder.add_decorators(_decorator(d) for d in _entries(entry, "decorators"))
    builder.add_modifiers(*_modifiers(_entries(entry, "modifiers")))
    builder.add_type_variables(_type_variable(tv) for tv in _entries(entry, "type_variables"))
    builder.add_parameters(_parameter(p) for p in _entries(entry, "parameters"))
    if "rest" in entry:
        builder.rest_parameter(_parameter(entry["rest"]))
    if "returns" in entry:
        builder.returns(parse_type(entry["returns"]))
    if "body" in entry:
        builder.add_code(_code(entry["body"]))
    return builder.build()


def _function(entry: Dict[str, Any]) -> FunctionSpec:
    return _fill_function(FunctionSpec.builder(_require_name(entry, "Function")), entry)


def _constructor(entry: Dict[str, Any]) -> FunctionSpec:
    return _fill_function(
        FunctionSpec.constructor_builder(), _require_object(entry, "Constructor")
    )


# Classes


def class_spec_from_dict(
    data: Dict[str, Any], config: Optional[EmitterConfig] = None
) -> ClassSpec:
    """
    Build a ClassSpec from a JSON class description.

    Args:
        data: Parsed description
        config: Supplies the default for ``promote_constructor_properties``

    Returns:
        The frozen class spec

    Raises:
        DescriptionError: If the description is malformed
        SpecError: If the described class violates a builder rule
    """
    if not isinstance(data, dict):
        raise DescriptionError(f"Class description must be an object, got {type(data).__name__}")

    unknown = sorted(set(data) - CLASS_KEYS)
    if unknown:
        logger.warning("Ignoring unknown class description keys: %s", ", ".join(unknown))

    name = _require_name(data, "Class")
    logger.debug("Converting description of class %s", name)

    builder = ClassSpec.builder(name)

    if data.get("doc"):
        builder.add_doc("%L", data["doc"])
    builder.add_decorators(_decorator(d) for d in _entries(data, "decorators"))
    builder.add_modifiers(*_modifiers(_entries(data, "modifiers")))
    builder.add_type_variables(_type_variable(tv) for tv in _entries(data, "type_variables"))

    if data.get("superclass"):
        builder.superclass(parse_type(data["superclass"]))
    builder.add_mixins(parse_type(mixin) for mixin in _entries(data, "mixins"))

    builder.add_properties(_property(p) for p in _entries(data, "properties"))
    if data.get("constructor") is not None:
        builder.constructor(_constructor(data["constructor"]))
    builder.add_functions(_function(f) for f in _entries(data, "functions"))

    default_promote = config.promote_constructor_properties if config else True
    builder.promote_constructor_properties(
        bool(data.get("promote_constructor_properties", default_promote))
    )

    return builder.build()
