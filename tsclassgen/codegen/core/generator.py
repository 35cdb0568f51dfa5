"""
Generation front-end.

Validates a ClassSpec, emits it through a CodeWriter and wraps the result in
a complete module (header comment and imports).
"""

from collections import Counter
from typing import TYPE_CHECKING, Dict, List, Any, Optional, Sequence

from ...logging_config import get_logger
from .config import EmitterConfig
from .templates import TemplateEngine, render_module
from .writer import CodeWriter

if TYPE_CHECKING:
    from ..specs.class_spec import ClassSpec

logger = get_logger(__name__)

# Stands in for the class text while the module framing is formatted
_BODY_MARKER = "\x00body\x00"


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    def raise_for_error(self) -> "GenerationResult":
        """Raise GeneratorError if generation failed; otherwise return self."""
        if not self.success:
            raise GeneratorError(self.error_message) from self.exception
        return self


def validate_class_spec(spec: "ClassSpec") -> List[str]:
    """
    Check a class spec for problems the builder does not reject.

    Args:
        spec: Class to check

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    property_names = Counter(p.name for p in spec.properties)
    for name, count in property_names.items():
        if count > 1:
            warnings.append(f"Property '{name}' is declared {count} times in {spec.name}")

    mixin_names = Counter(m.reference() for m in spec.mixins)
    for name, count in mixin_names.items():
        if count > 1:
            warnings.append(f"Mixin '{name}' is implemented {count} times by {spec.name}")

    function_names = {f.name for f in spec.functions}
    for name in property_names:
        if name in function_names:
            warnings.append(f"'{name}' is both a property and a method of {spec.name}")

    if spec.constructor is not None and spec.constructor.rest_parameter is not None:
        rest_name = spec.constructor.rest_parameter.name
        if rest_name in property_names:
            warnings.append(
                f"Rest parameter '{rest_name}' of {spec.name} cannot declare a property"
            )

    return warnings


def format_code(code: str, max_blank_lines: int = 1) -> str:
    """
    Collapse runs of blank lines and strip trailing whitespace.

    Args:
        code: Raw generated code
        max_blank_lines: Longest allowed run of blank lines

    Returns:
        Formatted code
    """
    lines = code.split("\n")
    formatted_lines = []
    blank_count = 0

    for line in lines:
        stripped = line.rstrip()
        if not stripped:
            blank_count += 1
            if blank_count <= max_blank_lines:
                formatted_lines.append("")
        else:
            blank_count = 0
            formatted_lines.append(stripped)

    return "\n".join(formatted_lines)


def render_class(
    spec: "ClassSpec",
    config: Optional[EmitterConfig] = None,
    scope: Optional[Sequence[str]] = None,
) -> str:
    """Emit just the class declaration."""
    writer = CodeWriter(config)
    spec.emit(writer, scope)
    return writer.to_string()


def _promoted(spec: "ClassSpec") -> List[str]:
    if not spec.promote_constructor_properties:
        return []
    return list(spec.constructor_properties())


def _emit_module(
    specs: Sequence["ClassSpec"],
    config: EmitterConfig,
    scope: Optional[Sequence[str]],
    engine: Optional[TemplateEngine],
) -> tuple[str, Dict[str, List[str]]]:
    """Emit classes into one module; returns (code, imports)."""
    writer = CodeWriter(config)
    for index, spec in enumerate(specs):
        if index:
            writer.emit("\n")
        spec.emit(writer, scope)
    imports = writer.imports

    # The template works with "\n"; apply the configured line ending last
    body = writer.to_string().replace(config.line_ending, "\n")

    # Only the template framing is normalised; the body is emitted verbatim
    framing = render_module(
        _BODY_MARKER,
        imports,
        header=config.header_comment,
        quote=config.string_quote,
        engine=engine,
    )
    code = format_code(framing, config.max_blank_lines).replace(_BODY_MARKER, body, 1)
    if config.line_ending != "\n":
        code = code.replace("\n", config.line_ending)

    return code, imports


def generate_class(
    spec: "ClassSpec",
    config: Optional[EmitterConfig] = None,
    scope: Optional[Sequence[str]] = None,
    engine: Optional[TemplateEngine] = None,
) -> GenerationResult:
    """
    Generate a module containing one class, with error handling.

    Args:
        spec: Class to generate
        config: Emitter configuration
        scope: Naming scope for type references
        engine: Template engine for the module template

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    config = config or EmitterConfig()

    try:
        warnings = validate_class_spec(spec)
        for warning in warnings:
            logger.warning(warning)

        code, imports = _emit_module([spec], config, scope, engine)

        metadata = {
            "class_name": spec.name,
            "promoted_properties": _promoted(spec),
            "imports": imports,
            "property_count": len(spec.properties),
            "function_count": len(spec.functions),
            "has_constructor": spec.constructor is not None,
        }

        logger.info("Generated class %s", spec.name)
        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed for %s: %s", spec.name, e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)


def generate_module(
    specs: Sequence["ClassSpec"],
    config: Optional[EmitterConfig] = None,
    scope: Optional[Sequence[str]] = None,
    engine: Optional[TemplateEngine] = None,
) -> GenerationResult:
    """
    Generate one module containing several classes, with error handling.

    Args:
        specs: Classes to generate, in output order
        config: Emitter configuration
        scope: Naming scope for type references
        engine: Template engine for the module template

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    config = config or EmitterConfig()

    if not specs:
        return GenerationResult.error("No classes to generate")

    try:
        warnings = []
        for spec in specs:
            warnings.extend(validate_class_spec(spec))

        names = Counter(spec.name for spec in specs)
        for name, count in names.items():
            if count > 1:
                warnings.append(f"Class '{name}' is declared {count} times in the module")

        for warning in warnings:
            logger.warning(warning)

        code, imports = _emit_module(specs, config, scope, engine)

        metadata = {
            "class_names": [spec.name for spec in specs],
            "promoted_properties": {spec.name: _promoted(spec) for spec in specs},
            "imports": imports,
        }

        logger.info("Generated module with %d class(es)", len(specs))
        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.error("Module generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
