"""
TypeScript Code Generation Module

Specs describing classes and their members, and the writer that emits them.
"""

from .core import (
    CodeBlock,
    CodeWriter,
    ConfigManager,
    EmitterConfig,
    GenerationResult,
    GeneratorError,
    Modifier,
    TypeName,
    generate_class,
    generate_module,
    load_config,
    render_class,
)
from .description import DescriptionError, class_spec_from_dict, parse_type
from .specs import (
    ClassSpec,
    DecoratorSpec,
    FunctionSpec,
    ParameterSpec,
    PropertySpec,
    SpecError,
)


# Convenience functions
def quick_generate(description, **options):
    """
    Quick code generation from a class description.

    Args:
        description: Class description (dict, or JSON text)
        **options: Emitter configuration overrides

    Returns:
        Generated module source
    """
    if isinstance(description, str):
        import json

        description = json.loads(description)

    config = load_config(options)
    result = generate_class(class_spec_from_dict(description, config), config)

    if result.success:
        return result.code
    else:
        raise GeneratorError(f"Code generation failed: {result.error_message}")


__all__ = [
    "ClassSpec",
    "CodeBlock",
    "CodeWriter",
    "ConfigManager",
    "DecoratorSpec",
    "DescriptionError",
    "EmitterConfig",
    "FunctionSpec",
    "GenerationResult",
    "GeneratorError",
    "Modifier",
    "ParameterSpec",
    "PropertySpec",
    "SpecError",
    "TypeName",
    "class_spec_from_dict",
    "generate_class",
    "generate_module",
    "load_config",
    "parse_type",
    "quick_generate",
    "render_class",
]
