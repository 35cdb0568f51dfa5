"""
tsclassgen

Builds TypeScript class declarations from immutable specs and emits them as
source, declaring properties as constructor parameters where possible.
"""

__version__ = "0.1.0"

from .codegen import (
    ClassSpec,
    CodeBlock,
    EmitterConfig,
    FunctionSpec,
    GenerationResult,
    Modifier,
    ParameterSpec,
    PropertySpec,
    TypeName,
    generate_class,
    generate_module,
    quick_generate,
)

__all__ = [
    "ClassSpec",
    "CodeBlock",
    "EmitterConfig",
    "FunctionSpec",
    "GenerationResult",
    "Modifier",
    "ParameterSpec",
    "PropertySpec",
    "TypeName",
    "generate_class",
    "generate_module",
    "quick_generate",
    "__version__",
]
