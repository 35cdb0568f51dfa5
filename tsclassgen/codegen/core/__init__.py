"""
Core code generation components.

Code blocks, type names, modifiers and the writer shared by all specs.
"""

from .code_block import CodeBlock, CodeBlockBuilder, join_to_code
from .config import ConfigError, ConfigManager, EmitterConfig, load_config
from .generator import (
    GenerationResult,
    GeneratorError,
    generate_class,
    generate_module,
    render_class,
    validate_class_spec,
)
from .modifier import Modifier
from .templates import TemplateEngine, TemplateError
from .type_name import TypeName
from .writer import CodeWriter

__all__ = [
    "CodeBlock",
    "CodeBlockBuilder",
    "CodeWriter",
    "ConfigError",
    "ConfigManager",
    "EmitterConfig",
    "GenerationResult",
    "GeneratorError",
    "Modifier",
    "TemplateEngine",
    "TemplateError",
    "TypeName",
    "generate_class",
    "generate_module",
    "join_to_code",
    "load_config",
    "render_class",
    "validate_class_spec",
]
