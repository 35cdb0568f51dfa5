"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with the utilities used to assemble generated TypeScript modules.
"""

from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    TemplateNotFound,
)

from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        # Generated source is not markup; never escape it
        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {str(e)}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    # Template filters for code generation

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else style for line in lines)


# Built-in templates

MODULE_TEMPLATE = """\
{% if header %}
{{ header | comment }}

{% endif %}
{% for module, names in imports %}
import { {{ names | join(', ') }} } from {{ quote }}{{ module }}{{ quote }};
{% endfor %}
{% if imports %}

{% endif %}
{{ body }}"""

# Default template engine instance
_default_engine = None


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine preloaded with the built-in templates."""
    engine = TemplateEngine(template_dir)
    if not engine.template_exists("module.ts"):
        engine.add_template("module.ts", MODULE_TEMPLATE)
    logger.debug("Template engine created (template_dir=%s)", template_dir)
    return engine


def get_default_template_engine() -> TemplateEngine:
    """Get the default template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_template_engine()
    return _default_engine


def render_module(
    body: str,
    imports: Dict[str, list],
    header: Optional[str] = None,
    quote: str = "'",
    engine: Optional[TemplateEngine] = None,
) -> str:
    """
    Render a complete TypeScript module around a generated declaration.

    Args:
        body: Generated declaration text
        imports: Imported names by module
        header: Optional header comment text
        quote: Quote character for module specifiers
        engine: Template engine to use (defaults to the shared one)

    Returns:
        Module source text
    """
    engine = engine or get_default_template_engine()
    context = {
        "body": body,
        "imports": sorted(imports.items()),
        "header": header,
        "quote": quote,
    }
    return engine.render_template("module.ts", context)
