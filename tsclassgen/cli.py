"""Command-line interface: generate TypeScript classes from JSON descriptions."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen.core.config import ConfigError, EmitterConfig, get_config_manager, load_config
from .codegen.core.generator import GenerationResult, GeneratorError, generate_module
from .codegen.description import DescriptionError, class_spec_from_dict
from .codegen.specs.errors import SpecError
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, load_descriptions

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tsclassgen",
        description="Generate TypeScript class declarations from JSON descriptions.",
    )
    parser.add_argument(
        "description",
        nargs="?",
        metavar="FILE",
        help="JSON file with a class description (or a list of them)",
    )
    parser.add_argument("--url", help="Fetch the description JSON from a URL")
    parser.add_argument(
        "--output", "-o", metavar="FILE", help="Write the module here (default: stdout)"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON emitter configuration file")
    parser.add_argument(
        "--no-promote",
        action="store_true",
        help="Never declare properties as constructor parameters",
    )
    parser.add_argument("--header", metavar="TEXT", help="Header comment for the module")
    parser.add_argument(
        "--scope",
        nargs="+",
        metavar="NAME",
        help="Enclosing namespaces used to shorten qualified type names",
    )
    parser.add_argument(
        "--pretty", action="store_true", help="Syntax-highlight the generated code"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show generation metadata"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


class CLIHandler:
    """Run class generation for parsed command-line arguments."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.error_console = Console(stderr=True)

    def run(self, args: Any) -> int:
        """Generate code for the parsed arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        if not args.description and not args.url:
            self.error_console.print("❌ [red]No description file or --url given[/red]")
            return 1

        try:
            config = self._load_config(args)
            source, descriptions = load_descriptions(
                file_path=args.description, url=args.url
            )
            specs = [class_spec_from_dict(d, config) for d in descriptions]
            result = generate_module(specs, config, scope=args.scope).raise_for_error()
        except (
            ConfigError,
            JSONLoaderError,
            FileNotFoundError,
            DescriptionError,
            SpecError,
            GeneratorError,
        ) as e:
            logger.error("Generation failed: %s", e)
            self.error_console.print(f"❌ [red]{e}[/red]")
            return 1

        logger.info("Generated %d class(es) from %s", len(specs), source)

        for warning in result.warnings:
            self.error_console.print(f"⚠️  [yellow]{warning}[/yellow]")

        self._write_output(result, args)

        if args.verbose:
            self._show_metadata(result)

        return 0

    def _load_config(self, args: Any) -> EmitterConfig:
        overrides: dict[str, Any] = {}
        if args.no_promote:
            overrides["promote_constructor_properties"] = False
        if args.header:
            overrides["header_comment"] = args.header
        config = load_config(overrides, args.config)
        for warning in get_config_manager().validate_config(config):
            logger.warning(warning)
        return config

    def _write_output(self, result: GenerationResult, args: Any) -> None:
        if args.output:
            path = Path(args.output)
            path.write_text(result.code, encoding="utf-8")
            self.error_console.print(f"✅ Wrote {path}")
        elif args.pretty:
            self.console.print(Syntax(result.code, "typescript", theme="monokai"))
        else:
            self.console.file.write(result.code)

    def _show_metadata(self, result: GenerationResult) -> None:
        table = Table(title="Generation", box=box.ROUNDED)
        table.add_column("Class", style="cyan")
        table.add_column("Promoted properties")

        for name in result.metadata["class_names"]:
            promoted = result.metadata["promoted_properties"].get(name, [])
            table.add_row(name, ", ".join(promoted) or "-")

        self.error_console.print(table)

        imports = result.metadata["imports"]
        if imports:
            lines = [f"{module}: {', '.join(names)}" for module, names in imports.items()]
            self.error_console.print("Imports:\n  " + "\n  ".join(lines))


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return CLIHandler().run(args)


if __name__ == "__main__":
    sys.exit(main())
