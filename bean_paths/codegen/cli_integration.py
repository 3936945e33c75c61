"""
CLI integration for code generation functionality.

Provides the ``generate`` and ``extensions`` subcommands.
"""

import argparse
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..logging_config import get_logger
from ..utils import ModelLoaderError, load_json_from_stream, load_model, model_from_data
from . import (
    ConfigError,
    RegistryError,
    generate_from_model,
    list_all_extension_info,
    list_supported_extensions,
)
from .core.config import DECLARATION_FILE, get_config_manager, load_settings
from .registry import get_registry

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()

# Escapes accepted by --indent, for shells that cannot pass a literal tab
INDENT_ESCAPES = {"\\t": "\t", "\\s": " "}


def create_generate_subparser(subparsers) -> argparse.ArgumentParser:
    """
    Create the ``generate`` subcommand parser.

    Args:
        subparsers: Subparser group from main parser

    Returns:
        Configured subparser
    """
    parser = subparsers.add_parser(
        "generate",
        help="Generate property path builders from a bean model",
        description="Generate TypeScript property path builders from a JSON bean model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bean-paths generate model.json
  bean-paths generate model.json -o paths.ts --export --indent-size 2
  bean-paths generate --stdin --tabs < model.json
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="JSON model file")
    input_group.add_argument("--url", help="URL to fetch the JSON model from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the JSON model from standard input"
    )

    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")

    indent_group = parser.add_mutually_exclusive_group()
    indent_group.add_argument(
        "--indent", metavar="STRING", help="Indentation unit (\\t and \\s are expanded)"
    )
    indent_group.add_argument(
        "--indent-size", type=int, metavar="N", help="Indent with N spaces"
    )
    indent_group.add_argument("--tabs", action="store_true", help="Indent with tabs")

    parser.add_argument(
        "--export",
        action="store_true",
        help="Mark generated constants with the export keyword",
    )
    parser.add_argument(
        "--extension",
        "-e",
        action="append",
        metavar="NAME",
        help="Extension to run (repeatable, default from configuration)",
    )
    parser.add_argument(
        "--declaration",
        action="store_true",
        help="Target a declaration file (refuses runtime-code extensions)",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print generated code without syntax highlighting",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show generation metadata"
    )

    parser.set_defaults(func=handle_generate_command)
    return parser


def create_extensions_subparser(subparsers) -> argparse.ArgumentParser:
    """Create the ``extensions`` subcommand parser."""
    parser = subparsers.add_parser(
        "extensions", help="List registered emitter extensions"
    )
    parser.set_defaults(func=handle_extensions_command)
    return parser


def handle_generate_command(args: argparse.Namespace) -> int:
    """
    Handle the generate subcommand.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        if not (args.file or args.url or args.stdin):
            raise CLIError("Input source required (file, --url, or --stdin)")

        model = _get_input_model(args)
        settings = _build_settings(args)

        for warning in get_config_manager().validate_settings(settings):
            logger.warning(warning)

        for name in settings.extensions:
            if not get_registry().is_supported(name):
                available = ", ".join(list_supported_extensions())
                raise CLIError(f"Unknown extension '{name}'. Available: {available}")

        return _generate_and_output(model, settings, args)

    except (CLIError, ConfigError, RegistryError) as e:
        logger.error("%s", e)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def handle_extensions_command(args: argparse.Namespace) -> int:
    """List registered extensions with their features."""
    extension_info = list_all_extension_info()

    if not extension_info:
        console.print("[yellow]⚠️ No extensions registered[/yellow]")
        return 0

    table = Table(title="Registered Extensions", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Extension", style="bold green", no_wrap=True)
    table.add_column("Class", style="dim")
    table.add_column("Aliases", style="blue")
    table.add_column("Runtime Code", style="cyan")

    for _, info in sorted(extension_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            info["name"],
            info["class"],
            aliases,
            "yes" if info["features"]["generates_runtime_code"] else "no",
        )

    console.print()
    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] bean-paths generate [dim]model.json[/dim] "
            "--extension [cyan]NAME[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _get_input_model(args: argparse.Namespace):
    """Load the bean model from the selected input source."""
    try:
        if args.file:
            return load_model(file_path=args.file)[1]
        elif args.url:
            return load_model(url=args.url)[1]
        source, data = load_json_from_stream(sys.stdin)
        return model_from_data(data, source)
    except (ModelLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load model: {e}") from e


def _decode_indent(text: str) -> str:
    """Expand the \\t and \\s escapes accepted by --indent; other text is kept as is."""
    for escape, value in INDENT_ESCAPES.items():
        text = text.replace(escape, value)
    return text


def _build_settings(args: argparse.Namespace):
    """Build settings from the configuration file and CLI arguments."""
    overrides = {}

    if args.indent is not None:
        overrides["indent_string"] = _decode_indent(args.indent)
    elif args.indent_size is not None:
        overrides["indent_size"] = args.indent_size
    elif args.tabs:
        overrides["use_tabs"] = True

    if args.export:
        overrides["export_keyword"] = True
    if args.extension:
        overrides["extensions"] = args.extension
    if args.declaration:
        overrides["output_file_type"] = DECLARATION_FILE
    if args.output:
        overrides["output_file"] = args.output

    return load_settings(custom_config=overrides, config_file=args.config)


def _generate_and_output(model, settings, args: argparse.Namespace) -> int:
    """Generate code and handle output with rich formatting."""
    result = generate_from_model(model, settings)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if settings.output_file:
        output_path = Path(settings.output_file)
        try:
            output_path.write_text(result.code + settings.newline, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        console.print(f"[green]✓[/green] Generated code saved to [cyan]{output_path}[/cyan]")
    elif args.plain:
        sys.stdout.write(result.code + settings.newline)
    else:
        console.print(Syntax(result.code, "typescript", theme="monokai"))

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    # Warnings go to stderr so plain output stays clean
    if result.warnings:
        err_console = Console(stderr=True)
        err_console.print("[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            err_console.print(f"  [yellow]•[/yellow] {warning}")

    return 0
