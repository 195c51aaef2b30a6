"""
Command-line interface for DTO generation.

Reads Dart source from a file, URL or standard input, prompts for any
missing settings, and writes the rewritten source.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich import box

from .codegen import (
    DEFAULT_SUFFIX,
    GenerationResult,
    GeneratorError,
    NamingStyle,
    apply_edits,
    generate_dto_edits,
)
from .codegen.core.config import ConfigError, read_config_file
from .codegen.core.naming import convert_case, list_naming_styles
from .interactive import GenerationPrompter, SAMPLE_FIELD
from .logging_config import get_logger, setup_logging
from .utils import (
    SourceLoaderError,
    load_source,
    load_source_from_stream,
    write_source,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Rich consoles: diagnostics go to stderr so stdout stays pipeable
console = Console(stderr=True)
output_console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dto-generator",
        description="Generate Dart transfer classes (fromMap/toMap, copyWith, "
        "equality) from data-class declarations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dto-generator lib/user.dart --suffix DTO --naming-style snake_case
  dto-generator lib/models.dart --multi --directives --in-place
  dto-generator --stdin -s Dto -n camelCase < user.dart
  dto-generator --list-styles
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Dart file to read")
    input_group.add_argument("--url", help="URL to fetch Dart source from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read Dart source from standard input"
    )

    # Generation settings
    parser.add_argument(
        "--suffix", "-s", help=f"Suffix for generated class names (prompted, default {DEFAULT_SUFFIX})"
    )
    parser.add_argument(
        "--naming-style",
        "-n",
        metavar="STYLE",
        help=f"Naming style for map/JSON keys: {', '.join(list_naming_styles())}",
    )
    parser.add_argument(
        "--multi",
        action="store_true",
        help="Generate every class in the input instead of only the first",
    )
    parser.add_argument(
        "--directives",
        action="store_true",
        help="Strict line scan that also reads directive comments above fields",
    )
    parser.add_argument(
        "--no-copy-with", action="store_true", help="Don't generate copyWith"
    )
    parser.add_argument(
        "--no-equality",
        action="store_true",
        help="Don't generate ==/hashCode or Equatable props",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; use defaults for missing settings",
    )

    # Output options
    output_group = parser.add_mutually_exclusive_group(required=False)
    output_group.add_argument("--output", "-o", metavar="FILE", help="Output file")
    output_group.add_argument(
        "--in-place", "-i", action="store_true", help="Rewrite the input file"
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Debug logging and metadata"
    )
    parser.add_argument(
        "--list-styles", action="store_true", help="List naming styles and exit"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``dto-generator`` command."""
    args = create_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, console)

    try:
        if args.list_styles:
            return _list_styles()

        text, source = _get_input(args)
        suffix, naming_style = _resolve_settings(args)
        result = generate_dto_edits(
            text,
            suffix,
            naming_style,
            options=_build_options(args),
            config_file=args.config,
        )
        return _handle_result(result, text, source, args)

    except (CLIError, GeneratorError, ConfigError, SourceLoaderError) as e:
        console.print(f"[red]✗[/red] {e}")
        logger.debug("Command failed", exc_info=True)
        return 1
    except FileNotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        return 1


def _list_styles() -> int:
    """Show the naming styles with an example conversion."""
    table = Table(
        title="📋 Naming Styles", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Style", style="bold green", no_wrap=True)
    table.add_column(f"{SAMPLE_FIELD} becomes", style="cyan")

    for style in NamingStyle:
        table.add_row(style.value, convert_case(SAMPLE_FIELD, style))

    output_console.print(table)
    return 0


def _get_input(args: argparse.Namespace) -> tuple[str, str | None]:
    """Load the source text; returns (text, path of the input file or None)."""
    if args.file:
        _, text = load_source(file_path=args.file)
        return text, args.file
    if args.url:
        _, text = load_source(url=args.url)
        return text, None
    if args.stdin:
        _, text = load_source_from_stream()
        return text, None

    raise CLIError("Input source required (file, --url, or --stdin)")


def _resolve_settings(args: argparse.Namespace) -> tuple[str, str]:
    """Suffix and naming style from flags, then config file, then prompts."""
    file_values: dict[str, Any] = read_config_file(args.config) if args.config else {}

    suffix = args.suffix if args.suffix is not None else file_values.get("suffix")
    naming_style = args.naming_style or file_values.get("naming_style")

    if naming_style is not None:
        try:
            naming_style = NamingStyle.from_value(naming_style).value
        except ValueError as e:
            raise CLIError(str(e)) from e

    if suffix is not None and naming_style is not None:
        return suffix, naming_style

    if args.no_input or args.stdin:
        return (
            DEFAULT_SUFFIX if suffix is None else suffix,
            naming_style or NamingStyle.ORIGINAL.value,
        )

    suffix, style = GenerationPrompter(console).collect(suffix, naming_style)
    return suffix, style.value


def _build_options(args: argparse.Namespace) -> dict[str, Any]:
    """Generation options given explicitly on the command line."""
    options: dict[str, Any] = {}
    if args.multi:
        options["discovery_mode"] = "multi"
    if args.directives:
        options["directive_aware"] = True
    if args.no_copy_with:
        options["copy_with"] = False
    if args.no_equality:
        options["equality"] = False
    return options


def _handle_result(
    result: GenerationResult, text: str, source: str | None, args: argparse.Namespace
) -> int:
    """Report diagnostics and write the rewritten source."""
    for diagnostic in result.errors:
        console.print(f"[red]✗[/red] {diagnostic}")
    for diagnostic in result.warnings:
        console.print(f"[yellow]⚠️[/yellow]  {diagnostic}")

    if not result.success:
        return 1

    new_text = apply_edits(text, result.all_edits)

    if args.in_place:
        if not source:
            raise CLIError("--in-place requires a file input")
        write_source(source, new_text)
        console.print(f"[green]✓[/green] Rewrote [cyan]{source}[/cyan]")
    elif args.output:
        path = write_source(Path(args.output), new_text)
        console.print(f"[green]✓[/green] Generated code saved to [cyan]{path}[/cyan]")
    elif output_console.is_terminal:
        output_console.print(Syntax(new_text, "dart", theme="monokai"))
    else:
        sys.stdout.write(new_text)
        if not new_text.endswith("\n"):
            sys.stdout.write("\n")

    if args.verbose and result.metadata:
        _show_metadata(result)

    return 0 if not result.errors else 2


def _show_metadata(result: GenerationResult) -> None:
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        if isinstance(value, list):
            value = ", ".join(str(item) for item in value)
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(Panel(metadata_table, border_style="blue"))


if __name__ == "__main__":
    sys.exit(main())
