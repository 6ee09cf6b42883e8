"""
CLI integration for code generation functionality.

Provides the ``generate`` and ``targets`` subcommands.
"""

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ..logging_config import get_logger, setup_logging
from ..utils import JSONLoaderError, load_specification
from . import generate_from_specification, list_all_target_info
from .core.config import ConfigError, GeneratorConfig, get_config_manager, load_config
from .core.generator import GenerationResult
from .core.schema import Specification

logger = get_logger(__name__)

# Initialize rich console
console = Console()

# Subcommand choice -> generator targets
KIND_TARGETS = {
    "resources": ["resource"],
    "data-sources": ["data_source"],
    "all": ["resource", "data_source"],
}


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="tfcodegen",
        description="Generate Terraform Plugin Framework schema code from a provider code specification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tfcodegen generate resources --input spec.json --output internal/provider
  tfcodegen generate all --url https://example.com/spec.json --package provider
  tfcodegen targets
        """.strip(),
    )
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate", help="Generate schema code for resources and/or data sources"
    )
    generate.add_argument("kind", choices=sorted(KIND_TARGETS), help="What to generate")

    input_group = generate.add_mutually_exclusive_group(required=True)
    input_group.add_argument("--input", "-i", metavar="FILE", help="Specification file")
    input_group.add_argument("--url", help="URL to fetch the specification from")

    generate.add_argument(
        "--output", "-o", metavar="DIR", help="Output directory (default: print to stdout)"
    )
    generate.add_argument("--package", metavar="NAME", help="Go package name")
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument(
        "--no-models", action="store_true", help="Don't generate model structs"
    )
    generate.add_argument(
        "--no-object-types",
        action="store_true",
        help="Don't generate custom object types for nested objects",
    )
    generate.add_argument(
        "--verbose", "-v", action="store_true", help="Show progress and generation metadata"
    )
    generate.set_defaults(func=handle_generate_command)

    targets = subparsers.add_parser("targets", help="List registered generator targets")
    targets.set_defaults(func=handle_targets_command)

    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse arguments and run the selected subcommand.

    Args:
        argv: Command line arguments, defaults to sys.argv

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def handle_generate_command(args: argparse.Namespace) -> int:
    """Handle ``tfcodegen generate``."""
    setup_logging(logging.INFO if args.verbose else logging.WARNING)

    specification = _load_input(args)

    failed = False
    for target in KIND_TARGETS[args.kind]:
        config = _build_config(args, target)
        result = generate_from_specification(specification, target, config)

        if not result.success:
            console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
            failed = True
            continue

        _output(result, config, args)

    return 1 if failed else 0


def handle_targets_command(args: argparse.Namespace) -> int:
    """Handle ``tfcodegen targets``."""
    target_info = list_all_target_info()

    if not target_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    table = Table(title="📋 Generator Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(target_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


def _load_input(args: argparse.Namespace) -> Specification:
    """Load the specification named on the command line."""
    try:
        source, specification = load_specification(file_path=args.input, url=args.url)
    except JSONLoaderError as e:
        raise CLIError(f"Failed to load input: {e}") from e

    logger.info("Loaded specification from %s", source)
    return specification


def _build_config(args: argparse.Namespace, target: str) -> GeneratorConfig:
    """Build the generator configuration from the config file and CLI flags."""
    overrides: Dict[str, object] = {}
    if args.package:
        overrides["package_name"] = args.package
    if args.output:
        overrides["output_dir"] = args.output
    if args.no_models:
        overrides["generate_models"] = False
    if args.no_object_types:
        overrides["generate_object_types"] = False

    try:
        config = load_config(target, custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config, target):
        logger.warning(warning)

    return config


def _output(result: GenerationResult, config: GeneratorConfig, args: argparse.Namespace):
    """Write generated files or print them with syntax highlighting."""
    if config.output_dir:
        written = _write_files(result.files, Path(config.output_dir))
        for path in written:
            console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")
    else:
        for file_name in sorted(result.files):
            console.print(f"[green]── {file_name} ──[/green]")
            console.print(Syntax(result.files[file_name], "go", theme="monokai"))

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

        console.print(metadata_table)

    if result.warnings:
        console.print("[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")


def _write_files(files: Dict[str, str], output_dir: Path) -> List[Path]:
    """Write generated files into a directory."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for file_name in sorted(files):
            path = output_dir / file_name
            path.write_text(files[file_name], encoding="utf-8")
            written.append(path)
    except OSError as e:
        raise CLIError(f"Failed to write to {output_dir}: {e}") from e

    logger.info("Wrote %d file(s) to %s", len(written), output_dir)
    return written
