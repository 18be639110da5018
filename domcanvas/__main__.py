"""CLI entry point for domcanvas.

Developer tooling around the import core: build a document file and print
the resulting widget tree, print the document schema, or list the
configuration variables.
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from domcanvas.builder import BuildDefaults, import_document, parse_text_support
from domcanvas.config import (
    EnvVar,
    get_environment,
    get_environment_info,
    list_environment_variables,
)
from domcanvas.core import get_logger, setup_logging
from domcanvas.output import format_build_result, result_to_dict
from domcanvas.schema import MalformedDocumentError, export_json_schema

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Build Command
# =============================================================================


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the build command."""
    try:
        raw = args.file.read_bytes()
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 1

    text_support = parse_text_support(
        args.text_support or get_environment(EnvVar.TEXT_SUPPORT)
    )

    try:
        result = import_document(
            raw,
            text_support=text_support,
            defaults=BuildDefaults.from_environment(),
        )
    except MalformedDocumentError as e:
        logger.error(f"Malformed document {args.file}: {e}")
        return 1

    if args.format == "json":
        output = json.dumps(result_to_dict(result), indent=2)
    else:
        output = format_build_result(result)

    if args.output:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as e:
            logger.error(f"Cannot write {args.output}: {e}")
            return 1
        logger.info(f"Output saved to {args.output}")
    else:
        print(output)

    if result.has_diagnostics:
        logger.info(f"{len(result.diagnostics)} diagnostic(s) reported")
    return 0


def handle_build_command(argv: list[str]) -> int:
    """Parse arguments for the build command."""
    parser = argparse.ArgumentParser(
        prog="python -m domcanvas build",
        description="Build a UI JSON document into a widget record tree",
    )
    parser.add_argument("file", type=Path, help="UI JSON document to build")
    parser.add_argument(
        "--format",
        "-f",
        choices=["tree", "json"],
        default="tree",
        help="Output format (default: tree)",
    )
    parser.add_argument(
        "--text-support",
        "-t",
        choices=["rich", "legacy", "none"],
        default=None,
        help="Text widget the target host provides (default: from environment)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write output to a file instead of stdout",
    )
    args = parser.parse_args(argv)
    return cmd_build(args)


# =============================================================================
# Schema and Env Commands
# =============================================================================


def cmd_schema(_args: list[str]) -> int:
    """Print the document JSON Schema."""
    print(json.dumps(export_json_schema(), indent=2))
    return 0


def cmd_env(args: list[str]) -> int:
    """List configuration variables and their current values."""
    category = args[0] if args else None
    variables = list_environment_variables(category)
    if not variables:
        logger.error(f"Unknown category: {category}")
        return 1

    for var in variables:
        info = get_environment_info(var)
        value = get_environment(var)
        print(f"{info.name} = {value!r}")
        print(f"    [{info.category}] {info.description}")
    return 0


def show_help() -> None:
    """Display CLI help."""
    print(
        """domcanvas - UI JSON to widget tree builder

Usage: python -m domcanvas <command> [options]

Commands:
  build <file>     Build a document and print its widget tree
                   --format tree|json, --text-support rich|legacy|none,
                   --output PATH
  schema           Print the document JSON Schema
  env [category]   List configuration variables (general, canvas, layout)
"""
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        show_help()
        return 1

    command = argv[0]
    rest_args = argv[1:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "build": lambda: handle_build_command(rest_args),
        "schema": lambda: cmd_schema(rest_args),
        "env": lambda: cmd_env(rest_args),
    }

    if command in commands:
        setup_logging(level=get_environment(EnvVar.LOG_LEVEL))
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
