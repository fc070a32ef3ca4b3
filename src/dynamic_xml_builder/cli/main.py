"""Main CLI entry point for the dynamic-xml-builder command-line tool.

Provides two commands:

* ``render MODULE:CALLABLE`` runs a builder function and writes its markup;
* ``format PATH`` reads an existing document and writes it back, optionally
  indented.
"""

import argparse
import importlib
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

from dynamic_xml_builder import __version__
from dynamic_xml_builder.api import build, parse_file
from dynamic_xml_builder.builder import Xml
from dynamic_xml_builder.shared.config import BuilderConfig, ConfigError
from dynamic_xml_builder.shared.errors import BuilderError
from dynamic_xml_builder.shared.logging import configure_logging, get_logger

logger = get_logger(__name__, None, "cli")


def load_callable(target: str) -> Callable[..., Any]:
    """Import ``package.module:attribute`` and return the attribute.

    Raises:
        ValueError: If target is malformed or does not name a callable
    """
    module_name, sep, attribute_path = target.partition(":")
    if not sep or not module_name or not attribute_path:
        raise ValueError(f"Expected MODULE:CALLABLE, got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module {module_name!r}: {e}") from e

    for attribute in attribute_path.split("."):
        try:
            obj = getattr(obj, attribute)
        except AttributeError as e:
            raise ValueError(f"{target!r} has no attribute {attribute!r}") from e

    if not callable(obj):
        raise ValueError(f"{target!r} is not callable")
    return obj


def load_config(args: argparse.Namespace) -> BuilderConfig:
    """Build the configuration from --config and --unix-newlines."""
    config = BuilderConfig()
    if args.config:
        config = BuilderConfig.from_json(args.config.read_text())
    if args.unix_newlines:
        config = config.override(serialization__newline="\n")
    return config


def setup_logging(args: argparse.Namespace, config: BuilderConfig) -> None:
    """Configure logging; --verbose and --quiet override the configured level."""
    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging_level)


def write_output(builder: Xml, indent: bool, output: Optional[Path]) -> None:
    """Write rendered markup to output, or print it when output is None.

    Files receive bytes in the builder's output encoding.
    """
    if output is None:
        print(builder.to_string(indent))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(builder.to_bytes(indent))
    print(f"Written {output} ({builder.encoding})", file=sys.stderr)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="dynamic-xml-builder",
        description="Build XML documents from Python builder functions"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Shared output options
    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument(
        "--indent", "-i",
        action="store_true",
        help="Indent nested elements"
    )
    output_options.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    output_options.add_argument(
        "--config", "-c",
        type=Path,
        help="Builder configuration file (JSON)"
    )
    output_options.add_argument(
        "--unix-newlines",
        action="store_true",
        help="Use LF instead of CRLF when indenting"
    )

    render_parser = subparsers.add_parser(
        "render", parents=[output_options], help="Run a builder function"
    )
    render_parser.add_argument(
        "target",
        help="Builder function as MODULE:CALLABLE, called with a fresh builder"
    )

    format_parser = subparsers.add_parser(
        "format", parents=[output_options], help="Re-render an XML file"
    )
    format_parser.add_argument(
        "path",
        type=Path,
        help="XML file to read"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def cmd_render(args: argparse.Namespace) -> int:
    """Handle render command."""
    config = load_config(args)
    setup_logging(args, config)
    callback = load_callable(args.target)
    builder = build(callback, config)
    write_output(builder, args.indent, args.output)
    return 0


def cmd_format(args: argparse.Namespace) -> int:
    """Handle format command."""
    if not args.path.exists():
        print(f"File not found: {args.path}", file=sys.stderr)
        return 1
    config = load_config(args)
    setup_logging(args, config)
    builder = parse_file(args.path, config)
    write_output(builder, args.indent, args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "render":
            return cmd_render(args)
        if args.command == "format":
            return cmd_format(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except (BuilderError, ConfigError, ValueError, OSError) as e:
        logger.debug("Command failed", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
