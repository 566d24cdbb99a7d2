"""Main CLI entry point for the simple-xml command-line tool.

Provides commands to reformat, validate, query and dump documents.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from simple_xml import __version__
from simple_xml.api.parser import parse_file
from simple_xml.shared import (
    ConfigError,
    MalformedInputError,
    SerializationConfig,
    SimpleXMLConfig,
    get_logger,
)

LINE_ENDINGS = {"crlf": "\r\n", "lf": "\n"}

logger = get_logger(__name__, component="cli")


def load_config(config_path: Optional[Path]) -> SimpleXMLConfig:
    """Load a JSON configuration file, or the defaults when none is given."""
    if config_path is None:
        return SimpleXMLConfig()
    return SimpleXMLConfig.from_json(config_path.read_text(encoding="utf-8"))


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="simple-xml",
        description="Reformat, validate and query simple XML documents"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Format command
    format_parser = subparsers.add_parser("format", help="Re-serialize a document")
    format_parser.add_argument("path", type=Path, help="Document to format")
    format_parser.add_argument(
        "--indent",
        type=int,
        help="Spaces per nesting level (default: from configuration)"
    )
    format_parser.add_argument(
        "--line-ending",
        choices=sorted(LINE_ENDINGS),
        help="Line terminator (default: from configuration)"
    )
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check that documents parse")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Documents to validate"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Get command
    get_parser = subparsers.add_parser("get", help="Print the data or an attribute of a tag")
    get_parser.add_argument("path", type=Path, help="Document to read")
    get_parser.add_argument(
        "tag_path",
        help="Slash-separated tag names from the root tag, e.g. settings/option"
    )
    get_parser.add_argument(
        "--attribute", "-a",
        help="Print this attribute instead of the tag data"
    )

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Print the tag tree as JSON")
    dump_parser.add_argument("path", type=Path, help="Document to dump")

    # Global options
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
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


def cmd_format(args: argparse.Namespace, config: SimpleXMLConfig) -> int:
    """Handle format command."""
    serialization = config.serialization
    indent_unit = serialization.indent_unit
    if args.indent is not None:
        if args.indent < 0:
            print("--indent must be >= 0", file=sys.stderr)
            return 2
        indent_unit = " " * args.indent
    line_ending = serialization.line_ending
    if args.line_ending is not None:
        line_ending = LINE_ENDINGS[args.line_ending]

    config = SimpleXMLConfig(
        parsing=config.parsing,
        serialization=SerializationConfig(indent_unit=indent_unit, line_ending=line_ending),
        document=config.document,
        logging_level=config.logging_level,
        correlation_id=config.correlation_id,
    )

    document = parse_file(args.path, config=config)
    output = document.serialize_document()

    if args.output:
        args.output.write_text(output, encoding="utf-8", newline="")
        print(f"Formatted: {args.path} -> {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0


def cmd_validate(args: argparse.Namespace, config: SimpleXMLConfig) -> int:
    """Handle validate command."""
    results = []

    for path in args.paths:
        if not path.is_file():
            results.append({"file": str(path), "valid": False, "error": "File not found"})
            continue

        try:
            parse_file(path, config=config)
            results.append({"file": str(path), "valid": True})
        except (MalformedInputError, UnicodeDecodeError) as e:
            logger.warning("Document failed validation", extra={"file": str(path), "error": str(e)})
            results.append({"file": str(path), "valid": False, "error": str(e)})

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for result in results:
            status = "OK  " if result["valid"] else "FAIL"
            print(f"{status} {result['file']}")
            if not result["valid"]:
                print(f"     Error: {result['error']}")

    return 0 if all(r["valid"] for r in results) else 1


def cmd_get(args: argparse.Namespace, config: SimpleXMLConfig) -> int:
    """Handle get command."""
    names = [name for name in args.tag_path.split("/") if name]
    if not names:
        print("Tag path must name at least one tag", file=sys.stderr)
        return 2

    document = parse_file(args.path, config=config)
    for position, name in enumerate(names):
        if not document.find_child(name):
            print(f"Tag not found: {'/'.join(names[:position + 1])}", file=sys.stderr)
            return 1
        if position < len(names) - 1:
            document.step_in()

    if args.attribute:
        print(document.get_child_attribute(args.attribute))
    else:
        print(document.get_child_data())
    return 0


def cmd_dump(args: argparse.Namespace, config: SimpleXMLConfig) -> int:
    """Handle dump command."""
    document = parse_file(args.path, config=config)
    tags = [tag.to_dict() for tag in document.root.children]
    print(json.dumps(tags[0] if len(tags) == 1 else tags, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Set up logging verbosity
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, ConfigError) as e:
        print(f"Could not load configuration: {e}", file=sys.stderr)
        return 2

    if not args.verbose and not args.quiet:
        logging.basicConfig(level=config.logging_level)

    handlers = {
        "format": cmd_format,
        "validate": cmd_validate,
        "get": cmd_get,
        "dump": cmd_dump,
    }

    try:
        return handlers[args.command](args, config)
    except MalformedInputError as e:
        logger.error(
            "Document could not be parsed",
            extra={"command": args.command, "offset": e.offset},
        )
        print(f"Malformed document: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error("Document could not be read", extra={"command": args.command}, exc_info=True)
        print(f"Could not read document: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
