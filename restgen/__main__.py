"""Entry point: python -m restgen [--output=PATH] <schemaFile> [subNamespace]

Reads a Swagger-style schema and writes the generated client to PATH, or to
stdout when --output is not given.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .codegen import render, write
from .context_builder import build_context
from .errors import GeneratorError
from .loader import load_schema

logger = logging.getLogger("restgen")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restgen",
        description="Generate a typed REST client from a Swagger-style API schema.",
    )
    parser.add_argument("schema_file", nargs="?", help="Path to the JSON schema")
    parser.add_argument("sub_namespace", nargs="?", help="Sub-namespace for the generated code")
    parser.add_argument("--output", help="File to write; stdout when omitted")
    parser.add_argument(
        "--operation-prefix",
        help="Prefix to strip from operation ids (default: a leading 'Service_')",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the generator and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.schema_file is None:
        print("No input file found.\n")
        parser.print_usage()
        return 0

    if args.sub_namespace is not None and not args.sub_namespace:
        parser.error("Empty sub-namespace provided.")

    output = Path(args.output) if args.output else None
    try:
        schema = load_schema(args.schema_file, sub_namespace=args.sub_namespace)
        context = build_context(schema, operation_prefix=args.operation_prefix)
        write(render(context), output)
    except GeneratorError as exc:
        logger.error("%s", exc)
        return 1

    if output is not None:
        logger.info(
            "Generated %s (%d declarations, %d functions)",
            output, len(context.declarations), len(context.functions),
        )

    if context.errors:
        logger.error("%d schema error(s):", len(context.errors))
        for error in context.errors:
            logger.error("  %s", error)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
