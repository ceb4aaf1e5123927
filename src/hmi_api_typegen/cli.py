"""Command-line interface for generating TypeScript declarations for interface descriptions.

Notes:
    - Without `--paths`, the generator reads an interface description from stdin and writes the
      declarations to stdout.
"""

from __future__ import annotations

import argparse
import logging
import os.path
from collections.abc import Sequence

from hmi_api_typegen.run import TypeCheckError, run
from hmi_api_typegen.schema import SchemaError

logger = logging.getLogger(__name__)


def _add_recursive_argument(parser: argparse.ArgumentParser):
    """Add a recursive argument to a parser.

    Args:
        parser (argparse.ArgumentParser): The parser to add the argument to.
    """
    parser.add_argument(
        "-r",
        "--recursive",
        dest="recursive",
        default=False,
        action="store_true",
        help="recursively search for *.xml files with a given glob expression.",
    )


def setup_parser() -> argparse.ArgumentParser:
    """Setup for the parser.

    Returns:
        argparse.ArgumentParser: The parser after setup.
    """
    parser = argparse.ArgumentParser(description="Generate TypeScript declarations for interface descriptions.")

    parser.add_argument(
        "-p",
        "--paths",
        type=str,
        nargs="+",
        default=[],
        help="path or glob expressions that match *.xml interface descriptions; reads stdin if omitted.",
    )

    parser.add_argument(
        "-e",
        "--excludes",
        type=str,
        nargs="+",
        default=[],
        help="path or glob expressions to exclude from path matches.",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default="",
        help="directory to write all generated declarations; defaults to alongside each schema if omitted.",
    )

    parser.add_argument(
        "--check",
        dest="check",
        default=False,
        action="store_true",
        help="validate the generated declarations with tsc.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        default=False,
        action="store_true",
        help="enable debug logging.",
    )

    _add_recursive_argument(parser)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the declaration generator.

    Args:
        argv (Sequence[str] | None, optional): Run arguments. Defaults to None.

    Returns:
        int: Error code.
    """
    parser = setup_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    root_directory = os.getcwd()
    logger.debug("Working from root directory: %s", root_directory)

    try:
        run(args, root_directory)
    except (SchemaError, TypeCheckError, OSError) as e:
        logger.error("%s", e)
        return 1

    return 0
