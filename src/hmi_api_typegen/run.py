"""Top-level module for declaration generation."""

from __future__ import annotations

import argparse
import glob
import logging
import os.path
import subprocess
import sys

from hmi_api_typegen import printer
from hmi_api_typegen.schema import parse_schema
from hmi_api_typegen.writer import generate

logger = logging.getLogger(__name__)

GENERATOR_NAME = "hmi-api-typegen"
SCHEMA_SUFFIX = ".xml"
DECLARATION_SUFFIX = ".d.ts"


class TypeCheckError(Exception):
    """Raised when tsc validation finds type errors in generated declarations."""

    pass


def read_input(schema_path: str | None = None) -> bytes:
    """Read a complete interface description.

    The raw bytes are returned so that the XML parser can honor the encoding the document declares.

    Args:
        schema_path (str | None): The file to read. Reads all of stdin if omitted.

    Returns:
        bytes: The document content.
    """
    if schema_path is None:
        return sys.stdin.buffer.read()

    with open(schema_path, "rb") as f:
        return f.read()


def generate_declarations(
    schema_path: str | None = None,
    output_path: str | None = None,
    generator_name: str = GENERATOR_NAME,
) -> str:
    """Entry-point for generating the declarations of one interface description.

    Args:
        schema_path (str | None): The schema to read. Reads stdin if omitted.
        output_path (str | None): The file to write. Writes to stdout if omitted.
        generator_name (str): The name used in the generated-file marker.

    Returns:
        str: The generated source.
    """
    schema = parse_schema(read_input(schema_path))
    output = printer.dumps(generate(schema), generator_name)

    if output_path is None:
        sys.stdout.write(output)
    else:
        with open(output_path, "w", encoding="utf8") as output_file:
            output_file.write(output)
        logger.info("Wrote declarations to '%s'.", output_path)

    return output


def validate_with_tsc(output_paths: list[str]) -> None:
    """Validate generated declaration files using tsc.

    Args:
        output_paths: The generated declaration files.

    Raises:
        TypeCheckError: If tsc is missing or finds any type errors.
    """
    if not output_paths:
        logger.warning("No declaration files found to validate")
        return

    logger.info("Validating %d generated declaration file(s) with tsc...", len(output_paths))

    try:
        result = subprocess.run(
            ["tsc", "--noEmit", *output_paths],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        logger.error("tsc not found. Please install TypeScript: npm install -g typescript")
        raise TypeCheckError("tsc command not found. Please install TypeScript.") from e
    except subprocess.SubprocessError as e:
        raise TypeCheckError(f"Error running tsc: {e}") from e

    if result.returncode != 0:
        error_count = result.stdout.count("error TS")
        raise TypeCheckError(f"tsc validation failed with {error_count} error(s):\n\n{result.stdout}")

    logger.info("tsc validation passed, no type errors found")


def output_path_for(schema_path: str, output_dir: str = "") -> str:
    """The declaration file that belongs to a schema.

    E.g. `interfaces/HMI_API.xml` becomes `interfaces/HMI_API.d.ts`, or `<output_dir>/HMI_API.d.ts`
    if an output directory is given.

    Args:
        schema_path (str): The schema file.
        output_dir (str): The directory for all outputs. Defaults to the schema directory.

    Returns:
        str: The output path.
    """
    stem = os.path.splitext(os.path.basename(schema_path))[0]
    directory = output_dir or os.path.dirname(schema_path)
    return os.path.join(directory, stem + DECLARATION_SUFFIX)


def collect_schema_paths(paths: list[str], excludes: list[str], recursive: bool, root_directory: str) -> list[str]:
    """Expand paths and glob expressions to schema files.

    Directories contribute their *.xml files (their whole tree, if recursive).

    Args:
        paths: Paths or glob expressions, relative to the root directory.
        excludes: Paths or glob expressions to drop from the matches.
        recursive: Whether directories and `**` patterns are searched recursively.
        root_directory: The directory, from which the generator is executed.

    Returns:
        list[str]: The schema files, sorted.
    """
    excluded_paths: set[str] = set()
    for exclude in excludes:
        excluded_paths.update(glob.glob(os.path.join(root_directory, exclude), recursive=recursive))

    search_paths: set[str] = set()
    for path in paths:
        search_path = os.path.join(root_directory, path)

        if recursive and os.path.isdir(search_path):
            for root, _, files in os.walk(search_path):
                search_paths.update(os.path.join(root, f) for f in files if f.endswith(SCHEMA_SUFFIX))
        elif os.path.isdir(search_path):
            for file in os.listdir(search_path):
                file_path = os.path.join(search_path, file)
                if os.path.isfile(file_path) and file.endswith(SCHEMA_SUFFIX):
                    search_paths.add(file_path)
        else:
            search_paths.update(glob.glob(search_path, recursive=recursive))

    return sorted(search_paths - excluded_paths)


def run(args: argparse.Namespace, root_directory: str):
    """Run the generator on a set of paths that point to interface descriptions.

    Uses `generate_declarations` on each input file. Without any paths, the interface
    description is read from stdin and the declarations are written to stdout.

    Args:
        args (argparse.Namespace): The arguments that were passed when calling the generator.
        root_directory (str): The directory, from which the generator is executed.
    """
    paths: list[str] = args.paths
    excludes: list[str] = args.excludes
    output_dir: str = getattr(args, "output_dir", "")
    check: bool = getattr(args, "check", False)

    if not paths:
        if output_dir:
            logger.warning("Ignoring --output-dir: declarations read from stdin are written to stdout.")
        if check:
            logger.warning("Ignoring --check: declarations written to stdout are not validated.")
        generate_declarations()
        return

    schema_paths = collect_schema_paths(paths, excludes, args.recursive, root_directory)
    if not schema_paths:
        logger.warning("No interface descriptions matched %s", paths)
        return

    if output_dir:
        output_dir = os.path.join(root_directory, output_dir)
        os.makedirs(output_dir, exist_ok=True)

    output_paths: list[str] = []
    for schema_path in schema_paths:
        output_path = output_path_for(schema_path, output_dir)
        generate_declarations(schema_path, output_path)
        output_paths.append(output_path)

    if check:
        validate_with_tsc(output_paths)
