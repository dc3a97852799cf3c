"""
Entry points turning TypeScript files into validators.

- generate_validators: glob -> parse -> resolve
- export_declarations / import_declarations: the same pipeline split at the
  parsed-declaration JSON boundary
- export_json_schemas: JSON Schema documents for resolved validators
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..errors import ValidatorGenerationError
from ..models.declaration_models import ExportDeclarationsResponse, GenerateSchemasResponse, ParsedFile
from .batch_processor import convert_parsed_files
from .declaration_io import dump_parsed_files, load_parsed_files
from .file_discovery import get_files
from .resolver_registry import EMPTY_REGISTRY, ResolverRegistry
from .schema_builder import Schema, to_json_schema
from .typescript_parser import get_shared_parser

logger = logging.getLogger(__name__)


def load_declarations(files: list[str]) -> list[ParsedFile]:
    """Parse files in order; the first unreadable or invalid file aborts."""
    parser = get_shared_parser()
    logger.info(f"Parsing {len(files)} declaration files")
    return [parser.parse_declarations(file_path) for file_path in files]


async def generate_validators(
    glob_path: str | list[str], registry: ResolverRegistry = EMPTY_REGISTRY
) -> dict[str, Schema]:
    """
    Parse matching files and create validators for all interfaces and classes found.

    Args:
        glob_path: Glob pattern or list of patterns selecting TypeScript files
        registry: Custom types, modifiers and pre-resolved interfaces

    Returns:
        Declaration name -> schema
    """
    files = get_files(glob_path)
    parsed_files = load_declarations(files)
    result = await convert_parsed_files(registry, parsed_files)
    return result.validators


def export_declarations(glob_path: str | list[str]) -> str:
    """Parse matching files and serialize their declarations to JSON."""
    files = get_files(glob_path)
    return dump_parsed_files(load_declarations(files))


async def import_declarations(
    declarations_json: str, registry: ResolverRegistry = EMPTY_REGISTRY
) -> dict[str, Schema]:
    """Create validators from JSON produced by export_declarations."""
    parsed_files = load_parsed_files(declarations_json)
    result = await convert_parsed_files(registry, parsed_files)
    return result.validators


def export_json_schemas(validators: Mapping[str, Schema]) -> dict[str, dict[str, Any]]:
    """
    Describe validators as JSON Schema documents.

    The export is one-way: custom factories and modifiers that attach Python
    callables have no JSON Schema counterpart and are not recoverable.
    """
    return {name: to_json_schema(schema) for name, schema in validators.items()}


def export_ts_declarations_impl(glob_patterns: str | list[str]) -> ExportDeclarationsResponse:
    """Parse TypeScript files and return their declarations as JSON.

    Args:
        glob_patterns: Glob pattern(s) selecting TypeScript files

    Returns:
        ExportDeclarationsResponse with the JSON text and parsed file list
    """
    try:
        files = get_files(glob_patterns)
        parsed_files = load_declarations(files)
    except ValidatorGenerationError as e:
        raise ValueError(f"Failed to export declarations: {str(e)}") from e

    return ExportDeclarationsResponse(
        declarations_json=dump_parsed_files(parsed_files),
        files=files,
        total_declarations=sum(len(parsed_file.declarations) for parsed_file in parsed_files),
    )


async def generate_json_schemas_impl(
    glob_patterns: str | list[str] | None = None, declarations_json: str | None = None
) -> GenerateSchemasResponse:
    """Generate JSON Schemas from TypeScript files or previously exported declarations.

    Args:
        glob_patterns: Glob pattern(s) selecting TypeScript files
        declarations_json: Output of export_ts_declarations, used instead of globbing

    Returns:
        GenerateSchemasResponse with one JSON Schema per declaration
    """
    if glob_patterns is None and declarations_json is None:
        raise ValueError("Either glob_patterns or declarations_json is required")

    try:
        if declarations_json is not None:
            validators = await import_declarations(declarations_json)
        else:
            validators = await generate_validators(glob_patterns)
    except ValidatorGenerationError as e:
        raise ValueError(f"Failed to generate validators: {str(e)}") from e

    schemas = export_json_schemas(validators)
    return GenerateSchemasResponse(schemas=schemas, total=len(schemas))
