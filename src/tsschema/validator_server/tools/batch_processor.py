"""
Batch conversion of parsed declarations into validators.

Declarations are processed strictly in order, across files in list order and
within a file in source order. After each declaration the registry is
extended with its schema, so later declarations can reference earlier ones.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..config import get_config
from ..errors import MalformedDeclarationError
from ..models.declaration_models import Declaration, ParsedFile
from .resolver_registry import EMPTY_REGISTRY, ResolverRegistry
from .schema_builder import Schema
from .type_resolver import resolve_declaration

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Validators produced by a batch and the registry as extended by it."""

    validators: dict[str, Schema] = field(default_factory=dict)
    registry: ResolverRegistry = EMPTY_REGISTRY


def coerce_declaration(item: Any) -> Declaration:
    """
    Accept parser output or its JSON rehydration.

    Raises:
        MalformedDeclarationError: if the item has neither shape
    """
    if isinstance(item, Declaration):
        return item

    # Loose objects, e.g. declarations loaded back from JSON
    if isinstance(item, Mapping) and isinstance(item.get("name"), str):
        try:
            return Declaration.from_dict(item)
        except (KeyError, TypeError) as e:
            raise MalformedDeclarationError(
                f'Validator for declaration "{item["name"]}" not implemented: {e}'
            ) from e

    raise MalformedDeclarationError(f'Validator for declaration "{item!r}" not implemented')


def _file_declarations(parsed_file: Any) -> tuple[str, Sequence[Any]]:
    if isinstance(parsed_file, ParsedFile):
        return parsed_file.file_path, parsed_file.declarations

    if isinstance(parsed_file, Mapping) and isinstance(parsed_file.get("declarations"), list | tuple):
        return parsed_file.get("file_path", parsed_file.get("filePath", "<unknown>")), parsed_file["declarations"]

    raise MalformedDeclarationError(f'Validator for file "{parsed_file!r}" not implemented')


async def declarations_to_validators(
    parsed_file: ParsedFile | Mapping[str, Any], registry: ResolverRegistry = EMPTY_REGISTRY
) -> BatchResult:
    """
    Resolve every declaration of one parsed file.

    Args:
        parsed_file: ParsedFile or a mapping with a "declarations" list
        registry: Registry visible to the first declaration

    Returns:
        BatchResult with this file's validators and the extended registry
    """
    suffix = get_config().validator_name_suffix
    file_path, declarations = _file_declarations(parsed_file)
    validators: dict[str, Schema] = {}

    for item in declarations:
        declaration = coerce_declaration(item)
        schema = await resolve_declaration(registry, declaration)

        key = declaration.name + suffix
        if key in validators:
            logger.warning(f'Multiple definition of "{key}" in {file_path}')
        else:
            validators[key] = schema

        registry = registry.with_interface(declaration.name, schema)

    logger.debug(f"Resolved {len(validators)} validators from {file_path}")
    return BatchResult(validators=validators, registry=registry)


def merge_validators(per_file_validators: Sequence[Mapping[str, Schema]]) -> dict[str, Schema]:
    """Combine per-file results; the first definition of a name wins."""
    result: dict[str, Schema] = {}
    for file_validators in per_file_validators:
        for key, schema in file_validators.items():
            if key in result:
                logger.warning(f'Multiple definition of "{key}" in selected files')
                continue
            result[key] = schema
    return result


async def convert_parsed_files(
    registry: ResolverRegistry, parsed_files: Sequence[ParsedFile | Mapping[str, Any]]
) -> BatchResult:
    """
    Resolve all files of a batch in order and merge their validators.

    Any resolution error aborts the whole batch.
    """
    per_file_validators = []
    for parsed_file in parsed_files:
        file_result = await declarations_to_validators(parsed_file, registry)
        per_file_validators.append(file_result.validators)
        registry = file_result.registry

    validators = merge_validators(per_file_validators)
    logger.info(f"Generated {len(validators)} validators from {len(per_file_validators)} files")
    return BatchResult(validators=validators, registry=registry)
