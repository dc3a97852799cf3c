"""
Recursive resolution of TypeScript type expressions into pydantic schemas.

Resolution order for a property type:
- inline objects (`{...}`) and arrays of them (`{...}[]`, `[{...}]`) are
  resolved structurally, followed by any `& modifier` chain
- everything else is a type expression: `base & modifier & ...`

Resolution order for a base type:
- `T[]` -> list of T, recursively
- anything containing `=>` -> accept any value
- built-in primitive names
- registry type factories, then declarations resolved earlier in the batch
- otherwise UnresolvableTypeError

Every function takes the registry explicitly; nothing is read from global state.
"""

import asyncio
import inspect
import logging
from typing import Any

from pydantic import BaseModel

from ..errors import UnresolvableTypeError
from ..models.declaration_models import Declaration, PropertyDeclaration
from .resolver_registry import ResolverRegistry
from .schema_builder import (
    BASIC_TYPE_SCHEMAS,
    FieldSchema,
    Schema,
    any_schema,
    array_of,
    object_of,
    optional,
    required,
)
from .type_expression import INTERSECTION_SEPARATOR, parse_generic_name, parse_type_expression
from .typescript_parser import get_shared_parser

logger = logging.getLogger(__name__)

ARRAY_SUFFIX = "[]"
ARROW = "=>"


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def resolve_primitive_type(registry: ResolverRegistry, raw_type: str) -> Schema:
    """
    Resolve a base type (no modifiers) to a schema.

    Raises:
        UnresolvableTypeError: if no rule, registry factory or earlier declaration matches
    """
    if raw_type.endswith(ARRAY_SUFFIX):
        item_schema = await resolve_primitive_type(registry, raw_type[: -len(ARRAY_SUFFIX)])
        return array_of(item_schema)

    # Function types are not validated structurally
    if ARROW in raw_type:
        return any_schema()

    if raw_type in BASIC_TYPE_SCHEMAS:
        return BASIC_TYPE_SCHEMAS[raw_type]

    custom_schema = await resolve_custom_type(registry, raw_type)
    if custom_schema is not None:
        return custom_schema

    raise UnresolvableTypeError(raw_type)


async def resolve_custom_type(registry: ResolverRegistry, raw_type: str) -> Schema | None:
    """
    Look a named type up in the registry.

    Returns None when the name is neither a registered type nor an earlier
    declaration, so the caller can report one diagnostic for both cases.
    """
    name, parameters = parse_generic_name(raw_type)

    factory = registry.get_type(name)
    if factory is not None:
        return await _maybe_await(factory(*parameters))

    return registry.get_interface(name)


async def apply_modifiers(registry: ResolverRegistry, modifiers: tuple[str, ...], schema: Schema) -> Schema:
    """Apply registered modifiers left to right; unknown modifier names are ignored."""
    # no built-in modifiers, all behaviour comes from the registry
    for raw_modifier in modifiers:
        name, parameters = parse_generic_name(raw_modifier)
        modifier = registry.get_modifier(name)
        if modifier is None:
            logger.debug(f'Ignoring unknown modifier "{raw_modifier}"')
            continue

        modified = await _maybe_await(modifier(schema, *parameters))
        if modified is not None:
            schema = modified

    return schema


async def resolve_type_expression(registry: ResolverRegistry, raw_type: str) -> Schema:
    expression = parse_type_expression(raw_type)
    schema = await resolve_primitive_type(registry, expression.base_type)
    return await apply_modifiers(registry, expression.modifiers, schema)


def split_object_type(raw_type: str) -> tuple[str, str] | None:
    """
    Split a leading inline object type from whatever follows it.

    Recognizes `{...}`, `{...}[]` (any number of suffixes) and `[{...}]`.

    Returns:
        (object type, remaining text) or None when the type does not start
        with an inline object
    """
    if raw_type.startswith("[{"):
        start = 1
    elif raw_type.startswith("{"):
        start = 0
    else:
        return None

    depth = 0
    end = -1
    for index in range(start, len(raw_type)):
        if raw_type[index] == "{":
            depth += 1
        elif raw_type[index] == "}":
            depth -= 1
            if depth == 0:
                end = index + 1
                break
    if end == -1:
        return None

    if start:
        rest = raw_type[end:].lstrip()
        if not rest.startswith("]"):
            return None
        end = len(raw_type) - len(rest) + 1
    else:
        while raw_type.startswith(ARRAY_SUFFIX, end):
            end += len(ARRAY_SUFFIX)

    return raw_type[:end], raw_type[end:]


async def resolve_property_type(registry: ResolverRegistry, raw_type: str, model_name: str) -> Schema:
    """
    Resolve the full type text of a property.

    Args:
        registry: Active resolver registry
        raw_type: Raw type text from the declaration
        model_name: Name given to models generated for inline object literals
    """
    raw_type = raw_type.strip()

    split = split_object_type(raw_type)
    if split is None:
        return await resolve_type_expression(registry, raw_type)

    object_type, rest = split
    rest = rest.strip()
    if rest and not rest.startswith(INTERSECTION_SEPARATOR):
        # e.g. unions, reported as an unresolvable base type
        return await resolve_type_expression(registry, raw_type)

    schema = await resolve_object_type(registry, object_type, model_name)
    if rest:
        # Leading separator leaves an empty base piece, the rest are modifiers
        schema = await apply_modifiers(registry, parse_type_expression(rest).modifiers, schema)
    return schema


async def resolve_object_type(registry: ResolverRegistry, object_type: str, model_name: str) -> Schema:
    """Resolve `{...}`, `{...}[]` or `[{...}]` structurally."""
    if object_type.startswith("["):
        inner = object_type[1 : object_type.rindex("]")].strip()
        return array_of(await resolve_object_type(registry, inner, model_name))

    if object_type.endswith(ARRAY_SUFFIX):
        inner = object_type[: -len(ARRAY_SUFFIX)].rstrip()
        return array_of(await resolve_object_type(registry, inner, model_name))

    return await resolve_object_literal(registry, object_type, model_name)


async def resolve_object_literal(registry: ResolverRegistry, raw_type: str, model_name: str) -> type[BaseModel]:
    declaration = get_shared_parser().parse_object_literal(raw_type, name=model_name)
    return await resolve_declaration(registry, declaration)


def _inline_model_name(owner: str, property_name: str) -> str:
    # Must stay a valid TypeScript identifier, it is parsed as an interface name
    suffix = "".join(ch for ch in property_name if ch.isalnum() or ch == "_")
    return owner + suffix[:1].upper() + suffix[1:]


async def resolve_property(registry: ResolverRegistry, prop: PropertyDeclaration, owner: str) -> FieldSchema:
    """Resolve one property and mark it required unless it was declared optional."""
    schema = await resolve_property_type(registry, prop.type, _inline_model_name(owner, prop.name))

    if prop.is_optional:
        return optional(schema)
    return required(schema)


async def resolve_declaration_fields(registry: ResolverRegistry, declaration: Declaration) -> dict[str, FieldSchema]:
    """
    Resolve every property of a declaration concurrently.

    All properties share the same registry snapshot. The first failure is
    raised and no partial result is returned.
    """
    if not declaration.properties:
        return {}

    results = await asyncio.gather(
        *(resolve_property(registry, prop, declaration.name) for prop in declaration.properties)
    )
    return {prop.name: field_schema for prop, field_schema in zip(declaration.properties, results)}


async def resolve_declaration(registry: ResolverRegistry, declaration: Declaration) -> type[BaseModel]:
    fields = await resolve_declaration_fields(registry, declaration)
    return object_of(declaration.name, fields)
