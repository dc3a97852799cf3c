"""
Tokenizing of raw TypeScript type expressions.

Only two shapes are understood:
- `base & modifier1 & modifier2<param> & ...` split on a literal `&`
- `name<param1, param2>` with a single, first-level angle-bracket group

Anything more elaborate (nested intersections, generic arguments that contain
commas or brackets) is passed through as opaque text.
"""

from typing import NamedTuple

INTERSECTION_SEPARATOR = "&"
GENERIC_MARKER = "<>"

# Empty object literals rendered across lines by declaration printers,
# e.g. the `{}` half of a `string & {}` brand.
_NEWLINE_ARTIFACTS = ("{\\n}", "{\n}")


class TypeExpression(NamedTuple):
    """Base type plus the modifiers chained onto it."""

    base_type: str
    modifiers: tuple[str, ...]


class GenericName(NamedTuple):
    """Registry lookup name and the parameters of its angle-bracket group."""

    name: str
    parameters: tuple[str, ...]


def strip_newline_artifacts(raw_type: str) -> str:
    """Remove empty-object newline artifacts along with the character before each."""
    for artifact in _NEWLINE_ARTIFACTS:
        search_from = 0
        while (index := raw_type.find(artifact, search_from)) != -1:
            if index == 0:
                # Nothing precedes it, so it is left in place
                search_from = len(artifact)
                continue
            raw_type = raw_type[: index - 1] + raw_type[index + len(artifact):]
            search_from = index - 1
    return raw_type


def parse_type_expression(raw_type: str) -> TypeExpression:
    """
    Split a raw type into its base type and modifier chain.

    Args:
        raw_type: Type text such as "string & trim & maxLength<10>"

    Returns:
        TypeExpression with the first piece as base type and the rest as modifiers
    """
    pieces = [piece.strip() for piece in strip_newline_artifacts(raw_type).split(INTERSECTION_SEPARATOR)]
    return TypeExpression(base_type=pieces[0], modifiers=tuple(pieces[1:]))


def parse_generic_name(raw_type: str) -> GenericName:
    """
    Split `Name<a, b>` into ("Name<>", ("a", "b")).

    The `<>` marker keeps generic and plain registry entries of the same base
    name apart. Without an angle-bracket group the raw type is returned as is
    with no parameters.
    """
    open_index = raw_type.find("<")
    if open_index <= 0:
        return GenericName(raw_type, ())

    # The parameter group must hold at least one character before its `>`
    close_index = raw_type.find(">", open_index + 2)
    if close_index == -1:
        return GenericName(raw_type, ())

    name = raw_type[:open_index] + GENERIC_MARKER
    inner = raw_type[open_index + 1:close_index]
    return GenericName(name, tuple(param.strip() for param in inner.split(",")))
