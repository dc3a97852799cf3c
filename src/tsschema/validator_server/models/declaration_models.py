"""
Declaration and response models for the validator server.

These dataclasses describe the parsed shape of TypeScript declarations and the
typed responses returned by the FastMCP tools.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class AnalysisError:
    """Standard error information for parse operations."""

    code: str  # Error code like "PARSE_ERROR", "NOT_FOUND", etc.
    message: str  # Human-readable error message
    file: str | None = None  # File path where error occurred
    line: int | None = None  # Line number where error occurred


@dataclass
class ParseResult:
    """Result of parsing a TypeScript file."""

    success: bool
    tree: Any | None = None  # tree_sitter.Tree object
    errors: list[AnalysisError] = field(default_factory=list)
    parse_time_ms: float = 0.0


@dataclass(frozen=True)
class PropertyDeclaration:
    """A single property of an interface or class."""

    name: str
    type: str  # Raw type expression, e.g. "string[]" or "Foo<1, 2> & trim"
    is_optional: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PropertyDeclaration":
        """
        Build a property from its JSON form.

        Raises:
            TypeError: if the item is not a mapping or its name or type is not text
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"property must be an object, got {type(data).__name__}")
        if not isinstance(data.get("name"), str):
            raise TypeError(f"property name must be a string, got {data.get('name')!r}")

        raw_type = data.get("type") or "any"
        if not isinstance(raw_type, str):
            raise TypeError(f'type of property "{data["name"]}" must be a string, got {raw_type!r}')

        # typescript-parser style JSON uses camelCase keys
        is_optional = data.get("is_optional", data.get("isOptional", False))
        return cls(name=data["name"], type=raw_type, is_optional=bool(is_optional))


@dataclass(frozen=True)
class Declaration:
    """A named interface or class with its ordered properties."""

    name: str
    kind: str = "interface"  # "interface" or "class"
    properties: tuple[PropertyDeclaration, ...] = ()
    line: int | None = None  # 1-based line of the declaration name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Declaration":
        properties = data.get("properties") or ()
        if not isinstance(properties, list | tuple):
            raise TypeError(f"properties must be a list, got {type(properties).__name__}")
        return cls(
            name=data["name"],
            kind=data.get("kind", "interface"),
            properties=tuple(
                item if isinstance(item, PropertyDeclaration) else PropertyDeclaration.from_dict(item)
                for item in properties
            ),
            line=data.get("line"),
        )


@dataclass(frozen=True)
class ParsedFile:
    """All declarations found in one source file, in source order."""

    file_path: str
    declarations: tuple[Declaration, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ExportDeclarationsResponse:
    """Response for export_ts_declarations tool."""

    declarations_json: str  # JSON text accepted by generate_json_schemas
    files: list[str]  # Files that were parsed, in processing order
    total_declarations: int


@dataclass
class GenerateSchemasResponse:
    """Response for generate_json_schemas tool."""

    schemas: dict[str, dict[str, Any]]  # Validator name -> JSON Schema
    total: int = 0
