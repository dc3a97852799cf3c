"""
TypeScript declaration parser with tree-sitter integration.

This module turns TypeScript source into the declaration shape consumed by the
type resolver: every interface and class, with each property's name, raw type
text and optionality flag.
"""

import logging
import os
import time
from typing import Any

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from ..config import get_config
from ..errors import DeclarationParseError
from ..models.declaration_models import (
    AnalysisError,
    Declaration,
    ParsedFile,
    ParseResult,
    PropertyDeclaration,
)

logger = logging.getLogger(__name__)

DECLARATION_NODE_KINDS = {
    "interface_declaration": "interface",
    "class_declaration": "class",
    "abstract_class_declaration": "class",
}

PROPERTY_NODE_TYPES = {"property_signature", "public_field_definition"}

INLINE_OBJECT_NAME = "InlineObject"


class TypeScriptParser:
    """
    TypeScript parser extracting interface and class declarations.

    Features:
    - Separate parsers for TypeScript (.ts) and TSX (.tsx) files
    - File size limit
    - Syntax errors reported with line numbers
    """

    def __init__(self, max_file_size_mb: int = 5):
        """
        Initialize TypeScript parser with configuration.

        Args:
            max_file_size_mb: Maximum individual file size to parse
        """
        self.max_file_size_mb = max_file_size_mb
        self.max_file_size_bytes = max_file_size_mb * 1024 * 1024

        self._ts_parser = Parser()
        self._tsx_parser = Parser()
        self._ts_parser.language = Language(ts_typescript.language_typescript())
        self._tsx_parser.language = Language(ts_typescript.language_tsx())

    def parse_file(self, file_path: str) -> ParseResult:
        """
        Parse a TypeScript or TSX file.

        Args:
            file_path: Path to the TypeScript/TSX file

        Returns:
            ParseResult with success status, AST tree, and any errors
        """
        start_time = time.perf_counter()

        if not os.path.exists(file_path):
            error = AnalysisError(code="NOT_FOUND", message=f"File not found: {file_path}", file=file_path)
            return ParseResult(success=False, errors=[error])

        try:
            file_size = os.path.getsize(file_path)
            if file_size > self.max_file_size_bytes:
                error = AnalysisError(
                    code="FILE_TOO_LARGE",
                    message=f"File exceeds size limit ({self.max_file_size_mb}MB): {file_path}",
                    file=file_path,
                )
                return ParseResult(success=False, errors=[error])

            with open(file_path, "rb") as f:
                content_bytes = f.read()
        except OSError as e:
            error = AnalysisError(code="PERMISSION_DENIED", message=f"Cannot read file: {e}", file=file_path)
            return ParseResult(success=False, errors=[error])

        result = self.parse_bytes(content_bytes, file_path)
        result.parse_time_ms = (time.perf_counter() - start_time) * 1000
        return result

    def parse_bytes(self, content_bytes: bytes, file_path: str) -> ParseResult:
        """Parse already-loaded source, choosing the TSX grammar by extension."""
        parser = self._tsx_parser if file_path.endswith(".tsx") else self._ts_parser

        tree = parser.parse(content_bytes)

        errors = []
        if tree.root_node.has_error:
            for node in self._find_error_nodes(tree.root_node):
                errors.append(
                    AnalysisError(
                        code="PARSE_ERROR",
                        message=f"Syntax error at line {node.start_point[0] + 1}",
                        file=file_path,
                        line=node.start_point[0] + 1,
                    )
                )

        return ParseResult(success=True, tree=tree, errors=errors)

    def _find_error_nodes(self, node: Any) -> list[Any]:
        """Recursively find all error and missing nodes in the AST."""
        errors = []
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)

        for child in node.children:
            errors.extend(self._find_error_nodes(child))

        return errors

    def extract_declarations(self, tree: Any) -> list[Declaration]:
        """
        Collect interface and class declarations in source order.

        Declarations nested under `export`, `declare` or namespaces are found
        too; members of a declaration are not searched for further declarations.
        """
        declarations = []

        def traverse(node):
            kind = DECLARATION_NODE_KINDS.get(node.type)
            if kind is not None:
                declaration = self._build_declaration(node, kind)
                if declaration is not None:
                    declarations.append(declaration)
                return

            for child in node.children:
                traverse(child)

        traverse(tree.root_node)
        return declarations

    def _build_declaration(self, node: Any, kind: str) -> Declaration | None:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        if name_node is None:
            return None

        properties = []
        if body is not None:
            for member in body.named_children:
                if member.type not in PROPERTY_NODE_TYPES:
                    continue
                prop = self._build_property(member)
                if prop is not None:
                    properties.append(prop)

        return Declaration(
            name=_node_text(name_node),
            kind=kind,
            properties=tuple(properties),
            line=name_node.start_point[0] + 1,
        )

    def _build_property(self, node: Any) -> PropertyDeclaration | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None

        is_optional = False
        for child in node.children:
            if child.type == "static":
                # Class-level values are not part of an instance's shape
                return None
            if child.type == "?":
                is_optional = True

        raw_type = "any"
        type_node = node.child_by_field_name("type")
        if type_node is not None:
            if type_node.named_children:
                raw_type = _node_text(type_node.named_children[0])
            else:
                raw_type = _node_text(type_node).lstrip(":").strip()

        return PropertyDeclaration(name=_property_name(name_node), type=raw_type, is_optional=is_optional)

    def parse_declarations(self, file_path: str) -> ParsedFile:
        """
        Parse a file into its declarations.

        Raises:
            DeclarationParseError: if the file cannot be read or contains syntax errors
        """
        result = self.parse_file(file_path)
        _raise_on_errors(result, file_path)
        declarations = self.extract_declarations(result.tree)
        logger.debug(f"Parsed {len(declarations)} declarations from {file_path}")
        return ParsedFile(file_path=file_path, declarations=tuple(declarations))

    def parse_source(self, source: str, file_path: str = "<source>.ts") -> ParsedFile:
        """Parse TypeScript text that does not live in a file."""
        result = self.parse_bytes(source.encode("utf-8"), file_path)
        _raise_on_errors(result, file_path)
        return ParsedFile(file_path=file_path, declarations=tuple(self.extract_declarations(result.tree)))

    def parse_object_literal(self, raw_type: str, name: str = INLINE_OBJECT_NAME) -> Declaration:
        """
        Parse an inline object type such as `{ a: string; b?: number }`.

        The literal is parsed as the body of a synthetic interface called `name`.
        """
        parsed = self.parse_source(f"interface {name} {raw_type}", file_path="<inline>.ts")
        if not parsed.declarations:
            raise DeclarationParseError(f'Unexpected error while processing declaration: "{raw_type}"')
        return parsed.declarations[0]


def _raise_on_errors(result: ParseResult, file_path: str) -> None:
    if result.success and not result.errors:
        return
    first = result.errors[0]
    raise DeclarationParseError(
        f'Error occurred while preprocessing file "{file_path}": {first.message}',
        file=first.file or file_path,
        line=first.line,
    )


def _node_text(node: Any) -> str:
    return node.text.decode("utf-8", errors="replace")


def _property_name(node: Any) -> str:
    text = _node_text(node)
    if node.type == "string" and len(text) >= 2:
        return text[1:-1]
    return text


# Shared parser instance
_shared_parser = None


def get_shared_parser() -> TypeScriptParser:
    """Get or create shared TypeScript parser instance."""
    global _shared_parser
    if _shared_parser is None:
        _shared_parser = TypeScriptParser(max_file_size_mb=get_config().max_file_size_mb)
    return _shared_parser
