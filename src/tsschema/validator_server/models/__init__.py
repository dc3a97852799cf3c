"""Validator server models."""

from .declaration_models import (
    AnalysisError,
    Declaration,
    ExportDeclarationsResponse,
    GenerateSchemasResponse,
    ParsedFile,
    ParseResult,
    PropertyDeclaration,
)

__all__ = [
    "AnalysisError",
    "Declaration",
    "ExportDeclarationsResponse",
    "GenerateSchemasResponse",
    "ParsedFile",
    "ParseResult",
    "PropertyDeclaration",
]
