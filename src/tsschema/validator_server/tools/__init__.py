"""Validator server tools implementations."""

from ...utils.json_parameter_middleware import json_convert
from ..models.declaration_models import ExportDeclarationsResponse, GenerateSchemasResponse
from .generate_validators import export_ts_declarations_impl, generate_json_schemas_impl


def register_validator_tools(mcp):
    """Register TypeScript validator tools with the MCP server."""

    @mcp.tool
    @json_convert
    def export_ts_declarations(glob_patterns: str | list[str]) -> ExportDeclarationsResponse:
        """
        Parse TypeScript interfaces and classes into a portable JSON document.

        Use this tool when:
        - Parsing and schema generation run in different steps or processes
        - Inspecting which properties and raw types were found per declaration

        Args:
            glob_patterns: Glob pattern(s) selecting files (e.g., "src/**/*.ts", ["a/*.ts", "b/*.{ts,tsx}"])

        Example:
            export_ts_declarations("src/models/**/*.ts")
            → ExportDeclarationsResponse with declarations_json and the parsed file list

        Note: Feed declarations_json to generate_json_schemas
        """
        return export_ts_declarations_impl(glob_patterns=glob_patterns)

    @mcp.tool
    @json_convert
    async def generate_json_schemas(
        glob_patterns: str | list[str] | None = None,
        declarations_json: str | None = None,
    ) -> GenerateSchemasResponse:
        """
        Generate a JSON Schema for every TypeScript interface and class found.

        Use this tool when:
        - Deriving request/response validation from existing TypeScript types
        - Checking that every property type of a declaration is supported

        Supported property types: string, number, boolean, any, Object, Date,
        true/false, arrays (T[]), arrow functions (accept anything), inline
        object literals and references to declarations earlier in the batch.

        Args:
            glob_patterns: Glob pattern(s) selecting TypeScript files
            declarations_json: Output of export_ts_declarations, used instead of glob_patterns

        Example:
            generate_json_schemas("src/models/**/*.ts")
            → GenerateSchemasResponse with schemas["User"] = {"type": "object", ...}

        Note: Declarations may only reference declarations that appear before them
        """
        return await generate_json_schemas_impl(glob_patterns=glob_patterns, declarations_json=declarations_json)
