"""Validator MCP Server - TypeScript declarations to runtime validation schemas."""

import logging

from fastmcp import FastMCP

from .config import get_config
from .tools import register_validator_tools

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Initialize the Validator MCP server
mcp = FastMCP(
    name="TSSchema Validator Server",
    version=__version__,
    instructions="""
        Validator server turns TypeScript interfaces and classes into JSON Schemas:

        Core Tools:
        - export_ts_declarations: Parse files into a JSON list of declarations
        - generate_json_schemas: Build one JSON Schema per declaration

        Best Practices:
        - Order files so referenced declarations come first
        - Use export_ts_declarations to check the raw types that were parsed
    """,
)

# Register all validator tools
register_validator_tools(mcp)


def main():
    """Entry point for the validator server."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = get_config()
    logging.getLogger().setLevel(getattr(logging, config.log_level))
    logger.info(f"Starting {config.server_name} with project root {config.project_root}")

    mcp.run()


if __name__ == "__main__":
    main()
