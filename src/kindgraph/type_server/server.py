"""Type MCP Server - TypeScript type resolution into kind graphs."""

import logging

from fastmcp import FastMCP

from .config import get_config
from .tools import register_type_tools

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Initialize the Type MCP server
mcp = FastMCP(
    name="Kindgraph Type Server",
    version=__version__,
    instructions="""
        Type server resolves TypeScript declarations into kind graphs:

        Core Tools:
        - resolve_type_at_location: Describe the declaration at a file position

        Every result is a tree of kind nodes (String, Union, TypeLiteral,
        PropertySignature, Component, Class, ...). Locally declared types are
        expanded in place; exported and dependency types are kept as
        TypeReference nodes carrying their name, arguments and location.

        Best Practices:
        - Point position at the declaration's name
        - Pass a filter to expand selected types from node_modules
        - Results are cached until a contributing file changes
    """,
)

# Register all type tools
register_type_tools(mcp)


def main():
    """Run the type server with logging configured from the environment."""
    config = get_config()
    is_valid, errors = config.validate()
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    for error in errors:
        logger.warning("Configuration: %s", error)
    if not is_valid:
        logger.warning("Continuing with invalid configuration")
    mcp.run()


if __name__ == "__main__":
    main()
