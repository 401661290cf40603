"""Type server tools implementations."""

from ...utils.json_parameter_middleware import json_convert
from ..models.typescript_models import ResolveTypeResponse
from .resolve_type_at_location import resolve_type_at_location_impl


def register_type_tools(mcp):
    """Register the type resolution tools with the MCP server."""

    @mcp.tool
    @json_convert
    def resolve_type_at_location(
        file_path: str,
        position: int,
        kind: str,
        filter: dict | list[dict] | None = None,
    ) -> ResolveTypeResponse:
        """
        Resolve a TypeScript declaration into a structured kind graph.

        Use this tool when:
        - Documenting the props of a React component
        - Inspecting the full shape of a type alias or interface
        - Listing the parameters and return types of a function
        - Reading class members, enum values or namespace exports

        Replaces reading through chains of imported type definitions by hand.

        Args:
            file_path: File containing the declaration (absolute or relative to the project root)
            position: 0-based byte offset of the declaration's name
            kind: Syntax kind of the declaration: "type_alias_declaration", "interface_declaration",
                "function_declaration", "variable_declarator", "class_declaration",
                "enum_declaration", "internal_module" or "type_parameter"
            filter: Dependency types to expand, e.g.
                {"moduleSpecifier": "react", "types": [{"name": "HTMLAttributes", "properties": ["id"]}]}

        Example:
            resolve_type_at_location("src/Button.tsx", 120, "function_declaration")
            → ResolveTypeResponse with a Component kind and its props

        Note: Types from node_modules are kept as shallow references unless the filter lists them
        """
        return resolve_type_at_location_impl(
            file_path=file_path,
            position=position,
            kind=kind,
            filter=filter,
        )


__all__ = ["register_type_tools"]
