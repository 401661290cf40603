"""Test type server tool registration."""

import pytest
from fastmcp import FastMCP

from kindgraph.type_server.tools import register_type_tools


class TestServerRegistration:
    """Test suite for type server tool registration."""

    @pytest.mark.asyncio
    async def test_type_tools_register(self):
        """The resolution tool is registered under its function name."""
        mcp = FastMCP(name="Test Type Server")
        register_type_tools(mcp)

        tools = await mcp.get_tools()
        tool_names = list(tools)

        assert tool_names == ["resolve_type_at_location"], f"Unexpected tools: {tool_names}"

    @pytest.mark.asyncio
    async def test_server_module_registers_tools(self):
        """Importing the server module builds a ready-to-run FastMCP instance."""
        from kindgraph.type_server.server import mcp

        tools = await mcp.get_tools()

        assert "resolve_type_at_location" in tools
        assert tools["resolve_type_at_location"].description.strip().startswith("Resolve a TypeScript declaration")
