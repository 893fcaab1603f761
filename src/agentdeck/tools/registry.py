"""Tool registry for managing available tools."""

from typing import Any

from agentdeck.tools.base import BaseTool

# Names models commonly invent for the standard file tools
TOOL_ALIASES: dict[str, str] = {
    "file_system.write": "write_file",
    "file_system.read": "read_file",
    "file_system.list": "list_directory",
    "tool_code_write_file": "write_file",
}


def resolve_tool_name(name: str) -> str:
    """Map a known alias to its canonical tool name; other names pass through."""
    return TOOL_ALIASES.get(name, name)


class ToolRegistry:
    """
    Registry for tools exposed to the main assistant.

    Handles tool registration, retrieval (alias-aware) and tool schema
    generation for function calling.
    """

    def __init__(self) -> None:
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> BaseTool | None:
        """Get a tool by name or alias."""
        return self._tools.get(resolve_tool_name(name))

    def resolve_tool_name(self, name: str) -> str:
        return resolve_tool_name(name)

    def list_all(self) -> list[BaseTool]:
        """List all registered tools."""
        return list(self._tools.values())

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """Get tool schemas for all registered tools."""
        return [tool.get_tool_schema() for tool in self._tools.values()]

    async def execute_tool(self, name: str, **kwargs: Any) -> str:
        """
        Execute a tool by name.

        Raises:
            ValueError: If tool is not found
        """
        tool = self.get(name)
        if tool is None:
            raise ValueError(f"Tool not found: {name}")

        return await tool.execute(**kwargs)
