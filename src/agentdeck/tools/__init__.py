"""Tools exposed to the main assistant."""

from agentdeck.tools.base import BaseTool, FunctionTool, tool
from agentdeck.tools.registry import ToolRegistry, resolve_tool_name

__all__ = ["BaseTool", "FunctionTool", "tool", "ToolRegistry", "resolve_tool_name"]
