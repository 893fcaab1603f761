"""Tools exposed to the main assistant, and the @tool decorator."""

import asyncio
import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from agentdeck.core.cancellation import CancellationToken
    from agentdeck.frontend import Frontend


class BaseTool(ABC):
    """A callable the main assistant can invoke by name."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema for function calling

    @abstractmethod
    async def execute(
        self,
        frontend: "Frontend",
        cancel_token: "CancellationToken | None" = None,
        **kwargs: Any,
    ) -> str:
        """Execute the tool.

        Args:
            frontend: Frontend that shows activity and answers confirmations
            cancel_token: The assistant turn's cancellation signal
            **kwargs: Arguments matching `parameters`
        """

    def get_tool_schema(self) -> dict[str, Any]:
        """Schema in the function-calling format the assistant expects."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


def tool(name: str, description: str, parameters: dict[str, Any]) -> Callable:
    """Turn a function taking `frontend` plus the schema's arguments into a tool."""

    def decorator(func: Callable) -> "FunctionTool":
        return FunctionTool(name, description, parameters, func)

    return decorator


class FunctionTool(BaseTool):
    """
    A tool backed by a plain or async function.

    The cancellation token is only handed to functions that declare a
    `cancel_token` parameter; long-running tools such as `agent_<name>` use it,
    instant ones like `activate_skill` don't need to.
    """

    def __init__(
        self,
        name: str,
        description: str,
        parameters: dict[str, Any],
        func: Callable,
    ):
        self.name = name
        self.description = description
        self.parameters = parameters
        self._func = func
        self._takes_cancel_token = "cancel_token" in inspect.signature(func).parameters

    async def execute(
        self,
        frontend: "Frontend",
        cancel_token: "CancellationToken | None" = None,
        **kwargs: Any,
    ) -> str:
        if self._takes_cancel_token:
            kwargs["cancel_token"] = cancel_token

        result = self._func(frontend=frontend, **kwargs)
        if asyncio.iscoroutine(result):
            result = await result
        return str(result)
