"""Factory for the per-agent delegation tools."""

import json
import logging
from typing import TYPE_CHECKING

from agentdeck.core.cancellation import CancellationToken
from agentdeck.core.definition import DefinitionMetadata
from agentdeck.core.engine import ActivityEvent
from agentdeck.core.subagent import SubAgent, SubAgentContext
from agentdeck.messagebus.confirmation import ConfirmationResponder
from agentdeck.tools.base import BaseTool, tool

if TYPE_CHECKING:
    from agentdeck.core.context import SharedContext
    from agentdeck.frontend import Frontend

logger = logging.getLogger(__name__)

AGENT_TOOL_PREFIX = "agent_"


def create_subagent_tools(context: "SharedContext") -> list[BaseTool]:
    """Build one `agent_<name>` tool per enabled agent.

    Args:
        context: SharedContext holding the agent registry and engine

    Returns:
        The tools, or an empty list if no engine is configured
    """
    if context.engine is None:
        logger.debug("No execution engine configured; skipping agent tools")
        return []

    return [
        _create_agent_tool(metadata, context)
        for metadata in context.agent_registry.get_enabled()
    ]


def _create_agent_tool(
    metadata: DefinitionMetadata, shared_context: "SharedContext"
) -> BaseTool:
    agent_name = metadata.name

    @tool(
        name=f"{AGENT_TOOL_PREFIX}{agent_name}",
        description=(
            f'Execute a task using the specialized "{agent_name}" agent. '
            f"Description: {metadata.description}"
        ),
        parameters={
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": "The task to delegate to the specialized agent.",
                },
            },
            "required": ["task"],
        },
    )
    async def run_agent(
        frontend: "Frontend",
        task: str,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Run the agent and return its result + terminate reason as JSON."""
        bus = shared_context.message_bus
        subagent = SubAgent(
            metadata,
            SubAgentContext(
                config=shared_context.config,
                engine=shared_context.engine,
                message_bus=bus,
                on_confirmation=ConfirmationResponder(bus, frontend),
            ),
        )

        def on_activity(event: ActivityEvent) -> None:
            frontend.show_activity(agent_name, event)

        output = await subagent.run(task, on_activity, cancel_token)

        return json.dumps(
            {
                "result": output.result,
                "terminate_reason": output.terminate_reason.value,
            }
        )

    return run_agent
