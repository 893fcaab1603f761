import logging

from agentdeck.core.commands.registry import CommandRegistry
from agentdeck.core.engine import ExecutionEngine, load_engine
from agentdeck.core.registry import AgentRegistry, SkillRegistry
from agentdeck.messagebus.bus import MessageBus
from agentdeck.tools.registry import ToolRegistry
from agentdeck.tools.skill_tool import create_skill_tool
from agentdeck.tools.subagent_tool import create_subagent_tools
from agentdeck.utils.config import Config

logger = logging.getLogger(__name__)


class SharedContext:
    """Global shared state for the application."""

    config: Config
    agent_registry: AgentRegistry
    skill_registry: SkillRegistry
    message_bus: MessageBus
    command_registry: CommandRegistry
    engine: ExecutionEngine | None

    def __init__(self, config: Config, engine: ExecutionEngine | None = None):
        self.config = config
        self.agent_registry = AgentRegistry.from_config(config)
        self.skill_registry = SkillRegistry.from_config(config)
        self.message_bus = MessageBus()
        self.command_registry = CommandRegistry.with_builtins()

        if engine is None and config.engine:
            engine = load_engine(config.engine, config)
            logger.info(f"Loaded execution engine from {config.engine}")
        self.engine = engine

    async def discover(self) -> None:
        """Refresh both registries."""
        await self.agent_registry.discover()
        await self.skill_registry.discover()

    def build_tool_registry(self) -> ToolRegistry:
        """Tools for the main assistant, built from the last discovery."""
        registry = ToolRegistry()
        for agent_tool in create_subagent_tools(self):
            registry.register(agent_tool)

        skill_tool = create_skill_tool(self.skill_registry)
        if skill_tool is not None:
            registry.register(skill_tool)

        return registry
