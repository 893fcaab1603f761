"""Built-in slash command handlers."""

import logging
from abc import abstractmethod
from typing import TYPE_CHECKING

from agentdeck.core.commands.base import Command, CommandContext, CommandResult
from agentdeck.core.subagent import SubAgent, SubAgentContext, SubAgentError
from agentdeck.core.templates import generation_prompt, starter_body, starter_frontmatter
from agentdeck.frontend.base import MessageLevel
from agentdeck.messagebus.confirmation import ConfirmationResponder
from agentdeck.utils.def_loader import is_valid_name, write_definition

if TYPE_CHECKING:
    from pathlib import Path

    from agentdeck.core.commands.registry import CommandRegistry
    from agentdeck.core.engine import ActivityEvent
    from agentdeck.core.registry import DefinitionRegistry
    from agentdeck.frontend.base import CreationScope

logger = logging.getLogger(__name__)


def _error(message: str) -> CommandResult:
    return CommandResult(message=message, level=MessageLevel.ERROR)


class HelpCommand(Command):
    """Show available commands."""

    name = "help"
    aliases = ["?"]
    description = "Show available commands"
    _registry: "CommandRegistry | None" = None

    def set_registry(self, registry: "CommandRegistry") -> None:
        """Set the registry reference for dynamic help generation."""
        self._registry = registry

    async def execute(self, args: str, ctx: CommandContext) -> CommandResult:
        if self._registry is None:
            return _error("Help unavailable: registry not set.")

        lines = ["Available Commands:"]
        for cmd in self._registry.list_commands():
            lines.append(f"/{cmd.name} - {cmd.description}")
        return CommandResult(message="\n".join(lines))


class DefinitionCommand(Command):
    """Shared `list` and `create` handling for agents and skills."""

    kind: str
    subcommands: list[str] = ["list", "create"]

    @abstractmethod
    def registry(self, ctx: CommandContext) -> "DefinitionRegistry":
        """Registry holding this command's definitions."""

    def directories(self, ctx: CommandContext) -> "dict[CreationScope, Path]":
        config = ctx.shared.config
        return {
            "project": config.project_dir / f"{self.kind}s",
            "global": config.user_dir / f"{self.kind}s",
        }

    async def execute(self, args: str, ctx: CommandContext) -> CommandResult:
        parts = args.split(None, 1)
        sub = parts[0].lower() if parts else "list"
        rest = parts[1].strip() if len(parts) > 1 else ""

        handler = getattr(self, f"_{sub}", None)
        if sub not in self.subcommands or handler is None:
            return _error(
                f"Unknown subcommand '{sub}'. Usage: /{self.name} "
                f"[{' | '.join(self.subcommands)}]"
            )
        return await handler(rest, ctx)

    def complete(self, args: str, ctx: CommandContext) -> list[str]:
        parts = args.split(None, 1)
        if len(parts) <= 1 and not args.endswith(" "):
            prefix = parts[0] if parts else ""
            return [s for s in self.subcommands if s.startswith(prefix)]
        return []

    async def _list(self, args: str, ctx: CommandContext) -> CommandResult:
        registry = self.registry(ctx)
        await registry.discover()
        await ctx.frontend.show_definitions(
            self.kind,
            registry.get_all(),
            show_descriptions=args.strip() != "nodesc",
        )
        return CommandResult()

    async def _create(self, args: str, ctx: CommandContext) -> CommandResult:
        label = self.kind.capitalize()
        name = args.strip() or None

        if name and not is_valid_name(name):
            return _error(
                f"{label} name can only contain letters, numbers, underscores, and hyphens."
            )

        registry = self.registry(ctx)
        await registry.discover()
        if name and registry.get(name) is not None:
            return CommandResult(
                message=f'{label} "{name}" already exists.',
                level=MessageLevel.WARNING,
            )

        result = await ctx.frontend.run_creation_workflow(
            self.kind, name, self.directories(ctx)
        )
        if result is None:
            return CommandResult(message=f"{label} creation cancelled.")

        path = result.directory / f"{result.name}.md"
        if path.exists():
            return CommandResult(
                message=f'{label} "{result.name}" already exists.',
                level=MessageLevel.WARNING,
            )

        if result.method == "generate":
            return CommandResult(
                message=f'🤖 Generating {self.kind} "{result.name}"...',
                prompt=generation_prompt(
                    self.kind, result.name, result.description, str(path)
                ),
            )

        try:
            path = write_definition(
                result.name,
                starter_frontmatter(self.kind, result.name),
                starter_body(self.kind, result.name),
                result.directory,
            )
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            return _error(f"Failed to create {self.kind}: {e}")

        await registry.discover()
        return CommandResult(
            message=(
                f"✅ Created {self.kind} template at: {path}\n"
                f"Edit the file to customize your {self.kind}."
            )
        )


class AgentsCommand(DefinitionCommand):
    """List, create or run sub-agents."""

    name = "agents"
    aliases = ["agent"]
    description = "List, create or run agents. Usage: /agents [list | create <name> | run <name> <task>]"
    kind = "agent"
    subcommands = ["list", "create", "run"]

    def registry(self, ctx: CommandContext) -> "DefinitionRegistry":
        return ctx.shared.agent_registry

    async def _run(self, args: str, ctx: CommandContext) -> CommandResult:
        parts = args.split(None, 1)
        if len(parts) < 2:
            return _error(
                "Please provide an agent name and a task. Usage: /agents run <name> <task>"
            )
        agent_name, task = parts[0], parts[1].strip()

        registry = ctx.shared.agent_registry
        if not registry.get_all():
            await registry.discover()
        metadata = registry.get(agent_name)
        if metadata is None:
            return _error(f'Agent "{agent_name}" not found.')

        engine = ctx.shared.engine
        if engine is None:
            return _error(
                "No execution engine configured. Set `engine` in config.yaml."
            )

        bus = ctx.shared.message_bus
        subagent = SubAgent(
            metadata,
            SubAgentContext(
                config=ctx.shared.config,
                engine=engine,
                message_bus=bus,
                on_confirmation=ConfirmationResponder(bus, ctx.frontend),
            ),
        )

        def on_activity(event: "ActivityEvent") -> None:
            ctx.frontend.show_activity(agent_name, event)

        try:
            output = await subagent.run(task, on_activity, ctx.cancel_token)
        except SubAgentError as e:
            return _error(f'Sub-agent "{agent_name}" failed: {e}')

        return CommandResult(
            message=f'Sub-agent "{agent_name}" finished. Result:\n\n{output.result}'
        )


class SkillsCommand(DefinitionCommand):
    """List, create, enable or disable skills."""

    name = "skills"
    aliases = ["skill"]
    description = "List, create, enable or disable skills. Usage: /skills [list | create <name> | disable <name> | enable <name>]"
    kind = "skill"
    subcommands = ["list", "create", "disable", "enable"]

    def registry(self, ctx: CommandContext) -> "DefinitionRegistry":
        return ctx.shared.skill_registry

    def complete(self, args: str, ctx: CommandContext) -> list[str]:
        parts = args.split(None, 1)
        if len(parts) == 0 or (len(parts) == 1 and not args.endswith(" ")):
            return super().complete(args, ctx)

        sub = parts[0].lower()
        partial = parts[1].strip() if len(parts) > 1 else ""
        skills = ctx.shared.skill_registry.get_all()
        if sub == "disable":
            return [s.name for s in skills if not s.disabled and s.name.startswith(partial)]
        if sub == "enable":
            return [s.name for s in skills if s.disabled and s.name.startswith(partial)]
        return []

    async def _disable(self, args: str, ctx: CommandContext) -> CommandResult:
        skill_name = args.strip()
        if not skill_name:
            return _error("Please provide a skill name to disable.")

        registry = ctx.shared.skill_registry
        if not registry.get_all():
            await registry.discover()
        if registry.get(skill_name) is None:
            return _error(f'Skill "{skill_name}" not found.')

        config = ctx.shared.config
        if skill_name in config.skills.disabled:
            return CommandResult(message=f'Skill "{skill_name}" is already disabled.')

        scope = config.preferred_scope()
        config.set_value(scope, "skills.disabled", [*config.skills.disabled, skill_name])
        await registry.discover()
        return CommandResult(
            message=f'Skill "{skill_name}" disabled in {scope.value} settings.'
        )

    async def _enable(self, args: str, ctx: CommandContext) -> CommandResult:
        skill_name = args.strip()
        if not skill_name:
            return _error("Please provide a skill name to enable.")

        config = ctx.shared.config
        if skill_name not in config.skills.disabled:
            return CommandResult(message=f'Skill "{skill_name}" is not disabled.')

        scope = config.preferred_scope()
        remaining = [name for name in config.skills.disabled if name != skill_name]
        config.set_value(scope, "skills.disabled", remaining)
        await ctx.shared.skill_registry.discover()
        return CommandResult(
            message=f'Skill "{skill_name}" enabled in {scope.value} settings.'
        )


class ToolsCommand(Command):
    """List the tools exposed to the main assistant."""

    name = "tools"
    description = "List tools available to the assistant"

    async def execute(self, args: str, ctx: CommandContext) -> CommandResult:
        shared = ctx.shared
        await shared.agent_registry.discover()
        await shared.skill_registry.discover()

        tools = shared.build_tool_registry().list_all()
        if not tools:
            return CommandResult(message="No tools available.")

        lines = ["Available Tools:"]
        for t in tools:
            summary = t.description.strip().splitlines()[0] if t.description.strip() else ""
            lines.append(f" - {t.name}: {summary}")
        return CommandResult(message="\n".join(lines))
