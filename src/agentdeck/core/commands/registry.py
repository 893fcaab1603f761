"""Command registry for managing slash commands."""

from agentdeck.core.commands.base import Command, CommandContext, CommandResult


class CommandRegistry:
    """Registry for slash commands."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, cmd: Command) -> None:
        """Register a command and its aliases."""
        self._commands[cmd.name] = cmd
        for alias in cmd.aliases:
            self._commands[alias] = cmd

    def list_commands(self) -> list[Command]:
        """Registered commands, each once, in registration order."""
        return list(dict.fromkeys(self._commands.values()))

    def resolve(self, input: str) -> tuple[Command, str] | None:
        """
        Parse input and return (command, args) if it matches.

        Args:
            input: Full input string (e.g., "/agents run grader check x")

        Returns:
            Tuple of (Command, args_string) or None if no match
        """
        if not input.startswith("/"):
            return None

        parts = input[1:].split(None, 1)
        if not parts:
            return None

        cmd_name = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        cmd = self._commands.get(cmd_name)
        if cmd:
            return (cmd, args)
        return None

    async def dispatch(self, input: str, ctx: CommandContext) -> CommandResult | None:
        """
        Parse and execute a slash command.

        Returns:
            CommandResult if command matched, None if not a command
        """
        resolved = self.resolve(input)
        if not resolved:
            return None

        cmd, args = resolved
        return await cmd.execute(args, ctx)

    def complete(self, input: str, ctx: CommandContext) -> list[str]:
        """Completion candidates for the argument part of a slash command."""
        resolved = self.resolve(input)
        if not resolved:
            return []

        cmd, args = resolved
        return cmd.complete(args, ctx)

    @classmethod
    def with_builtins(cls) -> "CommandRegistry":
        """Create registry with built-in commands registered."""
        from agentdeck.core.commands.handlers import (
            AgentsCommand,
            HelpCommand,
            SkillsCommand,
            ToolsCommand,
        )

        registry = cls()
        help_cmd = HelpCommand()
        help_cmd.set_registry(registry)
        registry.register(help_cmd)
        registry.register(AgentsCommand())
        registry.register(SkillsCommand())
        registry.register(ToolsCommand())
        return registry
