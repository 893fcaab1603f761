"""Tests for command base classes."""

import pytest

from agentdeck.core.commands.base import Command, CommandResult
from agentdeck.frontend.base import MessageLevel


class ConcreteCommand(Command):
    """Concrete implementation for testing."""

    name = "test"
    aliases = ["t", "tst"]
    description = "A test command"

    async def execute(self, args: str, ctx) -> CommandResult:
        return CommandResult(message=f"executed with: {args}")


class TestCommand:
    """Tests for Command ABC."""

    def test_command_properties(self):
        cmd = ConcreteCommand()
        assert cmd.name == "test"
        assert cmd.aliases == ["t", "tst"]
        assert cmd.description == "A test command"

    @pytest.mark.anyio
    async def test_execute_returns_result(self):
        result = await ConcreteCommand().execute("args", None)
        assert result.message == "executed with: args"
        assert result.level == MessageLevel.INFO
        assert result.prompt is None

    def test_no_completions_by_default(self):
        assert ConcreteCommand().complete("", None) == []
