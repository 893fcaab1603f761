"""Base classes for slash commands."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from agentdeck.frontend.base import MessageLevel

if TYPE_CHECKING:
    from agentdeck.core.cancellation import CancellationToken
    from agentdeck.core.context import SharedContext
    from agentdeck.frontend.base import Frontend


@dataclass
class CommandResult:
    """Result of executing a slash command.

    `prompt` carries text meant for the main assistant (e.g. a request to
    generate a definition file) rather than for the user.
    """

    message: str | None = None
    level: MessageLevel = MessageLevel.INFO
    prompt: str | None = None


@dataclass
class CommandContext:
    """What a command can reach while it runs."""

    shared: "SharedContext"
    frontend: "Frontend"
    cancel_token: "CancellationToken | None" = None


class Command(ABC):
    """Base class for slash commands."""

    name: str
    aliases: list[str] = []
    description: str = ""

    @abstractmethod
    async def execute(self, args: str, ctx: CommandContext) -> CommandResult:
        """Execute the command and return result."""
        pass

    def complete(self, args: str, ctx: CommandContext) -> list[str]:
        """Completion candidates for a partially typed argument string."""
        return []
