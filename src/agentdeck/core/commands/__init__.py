"""Slash commands."""

from agentdeck.core.commands.base import Command, CommandContext, CommandResult
from agentdeck.core.commands.registry import CommandRegistry

__all__ = ["Command", "CommandContext", "CommandResult", "CommandRegistry"]
