"""Run a single slash command without prompting."""

import asyncio

import typer

from agentdeck.cli.shell import present_result
from agentdeck.core.cancellation import CancellationToken
from agentdeck.core.commands.base import CommandContext
from agentdeck.core.context import SharedContext
from agentdeck.frontend import MessageLevel, PlainFrontend
from agentdeck.utils.config import Config
from agentdeck.utils.logging import setup_logging


async def run_once(context: SharedContext, frontend: PlainFrontend, command: str) -> bool:
    """Dispatch one command. Returns False if it failed or wasn't a command."""
    ctx = CommandContext(
        shared=context, frontend=frontend, cancel_token=CancellationToken()
    )
    result = await context.command_registry.dispatch(command, ctx)
    if result is None:
        await frontend.show_message(f"Unknown command: {command}", MessageLevel.ERROR)
        return False

    await present_result(frontend, result)
    return result.level != MessageLevel.ERROR


def exec_command(ctx: typer.Context, command: str) -> None:
    """Run one slash command non-interactively."""
    config: Config = ctx.obj.get("config")
    setup_logging(config, console_output=False)

    ok = asyncio.run(run_once(SharedContext(config), PlainFrontend(), command))
    if not ok:
        raise typer.Exit(1)
