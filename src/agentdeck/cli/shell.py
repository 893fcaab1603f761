"""Interactive slash-command shell."""

import asyncio
import logging
import signal

import typer

from agentdeck.core.cancellation import CancellationToken
from agentdeck.core.commands.base import CommandContext, CommandResult
from agentdeck.core.context import SharedContext
from agentdeck.frontend import ConsoleFrontend, Frontend, MessageLevel
from agentdeck.utils.config import Config
from agentdeck.utils.logging import setup_logging

logger = logging.getLogger(__name__)


async def present_result(frontend: Frontend, result: CommandResult) -> None:
    """Show a command result, including any prompt meant for the assistant."""
    if result.message:
        await frontend.show_message(result.message, result.level)
    if result.prompt:
        await frontend.show_message(result.prompt)


class ShellLoop:
    """Interactive session running slash commands until the user quits."""

    def __init__(self, context: SharedContext, frontend: ConsoleFrontend | None = None):
        self.context = context
        self.frontend = frontend or ConsoleFrontend()
        self._token: CancellationToken | None = None

    def _interrupt(self) -> None:
        if self._token is not None and not self._token.cancelled:
            logger.info("Cancelling running command on user interrupt")
            self._token.cancel("Interrupted by user")

    async def handle(self, user_input: str) -> None:
        """Run one line of input."""
        self._token = CancellationToken()
        ctx = CommandContext(
            shared=self.context, frontend=self.frontend, cancel_token=self._token
        )

        loop = asyncio.get_running_loop()
        loop.add_signal_handler(signal.SIGINT, self._interrupt)
        try:
            result = await self.context.command_registry.dispatch(user_input, ctx)
        finally:
            loop.remove_signal_handler(signal.SIGINT)
            self._token = None

        if result is None:
            await self.frontend.show_message(
                f"Unknown command: {user_input.split()[0]}. Type /help for commands.",
                MessageLevel.WARNING,
            )
            return
        await present_result(self.frontend, result)

    async def run(self) -> None:
        """Run the interactive loop."""
        self.frontend.show_welcome()
        await self.context.discover()

        while True:
            try:
                user_input = self.frontend.console.input("[bold green]>[/bold green] ")
            except (KeyboardInterrupt, EOFError):
                await self.frontend.show_system_message(
                    "\n[yellow]Session interrupted.[/yellow]"
                )
                break

            if user_input.lower() in ["quit", "exit", "q"]:
                await self.frontend.show_system_message("[yellow]Goodbye![/yellow]")
                break

            if not user_input.strip():
                continue

            try:
                await self.handle(user_input.strip())
            except Exception as e:
                logger.exception(f"Command failed: {user_input}")
                await self.frontend.show_message(f"Error: {e}", MessageLevel.ERROR)


def shell_command(ctx: typer.Context) -> None:
    """Start the interactive shell."""
    config: Config = ctx.obj.get("config")
    setup_logging(config, console_output=False)

    shell = ShellLoop(SharedContext(config))
    asyncio.run(shell.run())
