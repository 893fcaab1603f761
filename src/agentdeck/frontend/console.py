"""Console frontend implementation using Rich."""

from pathlib import Path
from typing import TYPE_CHECKING

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from agentdeck.core.engine import ActivityType
from agentdeck.frontend.base import (
    CreationResult,
    CreationScope,
    Frontend,
    MessageLevel,
)
from agentdeck.frontend.creation import CreationWorkflow
from agentdeck.messagebus.messages import ConfirmationKind, ConfirmationOutcome

if TYPE_CHECKING:
    from agentdeck.core.definition import DefinitionMetadata
    from agentdeck.core.engine import ActivityEvent
    from agentdeck.messagebus.messages import ToolConfirmationRequest

_LEVEL_STYLES = {
    MessageLevel.INFO: None,
    MessageLevel.WARNING: "yellow",
    MessageLevel.ERROR: "red",
}


class ConsoleFrontend(Frontend):
    """Console-based frontend using Rich for formatting."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def show_welcome(self) -> None:
        """Display welcome message panel."""
        self.console.print(
            Panel(
                Text("Welcome to agentdeck!", style="bold cyan"),
                title="🤖 agentdeck",
                border_style="cyan",
            )
        )
        self.console.print("Type /help for commands, 'quit' or 'exit' to leave.\n")

    async def show_message(
        self, content: str, level: MessageLevel = MessageLevel.INFO
    ) -> None:
        self.console.print(Text(content, style=_LEVEL_STYLES[level] or ""))

    async def show_system_message(self, content: str) -> None:
        self.console.print(content)

    def show_activity(self, agent_name: str, event: "ActivityEvent") -> None:
        if event.type == ActivityType.THOUGHT_CHUNK:
            text = event.data.get("text", "")
            self.console.print(Text(f"🤖💭 {agent_name}: {text}", style="dim"))
        elif event.type == ActivityType.TOOL_CALL_START:
            tool = event.data.get("name", "")
            self.console.print(Text(f"🔧 {agent_name} calling: {tool}", style="dim"))
        elif event.type == ActivityType.ERROR:
            error = event.data.get("error", "")
            self.console.print(Text(f"⚠️  {agent_name}: {error}", style="yellow"))

    async def show_definitions(
        self,
        kind: str,
        definitions: list["DefinitionMetadata"],
        show_descriptions: bool = True,
    ) -> None:
        if not definitions:
            self.console.print(f"No {kind}s found.")
            return

        table = Table(title=f"Available {kind.capitalize()}s")
        table.add_column("Name", style="cyan")
        if show_descriptions:
            table.add_column("Description")
        table.add_column("Location", style="dim")

        for definition in definitions:
            name = Text(definition.name)
            if definition.disabled:
                name.append(" (disabled)", style="dim")
            row = [name]
            if show_descriptions:
                row.append(Text(definition.description))
            row.append(Text(str(definition.location)))
            table.add_row(*row)

        self.console.print(table)

    async def confirm_tool(
        self, request: "ToolConfirmationRequest"
    ) -> ConfirmationOutcome:
        self.console.print(self._describe_request(request))

        outcome = await questionary.select(
            "Allow this action?",
            choices=[
                questionary.Choice("Yes, once", value=ConfirmationOutcome.PROCEED_ONCE),
                questionary.Choice(
                    "Yes, always for this session",
                    value=ConfirmationOutcome.PROCEED_ALWAYS,
                ),
                questionary.Choice("No", value=ConfirmationOutcome.REJECT),
            ],
        ).ask_async()

        return outcome or ConfirmationOutcome.REJECT

    async def run_creation_workflow(
        self,
        kind: str,
        initial_name: str | None,
        directories: dict[CreationScope, Path],
    ) -> CreationResult | None:
        workflow = CreationWorkflow(kind, directories, self.console)
        return await workflow.run(initial_name)

    def _describe_request(self, request: "ToolConfirmationRequest") -> Panel:
        who = request.agent_name or "sub-agent"
        lines = [f"{who} wants to use {request.tool_name or 'a tool'}"]
        if request.confirmation == ConfirmationKind.EXEC:
            lines.extend(f"  $ {command}" for command in request.commands)
        elif request.confirmation == ConfirmationKind.EDIT:
            path = request.details.get("file_path")
            if path:
                lines.append(f"  edit {path}")
        for key, value in request.details.items():
            if key not in ("commands", "file_path"):
                lines.append(f"  {key}: {value}")

        return Panel(
            Text("\n".join(lines)),
            title=f"Confirm ({request.confirmation.value})",
            border_style="yellow",
        )
