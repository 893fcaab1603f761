"""Plain-text frontend for non-interactive use (scripts, CI, `agentdeck exec`)."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from agentdeck.core.engine import ActivityType
from agentdeck.frontend.base import (
    CreationResult,
    CreationScope,
    Frontend,
    MessageLevel,
)
from agentdeck.messagebus.messages import ConfirmationOutcome

if TYPE_CHECKING:
    from agentdeck.core.definition import DefinitionMetadata
    from agentdeck.core.engine import ActivityEvent
    from agentdeck.messagebus.messages import ToolConfirmationRequest

logger = logging.getLogger(__name__)


class PlainFrontend(Frontend):
    """Writes `[LEVEL] text` lines; never prompts."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False, soft_wrap=True)

    def _write(self, text: str) -> None:
        self.console.print(text, markup=False)

    async def show_message(
        self, content: str, level: MessageLevel = MessageLevel.INFO
    ) -> None:
        self._write(f"[{level.value.upper()}] {content}")

    async def show_system_message(self, content: str) -> None:
        self._write(content)

    def show_activity(self, agent_name: str, event: "ActivityEvent") -> None:
        if event.type == ActivityType.TOOL_CALL_START:
            self._write(f"[INFO] Sub-agent calling tool: {event.data.get('name')}")

    async def show_definitions(
        self,
        kind: str,
        definitions: list["DefinitionMetadata"],
        show_descriptions: bool = True,
    ) -> None:
        self._write(f"Available {kind.capitalize()}s:")
        if not definitions:
            self._write(f" No {kind}s found.")
            return

        for definition in definitions:
            line = f" - {definition.name}"
            if show_descriptions:
                line += f": {definition.description}"
            line += f" ({definition.location})"
            if definition.disabled:
                line += " [disabled]"
            self._write(line)

    async def confirm_tool(
        self, request: "ToolConfirmationRequest"
    ) -> ConfirmationOutcome:
        logger.warning(
            f"Rejecting {request.confirmation.value} confirmation "
            f"{request.correlation_id}: no interactive user"
        )
        return ConfirmationOutcome.REJECT

    async def run_creation_workflow(
        self,
        kind: str,
        initial_name: str | None,
        directories: dict[CreationScope, Path],
    ) -> CreationResult | None:
        # No prompts: a name is required and the project tier is used
        if not initial_name:
            await self.show_message(
                f"Please provide a {kind} name. Usage: /{kind}s create <name>",
                MessageLevel.ERROR,
            )
            return None
        return CreationResult(
            name=initial_name,
            scope="project",
            method="manual",
            directory=directories["project"],
        )
