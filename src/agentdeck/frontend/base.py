"""Abstract base class for frontend implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from agentdeck.messagebus.messages import ConfirmationOutcome

if TYPE_CHECKING:
    from agentdeck.core.definition import DefinitionMetadata
    from agentdeck.core.engine import ActivityEvent
    from agentdeck.messagebus.messages import ToolConfirmationRequest


class MessageLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


CreationScope = Literal["project", "global"]
CreationMethod = Literal["manual", "generate"]


@dataclass
class CreationResult:
    """Answers collected when creating a new agent or skill."""

    name: str
    scope: CreationScope
    method: CreationMethod
    directory: Path
    description: str | None = None


class Frontend(ABC):
    """Abstract interface for frontend implementations."""

    @abstractmethod
    async def show_message(
        self, content: str, level: MessageLevel = MessageLevel.INFO
    ) -> None:
        """Display a command result or notice."""

    @abstractmethod
    async def show_system_message(self, content: str) -> None:
        """Display system-level message (goodbye, errors, interrupts)."""

    @abstractmethod
    def show_activity(self, agent_name: str, event: "ActivityEvent") -> None:
        """Display live sub-agent activity. Called synchronously by the engine."""

    @abstractmethod
    async def show_definitions(
        self,
        kind: str,
        definitions: list["DefinitionMetadata"],
        show_descriptions: bool = True,
    ) -> None:
        """Display a listing of agents or skills."""

    @abstractmethod
    async def confirm_tool(
        self, request: "ToolConfirmationRequest"
    ) -> ConfirmationOutcome:
        """Ask the user whether a sub-agent may perform a side-effecting action."""

    @abstractmethod
    async def run_creation_workflow(
        self,
        kind: str,
        initial_name: str | None,
        directories: dict[CreationScope, Path],
    ) -> CreationResult | None:
        """Collect name, scope and method for a new definition. None = cancelled."""


class SilentFrontend(Frontend):
    """No-op frontend for unattended execution."""

    async def show_message(
        self, content: str, level: MessageLevel = MessageLevel.INFO
    ) -> None:
        pass

    async def show_system_message(self, content: str) -> None:
        pass

    def show_activity(self, agent_name: str, event: "ActivityEvent") -> None:
        pass

    async def show_definitions(
        self,
        kind: str,
        definitions: list["DefinitionMetadata"],
        show_descriptions: bool = True,
    ) -> None:
        pass

    async def confirm_tool(
        self, request: "ToolConfirmationRequest"
    ) -> ConfirmationOutcome:
        return ConfirmationOutcome.REJECT

    async def run_creation_workflow(
        self,
        kind: str,
        initial_name: str | None,
        directories: dict[CreationScope, Path],
    ) -> CreationResult | None:
        return None
