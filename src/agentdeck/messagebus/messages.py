"""Message types carried on the confirmation bus."""

import uuid
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    TOOL_CONFIRMATION_REQUEST = "tool-confirmation-request"
    TOOL_CONFIRMATION_RESPONSE = "tool-confirmation-response"


class ConfirmationKind(str, Enum):
    """What the engine wants approved."""

    EXEC = "exec"
    EDIT = "edit"
    MCP = "mcp"
    INFO = "info"


class ConfirmationOutcome(str, Enum):
    PROCEED_ONCE = "proceed_once"
    PROCEED_ALWAYS = "proceed_always"
    REJECT = "reject"


def new_correlation_id() -> str:
    return str(uuid.uuid4())


class ToolConfirmationRequest(BaseModel):
    """
    Raised by an engine before a side-effecting tool call.

    For EXEC requests, details["commands"] holds the command list.
    run_id ties the request to the sub-agent run that raised it.
    """

    type: Literal[MessageType.TOOL_CONFIRMATION_REQUEST] = (
        MessageType.TOOL_CONFIRMATION_REQUEST
    )
    correlation_id: str = Field(default_factory=new_correlation_id)
    confirmation: ConfirmationKind
    tool_name: str = ""
    agent_name: str | None = None
    run_id: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @property
    def commands(self) -> list[str]:
        return list(self.details.get("commands", []))


class ToolConfirmationResponse(BaseModel):
    """The user's decision for one request, echoing its correlation_id."""

    type: Literal[MessageType.TOOL_CONFIRMATION_RESPONSE] = (
        MessageType.TOOL_CONFIRMATION_RESPONSE
    )
    correlation_id: str
    outcome: ConfirmationOutcome
    approved_commands: list[str] | None = None

    @property
    def confirmed(self) -> bool:
        return self.outcome != ConfirmationOutcome.REJECT


BusMessage = ToolConfirmationRequest | ToolConfirmationResponse
