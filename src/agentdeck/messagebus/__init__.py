"""Confirmation bus between execution engines and the user."""

from agentdeck.messagebus.bus import MessageBus
from agentdeck.messagebus.confirmation import ConfirmationResponder, await_confirmation
from agentdeck.messagebus.messages import (
    ConfirmationKind,
    ConfirmationOutcome,
    MessageType,
    ToolConfirmationRequest,
    ToolConfirmationResponse,
)

__all__ = [
    "MessageBus",
    "ConfirmationResponder",
    "await_confirmation",
    "ConfirmationKind",
    "ConfirmationOutcome",
    "MessageType",
    "ToolConfirmationRequest",
    "ToolConfirmationResponse",
]
