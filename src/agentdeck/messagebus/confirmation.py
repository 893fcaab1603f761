"""Both ends of the tool-confirmation handshake."""

import asyncio
import logging
from typing import TYPE_CHECKING

from agentdeck.messagebus.bus import MessageBus
from agentdeck.messagebus.messages import (
    ConfirmationKind,
    ConfirmationOutcome,
    MessageType,
    ToolConfirmationRequest,
    ToolConfirmationResponse,
)

if TYPE_CHECKING:
    from agentdeck.frontend.base import Frontend

logger = logging.getLogger(__name__)


class ConfirmationResponder:
    """
    Answers confirmation requests by asking the frontend.

    Used as the request handler while a sub-agent runs; each request gets
    exactly one response carrying the request's correlation_id.
    """

    def __init__(self, bus: MessageBus, frontend: "Frontend"):
        self.bus = bus
        self.frontend = frontend

    async def __call__(self, request: ToolConfirmationRequest) -> None:
        try:
            outcome = await self.frontend.confirm_tool(request)
        except Exception as e:
            logger.error(f"Confirmation prompt failed, rejecting: {e}")
            outcome = ConfirmationOutcome.REJECT

        approved: list[str] | None = None
        if request.confirmation == ConfirmationKind.EXEC:
            approved = (
                request.commands if outcome != ConfirmationOutcome.REJECT else []
            )

        logger.info(
            f"Tool confirmation {request.correlation_id} "
            f"({request.tool_name or request.confirmation.value}): {outcome.value}"
        )
        await self.bus.publish(
            ToolConfirmationResponse(
                correlation_id=request.correlation_id,
                outcome=outcome,
                approved_commands=approved,
            )
        )


async def await_confirmation(
    bus: MessageBus,
    request: ToolConfirmationRequest,
    timeout: float | None = None,
) -> ToolConfirmationResponse:
    """
    Publish a request and wait for the response with the same correlation_id.

    This is the engine side of the handshake; responses for other
    correlation ids are ignored.

    Raises:
        asyncio.TimeoutError: If no matching response arrives in time
    """
    future: asyncio.Future[ToolConfirmationResponse] = (
        asyncio.get_running_loop().create_future()
    )

    def on_response(response: ToolConfirmationResponse) -> None:
        if response.correlation_id == request.correlation_id and not future.done():
            future.set_result(response)

    with bus.subscription(MessageType.TOOL_CONFIRMATION_RESPONSE, on_response):
        await bus.publish(request)
        return await asyncio.wait_for(future, timeout)
