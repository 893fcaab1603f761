"""Tests for the tool-confirmation handshake."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from agentdeck.messagebus.bus import MessageBus
from agentdeck.messagebus.confirmation import ConfirmationResponder, await_confirmation
from agentdeck.messagebus.messages import (
    ConfirmationKind,
    ConfirmationOutcome,
    MessageType,
    ToolConfirmationRequest,
    ToolConfirmationResponse,
)


def make_frontend(outcome=ConfirmationOutcome.PROCEED_ONCE):
    frontend = AsyncMock()
    frontend.confirm_tool.return_value = outcome
    return frontend


@pytest.mark.anyio
class TestConfirmationResponder:
    async def test_publishes_correlated_response(self):
        bus = MessageBus()
        responses = []
        bus.subscribe(MessageType.TOOL_CONFIRMATION_RESPONSE, responses.append)
        frontend = make_frontend(ConfirmationOutcome.PROCEED_ALWAYS)
        request = ToolConfirmationRequest(confirmation=ConfirmationKind.EDIT)

        await ConfirmationResponder(bus, frontend)(request)

        frontend.confirm_tool.assert_awaited_once_with(request)
        assert len(responses) == 1
        assert responses[0].correlation_id == request.correlation_id
        assert responses[0].outcome == ConfirmationOutcome.PROCEED_ALWAYS
        assert responses[0].approved_commands is None

    async def test_exec_approval_carries_commands(self):
        bus = MessageBus()
        responses = []
        bus.subscribe(MessageType.TOOL_CONFIRMATION_RESPONSE, responses.append)
        request = ToolConfirmationRequest(
            confirmation=ConfirmationKind.EXEC, details={"commands": ["make test"]}
        )

        await ConfirmationResponder(bus, make_frontend())(request)

        assert responses[0].approved_commands == ["make test"]

    async def test_exec_rejection_approves_nothing(self):
        bus = MessageBus()
        responses = []
        bus.subscribe(MessageType.TOOL_CONFIRMATION_RESPONSE, responses.append)
        request = ToolConfirmationRequest(
            confirmation=ConfirmationKind.EXEC, details={"commands": ["rm -rf /"]}
        )

        await ConfirmationResponder(bus, make_frontend(ConfirmationOutcome.REJECT))(request)

        assert not responses[0].confirmed
        assert responses[0].approved_commands == []

    async def test_frontend_error_rejects(self):
        bus = MessageBus()
        responses = []
        bus.subscribe(MessageType.TOOL_CONFIRMATION_RESPONSE, responses.append)
        frontend = AsyncMock()
        frontend.confirm_tool.side_effect = RuntimeError("no tty")

        await ConfirmationResponder(bus, frontend)(
            ToolConfirmationRequest(confirmation=ConfirmationKind.MCP)
        )

        assert responses[0].outcome == ConfirmationOutcome.REJECT


@pytest.mark.anyio
class TestAwaitConfirmation:
    async def test_round_trip_through_responder(self):
        bus = MessageBus()
        bus.subscribe(
            MessageType.TOOL_CONFIRMATION_REQUEST,
            ConfirmationResponder(bus, make_frontend()),
        )
        request = ToolConfirmationRequest(confirmation=ConfirmationKind.INFO)

        response = await await_confirmation(bus, request, timeout=1)

        assert response.correlation_id == request.correlation_id
        assert response.confirmed
        assert bus.subscriber_count(MessageType.TOOL_CONFIRMATION_RESPONSE) == 0

    async def test_ignores_other_correlation_ids(self):
        bus = MessageBus()
        request = ToolConfirmationRequest(confirmation=ConfirmationKind.EDIT)

        async def answer_wrong_then_right(message):
            await bus.publish(
                ToolConfirmationResponse(
                    correlation_id="someone-else", outcome=ConfirmationOutcome.PROCEED_ONCE
                )
            )
            await bus.publish(
                ToolConfirmationResponse(
                    correlation_id=message.correlation_id,
                    outcome=ConfirmationOutcome.REJECT,
                )
            )

        bus.subscribe(MessageType.TOOL_CONFIRMATION_REQUEST, answer_wrong_then_right)

        response = await await_confirmation(bus, request, timeout=1)

        assert response.outcome == ConfirmationOutcome.REJECT

    async def test_times_out_without_responder(self):
        bus = MessageBus()
        request = ToolConfirmationRequest(confirmation=ConfirmationKind.EDIT)

        with pytest.raises(asyncio.TimeoutError):
            await await_confirmation(bus, request, timeout=0.01)

        assert bus.subscriber_count(MessageType.TOOL_CONFIRMATION_RESPONSE) == 0
