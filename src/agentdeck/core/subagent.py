"""Running a discovered agent definition through the execution engine."""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from agentdeck.core.cancellation import CancellationToken
from agentdeck.core.definition import INHERIT_MODEL, DefinitionMetadata
from agentdeck.core.engine import (
    ActivityCallback,
    AgentOutput,
    ExecutionEngine,
    InputSpec,
    ModelConfig,
    PromptConfig,
    RunConfig,
    RuntimeContext,
    TaskDefinition,
    TerminateReason,
    ToolConfig,
)
from agentdeck.messagebus.bus import MessageBus
from agentdeck.messagebus.messages import MessageType, new_correlation_id
from agentdeck.utils.config import Config, SubAgentConfig

logger = logging.getLogger(__name__)

TASK_INPUT = "task"

ConfirmationHandler = Callable[[Any], Awaitable[None] | None]


class SubAgentError(Exception):
    """Base class for sub-agent orchestration failures."""

    def __init__(self, agent_name: str, message: str):
        super().__init__(message)
        self.agent_name = agent_name


class SubAgentCreationError(SubAgentError):
    """The engine refused to build an executor for the definition."""


class SubAgentRunError(SubAgentError):
    """The executor failed while running."""


def build_task_definition(
    metadata: DefinitionMetadata, settings: SubAgentConfig
) -> TaskDefinition:
    """
    Translate agent metadata into the engine's task definition.

    Agents without a tools list get the default action-oriented tool set.
    """
    tools = metadata.tools if metadata.tools is not None else settings.default_tools

    return TaskDefinition(
        name=metadata.name,
        description=metadata.description,
        inputs={
            TASK_INPUT: InputSpec(description="The task to perform"),
        },
        prompt=PromptConfig(
            system_prompt=metadata.body,
            query=f"${{{TASK_INPUT}}}",
        ),
        model=ModelConfig(
            model=metadata.model or INHERIT_MODEL,
            temperature=settings.temperature,
            top_p=settings.top_p,
        ),
        run=RunConfig(
            max_time_minutes=settings.max_time_minutes,
            max_turns=settings.max_turns,
        ),
        tools=ToolConfig(tools=list(tools)),
    )


@dataclass
class SubAgentContext:
    """What a SubAgent needs from its caller."""

    config: Config
    engine: ExecutionEngine
    message_bus: MessageBus | None = None
    on_confirmation: ConfirmationHandler | None = None


class SubAgent:
    """
    One agent definition bound to an execution engine.

    Every run() is independent; nothing is shared between concurrent runs.
    """

    def __init__(self, metadata: DefinitionMetadata, context: SubAgentContext):
        self.metadata = metadata
        self.context = context

    async def run(
        self,
        task: str,
        on_activity: ActivityCallback | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> AgentOutput:
        """
        Run a task with this agent.

        Activity events go straight from the engine to on_activity. The
        cancellation token is forwarded untouched; a run that fails after it
        was cancelled is reported as CANCELLED, not as an error.

        Args:
            task: Free-text task for the sub-agent
            on_activity: Callback for live activity events
            cancel_token: Caller's cancellation signal

        Returns:
            AgentOutput exactly as the engine produced it

        Raises:
            SubAgentCreationError: Engine couldn't build an executor
            SubAgentRunError: Executor raised during the run
        """
        name = self.metadata.name
        definition = build_task_definition(self.metadata, self.context.config.subagents)
        run_id = new_correlation_id()
        runtime = RuntimeContext(
            config=self.context.config,
            message_bus=self.context.message_bus,
            run_id=run_id,
        )
        token = cancel_token if cancel_token is not None else CancellationToken()

        try:
            executor = await self.context.engine.create(definition, runtime, on_activity)
        except Exception as e:
            logger.error(f"Failed to create executor for sub-agent '{name}': {e}")
            raise SubAgentCreationError(name, str(e)) from e

        logger.info(f"Running sub-agent '{name}'")
        with self._confirmation_subscription(run_id):
            try:
                output = await executor.run({TASK_INPUT: task}, token)
            except Exception as e:
                if token.cancelled:
                    logger.info(f"Sub-agent '{name}' stopped after cancellation: {e}")
                    return AgentOutput(result="", terminate_reason=TerminateReason.CANCELLED)
                logger.error(f"Sub-agent '{name}' failed: {e}")
                raise SubAgentRunError(name, str(e)) from e

        logger.info(
            f"Sub-agent '{name}' finished: {output.terminate_reason.value}"
        )
        return output

    def _confirmation_subscription(self, run_id: str):
        bus = self.context.message_bus
        handler = self.context.on_confirmation
        if bus is None or handler is None:
            return nullcontext()

        # The bus is shared by concurrent runs; answer only this run's requests
        def on_request(request: Any) -> Awaitable[None] | None:
            if request.run_id != run_id:
                return None
            return handler(request)

        return bus.subscription(MessageType.TOOL_CONFIRMATION_REQUEST, on_request)
