"""Boundary with the external task-execution engine.

agentdeck never drives models or tools itself. An engine turns a
TaskDefinition into an Executor, and the executor runs it to completion
while reporting activity through a callback.
"""

import importlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from pydantic import BaseModel, Field

from agentdeck.core.cancellation import CancellationToken
from agentdeck.messagebus.confirmation import await_confirmation

if TYPE_CHECKING:
    from agentdeck.messagebus.bus import MessageBus
    from agentdeck.messagebus.messages import (
        ToolConfirmationRequest,
        ToolConfirmationResponse,
    )
    from agentdeck.utils.config import Config


class TerminateReason(str, Enum):
    """Why an executor stopped."""

    GOAL = "GOAL"
    MAX_TURNS = "MAX_TURNS"
    TIMEOUT = "TIMEOUT"
    CANCELLED = "CANCELLED"
    ERROR = "ERROR"


class ActivityType(str, Enum):
    """Well-known activity kinds. Engines may emit others."""

    THOUGHT_CHUNK = "THOUGHT_CHUNK"
    TOOL_CALL_START = "TOOL_CALL_START"
    TOOL_CALL_END = "TOOL_CALL_END"
    ERROR = "ERROR"


@dataclass
class ActivityEvent:
    """A unit of progress reported by a running sub-agent."""

    agent_name: str
    type: str
    data: dict[str, Any] = field(default_factory=dict)


ActivityCallback = Callable[[ActivityEvent], None]


# ============================================================================
# Task definition handed to the engine
# ============================================================================


class InputSpec(BaseModel):
    description: str
    type: str = "string"
    required: bool = True


class PromptConfig(BaseModel):
    system_prompt: str
    query: str = "${task}"


class ModelConfig(BaseModel):
    model: str
    temperature: float
    top_p: float


class RunConfig(BaseModel):
    max_time_minutes: int
    max_turns: int


class ToolConfig(BaseModel):
    tools: list[str]


class TaskDefinition(BaseModel):
    """Structured definition of one sub-agent task."""

    name: str
    description: str = ""
    inputs: dict[str, InputSpec]
    prompt: PromptConfig
    model: ModelConfig
    run: RunConfig
    tools: ToolConfig = Field(default_factory=lambda: ToolConfig(tools=[]))


class AgentOutput(BaseModel):
    """Final result of an executor run."""

    result: str
    terminate_reason: TerminateReason


@dataclass
class RuntimeContext:
    """Runtime collaborators an engine may use while executing."""

    config: "Config"
    message_bus: "MessageBus | None" = None
    run_id: str | None = None

    async def request_confirmation(
        self, request: "ToolConfirmationRequest", timeout: float | None = None
    ) -> "ToolConfirmationResponse":
        """
        Ask the caller to approve a tool call made during this run.

        The request is stamped with this run's run_id so only the run's own
        confirmation handler answers it.

        Raises:
            RuntimeError: If the run has no message bus
            asyncio.TimeoutError: If no response arrives in time
        """
        if self.message_bus is None:
            raise RuntimeError("No message bus available for confirmations")
        stamped = request.model_copy(update={"run_id": self.run_id})
        return await await_confirmation(self.message_bus, stamped, timeout)


# ============================================================================
# Engine interface
# ============================================================================


class Executor(ABC):
    """A single prepared run of a TaskDefinition."""

    @abstractmethod
    async def run(
        self, inputs: dict[str, Any], cancel_token: CancellationToken
    ) -> AgentOutput:
        """
        Run the task until it terminates.

        Args:
            inputs: Values for the definition's declared inputs
            cancel_token: Cooperative cancellation signal to honour

        Returns:
            AgentOutput with the engine's own terminate reason
        """


class ExecutionEngine(ABC):
    """Factory for executors."""

    @abstractmethod
    async def create(
        self,
        definition: TaskDefinition,
        runtime: RuntimeContext,
        on_activity: ActivityCallback | None = None,
    ) -> Executor:
        """
        Prepare an executor for the definition.

        Raises:
            Any exception if the definition can't be executed
        """


class EngineLoadError(Exception):
    """The configured engine couldn't be imported or constructed."""

    def __init__(self, spec: str, reason: str):
        super().__init__(f"Failed to load engine '{spec}': {reason}")
        self.spec = spec
        self.reason = reason


def load_engine(spec: str, config: "Config") -> ExecutionEngine:
    """
    Import and build an engine from a "module:attribute" spec.

    The attribute is called with the Config and must return an
    ExecutionEngine (a subclass itself works when its __init__ takes config).

    Raises:
        EngineLoadError: On a bad spec, import failure or wrong type
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise EngineLoadError(spec, "expected 'module:attribute'")

    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise EngineLoadError(spec, str(e)) from e

    try:
        engine = factory(config)
    except Exception as e:
        raise EngineLoadError(spec, str(e)) from e

    if not isinstance(engine, ExecutionEngine):
        raise EngineLoadError(spec, f"{type(engine).__name__} is not an ExecutionEngine")

    return engine
