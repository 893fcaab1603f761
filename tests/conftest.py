"""Shared test fixtures for agentdeck test suite."""

import asyncio
from pathlib import Path
from typing import Any, Callable

import pytest

from agentdeck.core.cancellation import CancellationToken
from agentdeck.core.context import SharedContext
from agentdeck.core.engine import (
    ActivityCallback,
    ActivityEvent,
    AgentOutput,
    ExecutionEngine,
    Executor,
    RuntimeContext,
    TaskDefinition,
    TerminateReason,
)
from agentdeck.messagebus.messages import ToolConfirmationRequest
from agentdeck.utils.config import Config


class FakeExecutor(Executor):
    """Executor scripted by its FakeEngine."""

    def __init__(
        self,
        engine: "FakeEngine",
        definition: TaskDefinition,
        runtime: RuntimeContext,
        on_activity: ActivityCallback | None,
    ):
        self.engine = engine
        self.definition = definition
        self.runtime = runtime
        self.on_activity = on_activity

    async def run(
        self, inputs: dict[str, Any], cancel_token: CancellationToken
    ) -> AgentOutput:
        engine = self.engine
        engine.runs.append(inputs)
        engine.tokens.append(cancel_token)

        for event in engine.events:
            if self.on_activity:
                self.on_activity(event)

        if engine.confirmation is not None and self.runtime.message_bus is not None:
            engine.responses.append(
                await self.runtime.request_confirmation(engine.confirmation, timeout=1)
            )

        if engine.wait_for_cancel:
            engine.started.set()
            await cancel_token.wait()
            if engine.run_error is not None:
                raise engine.run_error
            return AgentOutput(
                result="partial", terminate_reason=TerminateReason.CANCELLED
            )

        if engine.run_error is not None:
            raise engine.run_error

        if cancel_token.cancelled:
            return AgentOutput(result="", terminate_reason=TerminateReason.CANCELLED)

        return AgentOutput(result=engine.result, terminate_reason=engine.reason)


class FakeEngine(ExecutionEngine):
    """Stands in for the external execution engine."""

    def __init__(self, config: Config | None = None):
        self.config = config
        self.result = "done"
        self.reason = TerminateReason.GOAL
        self.events: list[ActivityEvent] = []
        self.create_error: Exception | None = None
        self.run_error: Exception | None = None
        self.wait_for_cancel = False
        self.confirmation: ToolConfirmationRequest | None = None
        self.started = asyncio.Event()

        self.definitions: list[TaskDefinition] = []
        self.runtimes: list[RuntimeContext] = []
        self.runs: list[dict[str, Any]] = []
        self.tokens: list[CancellationToken] = []
        self.responses: list[Any] = []

    async def create(
        self,
        definition: TaskDefinition,
        runtime: RuntimeContext,
        on_activity: ActivityCallback | None = None,
    ) -> Executor:
        if self.create_error is not None:
            raise self.create_error
        self.definitions.append(definition)
        self.runtimes.append(runtime)
        return FakeExecutor(self, definition, runtime, on_activity)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with user and project directories under tmp_path."""
    return Config(user_dir=tmp_path / "home", project_root=tmp_path / "project")


@pytest.fixture
def user_agents_dir(test_config: Config) -> Path:
    agents_dir = test_config.user_dir / "agents"
    agents_dir.mkdir(parents=True)
    return agents_dir


@pytest.fixture
def project_agents_dir(test_config: Config) -> Path:
    agents_dir = test_config.project_dir / "agents"
    agents_dir.mkdir(parents=True)
    return agents_dir


@pytest.fixture
def user_skills_dir(test_config: Config) -> Path:
    skills_dir = test_config.user_dir / "skills"
    skills_dir.mkdir(parents=True)
    return skills_dir


@pytest.fixture
def project_skills_dir(test_config: Config) -> Path:
    skills_dir = test_config.project_dir / "skills"
    skills_dir.mkdir(parents=True)
    return skills_dir


@pytest.fixture
def write_def() -> Callable[..., Path]:
    """Write a definition file: write_def(directory, name, description=..., **extra)."""

    def _write(
        directory: Path,
        name: str,
        description: str = "A test definition",
        body: str = "You are a test assistant.",
        filename: str | None = None,
        **extra: Any,
    ) -> Path:
        lines = ["---", f"name: {name}", f"description: {description}"]
        for key, value in extra.items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            lines.append(f"{key}: {value}")
        lines.extend(["---", "", body, ""])

        path = directory / (filename or f"{name}.md")
        path.write_text("\n".join(lines))
        return path

    return _write


@pytest.fixture
def fake_engine(test_config: Config) -> FakeEngine:
    return FakeEngine(test_config)


@pytest.fixture
def test_context(test_config: Config, fake_engine: FakeEngine) -> SharedContext:
    """SharedContext wired to the fake engine."""
    return SharedContext(config=test_config, engine=fake_engine)


@pytest.fixture
def make_engine(test_config: Config) -> Callable[[], FakeEngine]:
    """Factory for extra engines when a test needs more than one."""
    return lambda: FakeEngine(test_config)
