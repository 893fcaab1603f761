"""Tests for SharedContext wiring."""

import textwrap

import pytest

from agentdeck.core.context import SharedContext
from agentdeck.core.engine import EngineLoadError, ExecutionEngine
from agentdeck.core.registry import AgentRegistry, SkillRegistry
from agentdeck.utils.config import Config


class TestSharedContext:
    def test_builds_registries_from_config(self, test_config):
        context = SharedContext(test_config)

        assert isinstance(context.agent_registry, AgentRegistry)
        assert isinstance(context.skill_registry, SkillRegistry)
        assert context.agent_registry.tiers == test_config.agent_tiers()
        assert context.engine is None
        assert context.command_registry.resolve("/agents") is not None

    def test_explicit_engine_wins(self, test_config, fake_engine):
        assert SharedContext(test_config, engine=fake_engine).engine is fake_engine

    def test_engine_loaded_from_config(self, tmp_path, monkeypatch):
        (tmp_path / "ctx_engine.py").write_text(
            textwrap.dedent(
                """
                from agentdeck.core.engine import ExecutionEngine


                class Engine(ExecutionEngine):
                    def __init__(self, config):
                        self.config = config

                    async def create(self, definition, runtime, on_activity=None):
                        raise NotImplementedError
                """
            )
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        config = Config(
            user_dir=tmp_path / "home",
            project_root=tmp_path / "project",
            engine="ctx_engine:Engine",
        )

        context = SharedContext(config)

        assert isinstance(context.engine, ExecutionEngine)
        assert context.engine.config is config

    def test_bad_engine_spec_raises(self, tmp_path):
        config = Config(
            user_dir=tmp_path / "home",
            project_root=tmp_path / "project",
            engine="missing_engine_module:make",
        )
        with pytest.raises(EngineLoadError):
            SharedContext(config)

    @pytest.mark.anyio
    async def test_discover_and_tool_registry(
        self, test_context, project_agents_dir, user_skills_dir, write_def
    ):
        write_def(project_agents_dir, "grader")
        write_def(user_skills_dir, "docs")

        await test_context.discover()
        tools = test_context.build_tool_registry()

        assert tools.get("agent_grader") is not None
        assert tools.get("activate_skill") is not None
