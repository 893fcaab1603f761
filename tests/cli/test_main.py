"""Tests for the agentdeck CLI."""

from unittest.mock import AsyncMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from agentdeck.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def dirs(tmp_path):
    user_dir = tmp_path / "home"
    project_root = tmp_path / "project"
    (user_dir / "agents").mkdir(parents=True)
    (project_root / ".agentdeck" / "agents").mkdir(parents=True)
    return user_dir, project_root


def invoke(runner, dirs, *args):
    user_dir, project_root = dirs
    return runner.invoke(
        app,
        ["--user-dir", str(user_dir), "--project-root", str(project_root), *args],
    )


def write_agent(directory, name, description):
    (directory / f"{name}.md").write_text(
        f"---\nname: {name}\ndescription: {description}\n---\n\nBody\n"
    )


class TestExec:
    def test_lists_agents_with_precedence(self, runner, dirs):
        user_dir, project_root = dirs
        write_agent(user_dir / "agents", "grader", "Global Grader")
        write_agent(project_root / ".agentdeck" / "agents", "grader", "Project Grader")

        result = invoke(runner, dirs, "exec", "/agents", "list")

        assert result.exit_code == 0
        assert "Available Agents:" in result.output
        assert "grader: Project Grader" in result.output
        assert "Global Grader" not in result.output

    def test_no_agents(self, runner, dirs):
        result = invoke(runner, dirs, "exec", "/agents", "list")

        assert result.exit_code == 0
        assert "No agents found." in result.output

    def test_malformed_file_does_not_break_listing(self, runner, dirs):
        _, project_root = dirs
        agents = project_root / ".agentdeck" / "agents"
        (agents / "broken.md").write_text("Invalid content")
        write_agent(agents, "good", "Works")

        result = invoke(runner, dirs, "exec", "/agents", "list")

        assert result.exit_code == 0
        assert "good: Works" in result.output
        assert "broken" not in result.output

    def test_create_writes_project_agent(self, runner, dirs):
        _, project_root = dirs

        result = invoke(runner, dirs, "exec", "/agents", "create", "reviewer")

        assert result.exit_code == 0
        path = project_root / ".agentdeck" / "agents" / "reviewer.md"
        assert path.exists()
        assert "[INFO] ✅ Created agent template at:" in result.output

    def test_error_result_exits_nonzero(self, runner, dirs):
        result = invoke(runner, dirs, "exec", "/agents", "run", "ghost", "do", "it")

        assert result.exit_code == 1
        assert '[ERROR] Agent "ghost" not found.' in result.output

    def test_unknown_command(self, runner, dirs):
        result = invoke(runner, dirs, "exec", "/bogus")

        assert result.exit_code == 1
        assert "Unknown command" in result.output

    def test_bad_engine_config(self, runner, dirs):
        user_dir, _ = dirs
        (user_dir / "config.yaml").write_text(
            yaml.safe_dump({"engine": "not_a_real_engine_module:make"})
        )

        result = invoke(runner, dirs, "exec", "/agents", "list")

        assert result.exit_code == 1
        assert "Failed to load engine" in result.output


class TestConfigLoading:
    def test_invalid_config_exits(self, runner, dirs):
        user_dir, _ = dirs
        (user_dir / "config.yaml").write_text(
            yaml.safe_dump({"subagents": {"max_turns": -1}})
        )

        result = invoke(runner, dirs, "exec", "/help")

        assert result.exit_code == 1
        assert "Error loading config" in result.output


class TestShell:
    def test_shell_runs_loop(self, runner, dirs):
        with patch("agentdeck.cli.shell.ShellLoop.run", new_callable=AsyncMock) as run:
            result = invoke(runner, dirs, "shell")

        assert result.exit_code == 0
        run.assert_awaited_once()
