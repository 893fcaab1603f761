"""Tests for configuration loading and persistence."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from agentdeck.utils.config import DEFAULT_SUBAGENT_TOOLS, Config, SettingScope


@pytest.fixture
def user_dir(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


def write_yaml(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))


class TestConfigDefaults:
    def test_defaults(self, user_dir, project_root):
        config = Config(user_dir=user_dir, project_root=project_root)

        assert config.engine is None
        assert config.subagents.max_time_minutes == 5
        assert config.subagents.max_turns == 30
        assert config.subagents.temperature == 0.7
        assert config.subagents.top_p == 0.95
        assert config.subagents.default_tools == DEFAULT_SUBAGENT_TOOLS
        assert config.skills.disabled == []

    def test_logging_path_resolved_under_user_dir(self, user_dir, project_root):
        config = Config(user_dir=user_dir, project_root=project_root)
        assert config.logging_path == user_dir / ".logs"

    def test_absolute_logging_path_rejected(self, user_dir, project_root):
        with pytest.raises(ValidationError):
            Config(user_dir=user_dir, project_root=project_root, logging_path="/var/log")

    def test_tiers_lowest_precedence_first(self, user_dir, project_root):
        config = Config(user_dir=user_dir, project_root=project_root)

        assert config.agent_tiers() == [
            [user_dir / "agents"],
            [project_root / ".agentdeck" / "agents"],
        ]
        assert config.skill_tiers() == [
            [user_dir / "skills"],
            [project_root / ".agentdeck" / "skills"],
        ]

    def test_invalid_limits_rejected(self, user_dir, project_root):
        with pytest.raises(ValidationError):
            Config(
                user_dir=user_dir,
                project_root=project_root,
                subagents={"max_turns": 0},
            )


class TestConfigLoad:
    def test_load_without_files(self, user_dir, project_root):
        config = Config.load(user_dir, project_root)
        assert config.user_dir == user_dir
        assert config.project_root == project_root

    def test_project_overrides_user(self, user_dir, project_root):
        write_yaml(
            user_dir / "config.yaml",
            {"engine": "user.engine:make", "subagents": {"max_turns": 10, "top_p": 0.5}},
        )
        write_yaml(
            project_root / ".agentdeck" / "config.yaml",
            {"subagents": {"max_turns": 3}},
        )

        config = Config.load(user_dir, project_root)

        assert config.engine == "user.engine:make"
        assert config.subagents.max_turns == 3
        # Deep merge keeps sibling keys from the user file
        assert config.subagents.top_p == 0.5

    def test_empty_file_is_ignored(self, user_dir, project_root):
        (user_dir / "config.yaml").write_text("")
        config = Config.load(user_dir, project_root)
        assert config.engine is None


class TestSetValue:
    def test_preferred_scope(self, user_dir, project_root):
        config = Config(user_dir=user_dir, project_root=project_root)
        assert config.preferred_scope() == SettingScope.USER

        (project_root / ".agentdeck").mkdir()
        assert config.preferred_scope() == SettingScope.WORKSPACE

    def test_writes_user_file_and_memory(self, user_dir, project_root):
        config = Config(user_dir=user_dir, project_root=project_root)

        path = config.set_value(SettingScope.USER, "skills.disabled", ["docs"])

        assert path == user_dir / "config.yaml"
        assert yaml.safe_load(path.read_text()) == {"skills": {"disabled": ["docs"]}}
        assert config.skills.disabled == ["docs"]

    def test_preserves_other_keys(self, user_dir, project_root):
        settings = project_root / ".agentdeck" / "config.yaml"
        write_yaml(settings, {"engine": "my.engine:make"})
        config = Config.load(user_dir, project_root)

        config.set_value(SettingScope.WORKSPACE, "skills.disabled", ["a"])

        data = yaml.safe_load(settings.read_text())
        assert data["engine"] == "my.engine:make"
        assert data["skills"]["disabled"] == ["a"]

    def test_value_survives_reload(self, user_dir, project_root):
        config = Config(user_dir=user_dir, project_root=project_root)
        config.set_value(SettingScope.USER, "subagents.max_turns", 7)

        assert Config.load(user_dir, project_root).subagents.max_turns == 7
