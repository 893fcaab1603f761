"""Configuration management for agentdeck."""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

CONFIG_FILENAME = "config.yaml"
PROJECT_DIRNAME = ".agentdeck"

# Tools a sub-agent gets when its definition doesn't list any
DEFAULT_SUBAGENT_TOOLS = [
    "read_file",
    "write_file",
    "run_shell_command",
    "list_directory",
    "search_file_content",
]


# ============================================================================
# Configuration Models
# ============================================================================


class SettingScope(str, Enum):
    """Which settings file a write goes to."""

    USER = "user"
    WORKSPACE = "workspace"


class SubAgentConfig(BaseModel):
    """Limits and defaults applied to every sub-agent run."""

    max_time_minutes: int = Field(default=5, gt=0)
    max_turns: int = Field(default=30, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    default_tools: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SUBAGENT_TOOLS)
    )


class SkillsConfig(BaseModel):
    """Skill settings."""

    disabled: list[str] = Field(default_factory=list)


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config(BaseModel):
    """
    Main configuration for agentdeck.

    Settings are read from two files, project overriding user:
    1. <user_dir>/config.yaml - User settings (~/.agentdeck by default)
    2. <project_root>/.agentdeck/config.yaml - Workspace settings

    Pydantic defaults are used for anything neither file sets.
    """

    user_dir: Path
    project_root: Path
    engine: str | None = None
    logging_path: Path = Field(default=Path(".logs"))
    subagents: SubAgentConfig = Field(default_factory=SubAgentConfig)
    skills: SkillsConfig = Field(default_factory=SkillsConfig)

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve the logging path under user_dir."""
        if self.logging_path.is_absolute():
            raise ValueError(f"logging_path must be relative, got: {self.logging_path}")
        self.logging_path = self.user_dir / self.logging_path
        return self

    @property
    def project_dir(self) -> Path:
        return self.project_root / PROJECT_DIRNAME

    def agent_tiers(self) -> list[list[Path]]:
        """Agent directories, lowest precedence first."""
        return [[self.user_dir / "agents"], [self.project_dir / "agents"]]

    def skill_tiers(self) -> list[list[Path]]:
        """Skill directories, lowest precedence first."""
        return [[self.user_dir / "skills"], [self.project_dir / "skills"]]

    def settings_path(self, scope: SettingScope) -> Path:
        if scope == SettingScope.WORKSPACE:
            return self.project_dir / CONFIG_FILENAME
        return self.user_dir / CONFIG_FILENAME

    def preferred_scope(self) -> SettingScope:
        """Workspace scope when the project has a settings directory."""
        if self.project_dir.is_dir():
            return SettingScope.WORKSPACE
        return SettingScope.USER

    @classmethod
    def load(cls, user_dir: Path, project_root: Path) -> "Config":
        """
        Load configuration from the user and workspace settings files.

        Args:
            user_dir: User settings directory (e.g. ~/.agentdeck)
            project_root: Root of the current project

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            ValidationError: If configuration is invalid
        """
        config_data: dict[str, Any] = {
            "user_dir": user_dir,
            "project_root": project_root,
        }

        for path in (
            user_dir / CONFIG_FILENAME,
            project_root / PROJECT_DIRNAME / CONFIG_FILENAME,
        ):
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}
                config_data = cls._deep_merge(config_data, data)

        return cls.model_validate(config_data)

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _set_nested(self, obj: dict, key: str, value: Any) -> None:
        """Set a nested value in a dict using dot notation."""
        keys = key.split(".")
        for k in keys[:-1]:
            if k not in obj or not isinstance(obj[k], dict):
                obj[k] = {}
            obj = obj[k]
        obj[keys[-1]] = value

    def _update_in_memory(self, key: str, value: Any) -> None:
        """Update in-memory config, supporting nested attributes and dict keys."""
        keys = key.split(".")
        obj: Any = self
        for k in keys[:-1]:
            if isinstance(obj, dict):
                obj = obj[k]
            else:
                obj = getattr(obj, k)

        final_key = keys[-1]
        if isinstance(obj, dict):
            obj[final_key] = value
        else:
            setattr(obj, final_key, value)

    def set_value(self, scope: SettingScope, key: str, value: Any) -> Path:
        """
        Update a config value in the settings file for the given scope.

        Args:
            scope: USER or WORKSPACE settings file
            key: Config key (supports dot notation, e.g., "skills.disabled")
            value: New value

        Returns:
            Path of the settings file written
        """
        config_path = self.settings_path(scope)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            data = {}

        self._set_nested(data, key, value)

        with open(config_path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)

        self._update_in_memory(key, value)
        return config_path
