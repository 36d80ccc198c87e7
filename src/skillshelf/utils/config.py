"""Configuration management for skillshelf."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

CONFIG_FILENAME = "skillshelf.yaml"
LOCAL_CONFIG_FILENAME = "skillshelf.local.yaml"

DEFAULT_RESOURCE_DIRS = [
    "references",
    "documentation",
    "examples",
    "scripts",
    "assets",
]


# ============================================================================
# Configuration Models
# ============================================================================


class LintConfig(BaseModel):
    """Structural conventions enforced over the skill corpus."""

    max_lines: int = Field(default=500, gt=0)
    max_skill_lines: int | None = Field(default=None, gt=0)
    max_reference_lines: int | None = Field(default=None, gt=0)
    resource_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RESOURCE_DIRS)
    )
    required_fields: list[str] = Field(default_factory=lambda: ["name", "description"])
    max_name_length: int = Field(default=64, gt=0)
    max_description_length: int = Field(default=1024, gt=0)
    disabled_rules: list[str] = Field(default_factory=list)
    severity_overrides: dict[str, Literal["error", "warning"]] = Field(
        default_factory=dict
    )

    @field_validator("resource_dirs")
    @classmethod
    def resource_dirs_must_be_plain_names(cls, v: list[str]) -> list[str]:
        for name in v:
            if not name or "/" in name or "\\" in name or name in (".", ".."):
                raise ValueError(f"resource_dirs entries must be plain names: {name!r}")
        return v

    @property
    def skill_line_limit(self) -> int:
        """Tier 1 (SKILL.md) line ceiling."""
        return self.max_skill_lines or self.max_lines

    @property
    def reference_line_limit(self) -> int:
        """Tier 2 (deep-dive document) line ceiling."""
        return self.max_reference_lines or self.max_lines


class ApiConfig(BaseModel):
    """HTTP API configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config(BaseModel):
    """
    Main configuration for skillshelf.

    Configuration is loaded from the corpus repository root (the workspace):
    1. skillshelf.yaml - Shared configuration, committed with the corpus
    2. skillshelf.local.yaml - Local overrides (optional, overrides shared)

    Both files are optional. Pydantic defaults are used for anything not
    specified, so a bare checkout of a skill corpus lints out of the box.
    """

    workspace: Path
    skills_path: Path = Field(default=Path("skills"))
    logging_path: Path | None = None
    lint: LintConfig = Field(default_factory=LintConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve relative paths to absolute using workspace."""
        for field_name in ("skills_path", "logging_path"):
            path = getattr(self, field_name)
            if path is None:
                continue
            if path.is_absolute():
                raise ValueError(f"{field_name} must be relative, got: {path}")
            setattr(self, field_name, self.workspace / path)
        return self

    @classmethod
    def load(cls, workspace_dir: Path) -> "Config":
        """
        Load configuration from a corpus repository.

        Args:
            workspace_dir: Path to the corpus root

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            FileNotFoundError: If the workspace directory doesn't exist
            yaml.YAMLError: If a config file is not valid YAML
            ValidationError: If configuration is invalid
        """
        if not workspace_dir.is_dir():
            raise FileNotFoundError(f"Workspace not found: {workspace_dir}")

        config_data: dict[str, Any] = {"workspace": workspace_dir}

        for filename in (CONFIG_FILENAME, LOCAL_CONFIG_FILENAME):
            config_file = workspace_dir / filename
            if config_file.exists():
                with open(config_file) as f:
                    file_data = yaml.safe_load(f) or {}
                if not isinstance(file_data, dict):
                    raise ValueError(f"{config_file} must contain a mapping")
                config_data = cls._deep_merge(config_data, file_data)

        # workspace always comes from the caller
        config_data["workspace"] = workspace_dir
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
