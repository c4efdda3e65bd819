"""
Configuration Models

Pydantic models for system configuration validation.
"""

import json
from pathlib import Path
from pydantic import BaseModel, Field, ValidationInfo, field_validator


DEFAULT_CONFIG_PATH = Path("config/system_params.json")


class GitHubSettings(BaseModel):
    """GitHub REST API access and fetch limits."""

    api_base_url: str = Field(default="https://api.github.com")
    repo_limit: int = Field(default=10, gt=0, le=100)
    readme_fetch_count: int = Field(default=4, ge=0)
    readme_max_chars: int = Field(default=5000, gt=0)
    user_agent: str = Field(default="github-portfolio-audit")

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("readme_fetch_count")
    @classmethod
    def validate_readme_fetch_count(cls, v: int, info: ValidationInfo) -> int:
        """README fan-out cannot exceed the number of fetched repositories."""
        repo_limit = info.data.get("repo_limit", 10)
        if v > repo_limit:
            raise ValueError(
                f"readme_fetch_count ({v}) must not exceed repo_limit ({repo_limit})"
            )
        return v


class LLMSettings(BaseModel):
    """Generative model settings."""

    model: str = Field(default="gemini-3-flash-preview")
    prompt_readme_max_chars: int = Field(
        default=1000,
        gt=0,
        description="README excerpt length embedded in the analysis prompt",
    )


class Timeouts(BaseModel):
    """Timeout configuration in seconds."""

    github_request: int = Field(default=30, gt=0)
    llm_request: int = Field(default=120, gt=0)


class OutputConfig(BaseModel):
    """Where exported resume snapshots are written."""

    resume_dir: str = Field(default="output")


class SystemParams(BaseModel):
    """System parameters configuration model."""

    github: GitHubSettings = Field(default_factory=GitHubSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    timeouts: Timeouts = Field(default_factory=Timeouts)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "SystemParams":
        """Load system parameters from config file.

        Args:
            config_path: Path to system_params.json. When omitted, the default
                config/system_params.json is used if present, otherwise all
                defaults apply.

        Returns:
            SystemParams: Validated configuration

        Raises:
            FileNotFoundError: If an explicitly given config file doesn't exist
            ValueError: If config validation fails
        """
        if config_path is None:
            if not DEFAULT_CONFIG_PATH.exists():
                return cls()
            config_path = DEFAULT_CONFIG_PATH
        else:
            config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}. "
                f"Copy {config_path.stem}.example.json to {config_path.name}"
            )

        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)

        return cls(**config_data)
