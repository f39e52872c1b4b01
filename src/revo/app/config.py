from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..infra.llm_adapters import Provider


APP_NAME = "revo"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_cache_dir)


class DirectoryConfig(BaseSettings):
    """Directory configuration with computed paths."""

    model_config = SettingsConfigDict(env_prefix="REVO_DIRECTORIES__")

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all revo data",
    )

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Logs directory for run logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class GitHubConfig(BaseSettings):
    """GitHub configuration."""

    model_config = SettingsConfigDict(env_prefix="REVO_GITHUB__")

    token: str | None = Field(
        default=None,
        description="GitHub personal access token (optional, raises the rate limit)",
    )

    api_base: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )

    raw_base: str = Field(
        default="https://raw.githubusercontent.com",
        description="Raw content host base URL",
    )

    timeout: float | None = Field(
        default=None,
        description="Per-request timeout in seconds (None = transport default)",
    )


class SamplingConfig(BaseSettings):
    """Limits applied to every sampling run."""

    model_config = SettingsConfigDict(env_prefix="REVO_SAMPLING__")

    sample_limit: int = Field(default=15, gt=0, description="Maximum number of files to sample")
    max_snippet_length: int = Field(default=1000, gt=0, description="Maximum characters per snippet")
    concurrency: int = Field(default=4, gt=0, description="Concurrent raw content fetches")
    inline_batch_pause: float = Field(
        default=0.02,
        ge=0,
        description="Seconds to pause between fetch batches when running inline",
    )
    idle_delay: float = Field(
        default=0.05,
        ge=0,
        description="Seconds an inline run waits before starting",
    )
    run_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Seconds a caller waits for a run's message",
    )


class LLMConfig(BaseSettings):
    """LLM configuration."""

    model_config = SettingsConfigDict(env_prefix="REVO_LLM__")

    api_key: str | None = Field(
        default=None,
        description="LLM API key (Groq, OpenAI or Anthropic)",
    )

    provider_name: Provider = Field(
        default="groq",
        description="LLM provider (groq, openai, anthropic)",
    )

    model_name: str = Field(
        default="llama-3.1-8b-instant",
        description="LLM model name",
    )

    summary_max_tokens: int = Field(default=850, gt=0)
    summary_temperature: float = Field(default=0.4, ge=0)
    answer_max_tokens: int = Field(default=600, gt=0)
    answer_temperature: float = Field(default=0.3, ge=0)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="REVO_LOGGING__")

    logger_name: str = Field(default="revo")
    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR")
    console_output: bool = Field(default=False, description="Human-readable console output")
    json_file: str | None = Field(
        default=None,
        description="JSONL log file name under the logs directory (None = no file)",
    )


class ServerConfig(BaseSettings):
    """HTTP proxy configuration."""

    model_config = SettingsConfigDict(env_prefix="REVO_SERVER__")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with REVO_ prefix.
    Use double underscore for nested config: REVO_LLM__API_KEY

    Example env vars:
        export REVO_GITHUB__TOKEN=ghp_xxxxxxxxxxxxx
        export REVO_LLM__API_KEY=gsk_xxxxxxxxxxxxx

        # Optional (with defaults)
        export REVO_LLM__PROVIDER_NAME=groq
        export REVO_LLM__MODEL_NAME=llama-3.1-8b-instant
        export REVO_SAMPLING__SAMPLE_LIMIT=15
        export REVO_SAMPLING__CONCURRENCY=4
        export REVO_DIRECTORIES__HOME=/custom/path
    """

    model_config = SettingsConfigDict(
        env_prefix="REVO_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
