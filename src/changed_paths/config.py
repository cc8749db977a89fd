"""Configuration for changed-paths."""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.github.com"


class Settings(BaseSettings):
    """Settings loaded from the GitHub Actions environment.

    Action inputs arrive as ``INPUT_<NAME>`` variables with the input name
    upper-cased and hyphens kept, so both spellings are accepted.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # Action inputs
    # ==========================================================================

    paths: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_PATHS"),
        description="Pattern spec: comma/newline separated list or JSON object of labels",
    )
    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"),
        description="Token used to authenticate against the GitHub API",
    )
    match_mode: Literal["regex", "literal"] = Field(
        default="regex",
        validation_alias=AliasChoices("INPUT_MATCH-MODE", "INPUT_MATCH_MODE"),
        description="'regex' compiles every token as a regular expression, 'literal' escapes it",
    )

    # ==========================================================================
    # Workflow context
    # ==========================================================================

    api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("GITHUB_API_URL"),
        description="GitHub REST API base URL (override for GitHub Enterprise)",
    )
    event_path: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_EVENT_PATH"),
        description="Path to the JSON payload of the triggering event",
    )
    repository: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_REPOSITORY"),
        description="Repository in 'owner/name' form",
    )
    ref: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_REF"),
        description="Ref that triggered the workflow",
    )
    sha: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_SHA"),
        description="Commit SHA that triggered the workflow",
    )
    output_path: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_OUTPUT"),
        description="File that receives step outputs; stdout when empty",
    )

    # ==========================================================================
    # Transport
    # ==========================================================================

    per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        validation_alias=AliasChoices("CHANGED_PATHS_PER_PAGE"),
        description="Files requested per page",
    )
    max_pages: int = Field(
        default=30,
        ge=1,
        validation_alias=AliasChoices("CHANGED_PATHS_MAX_PAGES"),
        description="Upper bound on pages fetched for one change set",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("CHANGED_PATHS_REQUEST_TIMEOUT"),
        description="Per-request timeout in seconds",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        validation_alias=AliasChoices("CHANGED_PATHS_MAX_RETRIES"),
        description="Retries for rate-limited or 5xx GET requests",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL"),
        description="Logging level",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset cached settings (useful for testing)."""
    global _settings
    _settings = None
