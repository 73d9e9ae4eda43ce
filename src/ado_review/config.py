# src/ado_review/config.py
import logging
from pathlib import Path
import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from ado_review.models.config import RepoConfig


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Pipeline task inputs and Azure Pipelines predefined variables."""

    model_config = SettingsConfigDict(env_file=".env", populate_by_name=True, extra="ignore")

    # Secrets
    azure_devops_token: str = Field(
        validation_alias=AliasChoices("INPUT_AZURE_DEVOPS_TOKEN", "SYSTEM_ACCESSTOKEN", "azure_devops_token"),
    )
    openai_api_key: str = Field(validation_alias=AliasChoices("INPUT_OPENAI_API_KEY", "openai_api_key"))

    # Review options
    exclude: str = Field(default="", validation_alias=AliasChoices("INPUT_EXCLUDE", "exclude"))
    model: str = Field(default="gpt-4", validation_alias=AliasChoices("INPUT_MODEL", "model"))
    openai_base_url: str | None = Field(
        default=None, validation_alias=AliasChoices("INPUT_OPENAI_BASE_URL", "openai_base_url")
    )
    max_concurrency: int = Field(
        default=4, ge=1, validation_alias=AliasChoices("INPUT_MAX_CONCURRENCY", "max_concurrency")
    )
    review_timeout: float | None = Field(
        default=None, gt=0, validation_alias=AliasChoices("INPUT_REVIEW_TIMEOUT", "review_timeout")
    )
    config_file: str = Field(
        default=".ai-review.yaml", validation_alias=AliasChoices("INPUT_CONFIG_FILE", "config_file")
    )
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("INPUT_LOG_LEVEL", "log_level"))

    # Azure Pipelines
    collection_uri: str = Field(
        default="https://dev.azure.com/", validation_alias=AliasChoices("SYSTEM_COLLECTIONURI", "collection_uri")
    )
    team_project: str = Field(default="", validation_alias=AliasChoices("SYSTEM_TEAMPROJECT", "team_project"))
    repository_name: str = Field(
        default="", validation_alias=AliasChoices("BUILD_REPOSITORY_NAME", "repository_name")
    )
    pull_request_id: int | None = Field(
        default=None, validation_alias=AliasChoices("SYSTEM_PULLREQUEST_PULLREQUESTID", "pull_request_id")
    )
    sources_directory: str = Field(
        default=".", validation_alias=AliasChoices("BUILD_SOURCESDIRECTORY", "sources_directory")
    )

    @property
    def exclude_patterns(self) -> list[str]:
        """Comma-separated `exclude` input as a list; empty means exclude nothing."""
        return [p.strip() for p in self.exclude.split(",") if p.strip()]


def load_repo_config(path: str | Path) -> RepoConfig:
    """Load the repository's .ai-review.yaml or use defaults."""
    path = Path(path)
    if not path.is_file():
        return RepoConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return RepoConfig(**data)
    except Exception as e:
        logger.warning(f"Invalid {path.name}: {e}")
        return RepoConfig()


def resolve_exclude_patterns(settings: Settings) -> tuple[str, ...]:
    """Exclusion globs from the task input followed by those of the repository config."""
    repo_config = load_repo_config(Path(settings.sources_directory) / settings.config_file)
    patterns = [*settings.exclude_patterns]
    patterns.extend(p for p in repo_config.exclude if p not in patterns)
    return tuple(patterns)
