"""Pydantic settings for bibfetchers configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return Path.home() / ".bibfetchers"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def _load_yaml_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file if it exists.

    Returns:
        Dictionary of configuration values, or empty dict if file doesn't exist.
    """
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path) as f:
                return yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError):
            # Silently ignore malformed or unreadable config
            return {}
    return {}


class ImportSettings(BaseModel):
    """How fetched entries are shaped before they are handed back."""

    keyword_separator: str = ", "
    keep_source_citation_key: bool = False


class HttpSettings(BaseModel):
    """Settings for outbound requests made by fetchers."""

    timeout: float = 30.0
    # Sent to sources that ask for a contact address (Crossref, Unpaywall)
    contact_email: str = "bibfetchers@example.com"


class ApiKeySettings(BaseModel):
    """API keys for sources that require one."""

    springer: str | None = None
    ieee: str | None = None
    astrophysics_data_system: str | None = None
    elsevier: str | None = None


class Settings(BaseSettings):
    """Main settings model for bibfetchers."""

    model_config = SettingsConfigDict(
        env_prefix="BIBFETCHERS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    imports: ImportSettings = Field(default_factory=ImportSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)
    api_keys: ApiKeySettings = Field(default_factory=ApiKeySettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment wins over values passed in from the YAML file
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_settings(config_path: Path | None = None) -> Settings:
    """Build a fresh settings instance.

    Settings are loaded from (in order of priority, highest first):
    1. Environment variables (BIBFETCHERS_* prefix)
    2. YAML config file (~/.bibfetchers/config.yaml)
    3. Default values
    """
    return Settings(**_load_yaml_config(config_path))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance for the CLI."""
    return load_settings()
