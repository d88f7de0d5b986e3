"""Project-level translator configuration (`translator.config.json`)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError


logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the project configuration file cannot be used."""


class ProjectConfig(BaseModel):
    """Locales to generate, where the source lives and which env vars hold credentials."""

    model_config = ConfigDict(populate_by_name=True)

    languages: list[str] = Field(default_factory=lambda: ["en", "es", "fr", "ar", "lzh", "ru"])
    language_source: str = Field(default="./src/languages/pt.ts", alias="languageSource")
    output_dir: str = Field(default="./src/languages", alias="outputDir")
    azure_api_key: str = Field(default="AZURE_API_KEY", alias="azureApiKey")
    azure_api_region: str = Field(default="AZURE_API_REGION", alias="azureApiRegion")

    root_dir: Path = Field(default_factory=Path.cwd, exclude=True)

    @property
    def source_path(self) -> Path:
        return (self.root_dir / self.language_source).resolve()

    @property
    def output_path(self) -> Path:
        return (self.root_dir / self.output_dir).resolve()


class ProviderCredentials(BaseModel):
    api_key: SecretStr | None = None
    region: SecretStr | None = None


def write_default_config(path: Path) -> ProjectConfig:
    config = ProjectConfig(root_dir=path.parent)
    payload = config.model_dump(by_alias=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    logger.info("Configuration file created at %s", path)
    return config


def load_project_config(path: str | Path) -> ProjectConfig:
    """Load the project config, materializing the defaults on first run."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        logger.warning("%s not found; creating it with default values", config_path.name)
        return write_default_config(config_path)

    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigError(f"Expected a JSON object in {config_path}")

    try:
        return ProjectConfig.model_validate({**payload, "root_dir": config_path.parent})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc


def load_environment(root: Path) -> bool:
    """Load `<root>/.env` into the process environment if it exists."""
    env_path = root / ".env"
    if not env_path.exists():
        logger.warning(".env file not found in project directory: %s", root)
        return False
    load_dotenv(env_path, override=False)
    logger.info("Environment variables loaded from %s", env_path)
    return True


def resolve_credentials(config: ProjectConfig) -> ProviderCredentials:
    """Read provider credentials from the environment variables the config names."""
    api_key = os.environ.get(config.azure_api_key)
    region = os.environ.get(config.azure_api_region)
    if not api_key:
        logger.warning("Environment variable %s is not set; translation calls will likely fail", config.azure_api_key)
    if not region:
        logger.warning("Environment variable %s is not set", config.azure_api_region)
    return ProviderCredentials(
        api_key=SecretStr(api_key) if api_key else None,
        region=SecretStr(region) if region else None,
    )
