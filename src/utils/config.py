"""Configuration management system using Pydantic v2 and YAML.

This module provides type-safe configuration loading with validation
for the clinic scraper.
"""

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigValidationError


class ScraperConfig(BaseModel):
    """Configuration for the directory scraper."""

    base_url: str = Field(default="https://www.local.ch/en/q", description="Base URL of the search endpoint")
    query: str = Field(default="/Switzerland/clinique", description="Query path appended to the base URL")
    max_pages: int = Field(default=100, ge=1, description="Number of result pages to scrape")
    max_parallel: int = Field(default=10, ge=1, description="Maximum concurrent page requests")
    mode: Literal["parallel", "sequential"] = Field(default="parallel", description="Execution policy")
    show_progress: bool = Field(default=True, description="Display a progress bar over pages")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("base_url must start with http:// or https://")
        return v

    @field_validator('query')
    @classmethod
    def validate_query(cls, v: str) -> str:
        """Ensure the query path is rooted."""
        if not v.startswith('/'):
            raise ValueError("query must start with '/'")
        return v


class OutputConfig(BaseModel):
    """Configuration for exported records."""

    csv_path: str = Field(default="clinics.csv", description="Destination of the CSV export")


class AppConfig(BaseModel):
    """Root configuration model containing all sub-configurations."""

    scraper: ScraperConfig = Field(default_factory=ScraperConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Choose from: {valid_levels}")
        return v_upper

    @classmethod
    def from_yaml(cls, path: Path | str) -> 'AppConfig':
        """Load configuration from a YAML file.

        An empty file yields the default configuration.

        Raises:
            ConfigFileNotFoundError: If the file doesn't exist
            yaml.YAMLError: If the file is not valid YAML
            ConfigValidationError: If values fail validation
        """
        path = Path(path)
        if not path.exists():
            raise ConfigFileNotFoundError(f"Configuration file not found: {path}", path=str(path))

        with open(path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}

        try:
            return cls.model_validate(config_dict)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ConfigValidationError(
                f"Invalid configuration in {path}: {field}: {error['msg']}",
                field=field,
                value=error.get("input"),
                context={"path": str(path), "error_count": e.error_count()},
            ) from e


_config: Optional[AppConfig] = None


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. Defaults to the
                    CLINIC_SCRAPER_CONFIG env var, then config/config.yaml
                    relative to the project root.

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist
        ConfigValidationError: If configuration is invalid
    """
    if config_path is None:
        env_config_path = os.environ.get('CLINIC_SCRAPER_CONFIG')
        if env_config_path:
            config_path = Path(env_config_path)
        else:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Set the CLINIC_SCRAPER_CONFIG environment variable to the config file path.",
            path=str(config_path),
        )

    return AppConfig.from_yaml(config_path)


def get_config(config_path: Optional[Path | str] = None, reload: bool = False) -> AppConfig:
    """Get configuration instance (singleton pattern).

    Args:
        config_path: Path to configuration file (only used on first call or if reload=True)
        reload: Force reload of configuration

    Returns:
        Cached or newly loaded AppConfig instance
    """
    global _config

    if _config is None or reload:
        _config = load_config(config_path)

    return _config


def reset_config() -> None:
    """Reset cached configuration (useful for testing)."""
    global _config
    _config = None
