"""Configuration management for CommResolve."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from commresolve.exceptions import ConfigError
from commresolve.resolver.models import ValidationPolicy

COMMRESOLVE_DIR = ".commresolve"
CONFIG_FILE = "config.json"


class ResolverConfig(BaseModel):
    """Resolution pass behavior."""

    validation_policy: ValidationPolicy = ValidationPolicy.DIRECTED
    dry_run: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class ProjectConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_commresolve_dir(root: Path) -> Path:
    """Get the .commresolve directory for a project root."""
    return root / COMMRESOLVE_DIR


def find_project_root(start: Path | None = None) -> Path | None:
    """Nearest directory at or above `start` holding a .commresolve directory."""
    start = (start or Path.cwd()).resolve()
    return next(
        (candidate for candidate in (start, *start.parents) if get_commresolve_dir(candidate).is_dir()),
        None,
    )


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .commresolve/config.json."""
    config_path = get_commresolve_dir(root) / CONFIG_FILE
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
            return ProjectConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    return ProjectConfig(name=root.name)


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .commresolve/config.json."""
    cr_dir = get_commresolve_dir(root)
    cr_dir.mkdir(parents=True, exist_ok=True)
    config_path = cr_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(mode="json"), indent=2))


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'resolver.dry_run')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for '{key}': {value!r}") from e
