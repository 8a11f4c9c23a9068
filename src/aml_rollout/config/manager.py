"""
Configuration Manager for aml-rollout.

Loads tool settings (Azure CLI invocation and logging) from an optional
YAML file with environment variable overrides.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..logging import DEFAULT_MAX_OUTPUT_CHARS


class AzureCliConfig(BaseModel):
    """Azure CLI invocation settings."""

    executable: str = Field(default="az", min_length=1, description="Azure CLI executable")
    extra_args: List[str] = Field(
        default_factory=list,
        description="Arguments appended to every az command (e.g. --subscription <id>)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level",
    )
    format: str = Field(default="console", pattern="^(console|json)$", description="Log format")
    max_output_chars: int = Field(
        default=DEFAULT_MAX_OUTPUT_CHARS,
        ge=0,
        description="Maximum length of captured CLI output in log events (0 disables)",
    )


class ConfigManager:
    """
    Manages YAML-configurable settings for aml-rollout.

    Precedence: defaults -> YAML file -> environment variables. A missing
    file is not an error; defaults are used and nothing is written.
    """

    ENV_MAPPINGS = {
        "AML_ROLLOUT_AZ_EXECUTABLE": ("azure_cli", "executable"),
        "AML_ROLLOUT_LOG_LEVEL": ("logging", "level"),
        "AML_ROLLOUT_LOG_FORMAT": ("logging", "format"),
        "AML_ROLLOUT_MAX_OUTPUT_CHARS": ("logging", "max_output_chars"),
    }

    INT_KEYS = {"max_output_chars"}

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize ConfigManager.

        Args:
            config_path: Path to YAML configuration file. If None, uses default locations.
        """
        self.config_path = self._resolve_config_path(config_path)
        self._config_data: Dict[str, Any] = {}
        self._load_config()

    def _resolve_config_path(self, config_path: Optional[Union[str, Path]]) -> Path:
        """Resolve configuration file path."""
        if config_path:
            return Path(config_path)

        env_path = os.getenv("AML_ROLLOUT_CONFIG_PATH")
        if env_path:
            return Path(env_path)

        default_paths = [
            Path("aml-rollout.yaml"),
            Path("config/aml-rollout.yaml"),
        ]

        for path in default_paths:
            if path.exists():
                return path

        return default_paths[0]

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    self._config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML configuration: {e}")
            except OSError as e:
                raise ValueError(
                    f"Failed to load configuration from {self.config_path}: {e}"
                )
            if not isinstance(self._config_data, dict):
                raise ValueError(
                    f"Configuration in {self.config_path} must be a mapping"
                )
        else:
            self._config_data = {}

        self._apply_env_overrides()
        self._initialize_config_sections()

    def _initialize_config_sections(self) -> None:
        """Initialize configuration sections from loaded data."""
        try:
            self.azure_cli = AzureCliConfig(**(self._config_data.get("azure_cli") or {}))
            self.logging = LoggingConfig(**(self._config_data.get("logging") or {}))
        except ValidationError as e:
            raise ValueError(f"Invalid configuration in {self.config_path}: {e}") from e

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        for env_var, (section, key) in self.ENV_MAPPINGS.items():
            value_str = os.getenv(env_var)
            if value_str is None:
                continue

            converted_value: Any = value_str
            if key in self.INT_KEYS:
                try:
                    converted_value = int(value_str)
                except ValueError:
                    raise ValueError(f"{env_var} must be an integer, got {value_str!r}")
            elif key == "level":
                converted_value = value_str.upper()

            section_data = self._config_data.get(section) or {}
            section_data[key] = converted_value
            self._config_data[section] = section_data

    def __repr__(self) -> str:
        return f"ConfigManager(config_path={self.config_path})"
