"""Configuration management for aml-rollout."""

from .manager import AzureCliConfig, ConfigManager, LoggingConfig
from .settings import REQUIRED_INPUTS, RolloutInputs

__all__ = [
    "AzureCliConfig",
    "ConfigManager",
    "LoggingConfig",
    "REQUIRED_INPUTS",
    "RolloutInputs",
]
