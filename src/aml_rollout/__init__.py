"""
aml-rollout: roll out Azure ML online deployments and shift endpoint traffic.

Verifies that the target resource group, workspace, endpoint, registry and
model exist, creates a deployment from a YAML file, then applies live and
mirrored traffic percentages through the Azure CLI.
"""

__version__ = "0.1.0"

from .config import ConfigManager, RolloutInputs
from .errors import RolloutError
from .executor import CommandExecutor, CommandResult, DryRunExecutor
from .logging import setup_logging
from .orchestrator import RolloutOrchestrator, RolloutResult, run_rollout
from .traffic import TrafficAllocator, TrafficMap, parse_traffic_map

__all__ = [
    "CommandExecutor",
    "CommandResult",
    "ConfigManager",
    "DryRunExecutor",
    "RolloutError",
    "RolloutInputs",
    "RolloutOrchestrator",
    "RolloutResult",
    "TrafficAllocator",
    "TrafficMap",
    "parse_traffic_map",
    "run_rollout",
    "setup_logging",
]
