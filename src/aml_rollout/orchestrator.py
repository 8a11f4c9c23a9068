"""Sequences existence checks, deployment creation and traffic allocation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config.settings import RolloutInputs
from .deployment import create_deployment
from .errors import (
    DeploymentCreationError,
    DeploymentFileNotFoundError,
    MissingInputError,
    ResourceNotFoundError,
)
from .executor import CommandExecutor
from .logging import get_logger
from .probes import ResourceKind, file_exists, probe
from .traffic import TrafficAllocator, TrafficUpdateResult, parse_traffic_map

logger = get_logger(__name__)


@dataclass
class RolloutResult:
    """Outcome of a completed rollout."""

    inputs: RolloutInputs
    traffic_results: List[TrafficUpdateResult] = field(default_factory=list)

    @property
    def failed_updates(self) -> List[TrafficUpdateResult]:
        return [r for r in self.traffic_results if not r.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "succeeded",
            "inputs": self.inputs.summary(),
            "traffic_updates": [r.to_dict() for r in self.traffic_results],
            "failed_traffic_updates": len(self.failed_updates),
        }


class RolloutOrchestrator:
    """
    Runs one rollout against Azure ML.

    Every step runs to completion before the next starts. The first failed
    check or a failed deployment creation raises, and nothing already done
    is undone. Individual traffic update failures are only logged.
    """

    def __init__(self, executor: CommandExecutor):
        self.executor = executor
        self.allocator = TrafficAllocator(executor)

    def run(self, inputs: RolloutInputs) -> RolloutResult:
        """
        Execute the rollout.

        Raises:
            RolloutError: Subclass describing the first fatal failure
        """
        inputs.validate_required()

        self._check_resources(inputs)
        spec_file = self._check_deployment_file(inputs)

        logger.info("Creating deployment", spec_file=spec_file)
        if not create_deployment(
            self.executor, inputs.resource_group, inputs.workspace_name, spec_file
        ):
            raise DeploymentCreationError("Deployment creation failed.")

        traffic_map = parse_traffic_map(inputs.traffic)
        results = self.allocator.apply(
            inputs.resource_group,
            inputs.workspace_name,
            inputs.endpoint_name,
            traffic_map,
        )

        logger.info("Deployment traffic updated", endpoint_name=inputs.endpoint_name)
        return RolloutResult(inputs=inputs, traffic_results=results)

    def _check_resources(self, inputs: RolloutInputs) -> None:
        rg = inputs.resource_group
        ws = inputs.workspace_name

        self._require(
            ResourceKind.RESOURCE_GROUP,
            f"Resource group '{rg}' does not exist.",
            resource_group=rg,
        )
        self._require(
            ResourceKind.WORKSPACE,
            f"Workspace '{ws}' does not exist in resource group '{rg}'.",
            workspace_name=ws,
            resource_group=rg,
        )
        self._require(
            ResourceKind.ENDPOINT,
            f"Endpoint '{inputs.endpoint_name}' does not exist in resource group "
            f"'{rg}' and workspace '{ws}'.",
            endpoint_name=inputs.endpoint_name,
            resource_group=rg,
            workspace_name=ws,
        )

        if inputs.uses_registry:
            registry = inputs.registry_name
            registry_rg = inputs.registry_resource_group
            self._require(
                ResourceKind.REGISTRY,
                f"Registry '{registry}' does not exist in resource group '{registry_rg}'.",
                registry_name=registry,
                resource_group=registry_rg,
            )
            self._require(
                ResourceKind.MODEL_IN_REGISTRY,
                f"Model '{inputs.model_name}' does not exist in registry '{registry}'.",
                model_name=inputs.model_name,
                model_version=inputs.model_version,
                registry_name=registry,
                resource_group=registry_rg,
            )
        else:
            self._require(
                ResourceKind.MODEL_IN_WORKSPACE,
                f"Model '{inputs.model_name}' does not exist in workspace '{ws}'.",
                model_name=inputs.model_name,
                model_version=inputs.model_version,
                workspace_name=ws,
                resource_group=rg,
            )

    def _require(self, kind: ResourceKind, message: str, **identifiers: str) -> None:
        logger.info("Checking resource exists", kind=kind.value, **identifiers)
        if not probe(self.executor, kind, **identifiers):
            raise ResourceNotFoundError(message, kind.value, identifiers)

    def _check_deployment_file(self, inputs: RolloutInputs) -> str:
        path = inputs.deployment_yaml_file_path
        if not path:
            raise MissingInputError(
                "Deployment YAML file path is required.", "deployment_yaml_file_path"
            )
        if not file_exists(path):
            raise DeploymentFileNotFoundError(
                f"Deployment YAML file '{path}' does not exist.", path
            )
        return path


def run_rollout(
    inputs: RolloutInputs, executor: Optional[CommandExecutor] = None
) -> RolloutResult:
    """Run a rollout with ``executor``, or a default ``az`` executor."""
    return RolloutOrchestrator(executor or CommandExecutor()).run(inputs)
