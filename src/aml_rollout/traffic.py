"""
Traffic map parsing and allocation across endpoint deployments.

A traffic map is a JSON object mapping deployment names to percentages.
The reserved key ``"mirror"`` holds a nested object of mirror (shadow)
percentages. Every entry becomes one independent ``az ml online-endpoint
update`` call: mirror entries first, then production entries. A failed
update is logged and the remaining entries are still applied.

Percentages are passed to Azure verbatim. They are not range checked and
are not required to sum to 100; the service decides what is valid.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Union

from .errors import TrafficSpecError
from .executor import CommandExecutor, CommandResult
from .logging import get_logger

logger = get_logger(__name__)

MIRROR_KEY = "mirror"


def format_percentage(value: Any) -> str:
    """Render a traffic value the way it appeared in the JSON input."""
    if isinstance(value, str):
        return value
    # 1e2 and 100.0 are written as 100
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value)


@dataclass(frozen=True)
class TrafficUpdate:
    """One deployment's share of live or mirrored traffic."""

    deployment: str
    value: Any
    mirror: bool = False

    @property
    def option(self) -> str:
        return "--mirror-traffic" if self.mirror else "--traffic"

    @property
    def assignment(self) -> str:
        return f"{self.deployment}={format_percentage(self.value)}"


@dataclass(frozen=True)
class TrafficUpdateResult:
    update: TrafficUpdate
    result: CommandResult

    @property
    def success(self) -> bool:
        return self.result.success

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deployment": self.update.deployment,
            "value": self.update.value,
            "mirror": self.update.mirror,
            "success": self.success,
        }


@dataclass(frozen=True)
class TrafficMap:
    """Parsed traffic map split into production and mirror subsets."""

    production: Dict[str, Any] = field(default_factory=dict)
    mirror: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrafficMap":
        """
        Split a decoded traffic object into its two subsets.

        Raises:
            TrafficSpecError: If a non-empty mirror entry is not an object
        """
        mirror = data.get(MIRROR_KEY) or {}
        if not isinstance(mirror, dict):
            raise TrafficSpecError(
                f"Traffic key '{MIRROR_KEY}' must be a JSON object, "
                f"got {type(mirror).__name__}",
                details={"mirror": mirror},
            )

        production = {k: v for k, v in data.items() if k != MIRROR_KEY}
        return cls(production=production, mirror=dict(mirror))

    def updates(self) -> Iterator[TrafficUpdate]:
        """Yield every update in application order, mirror entries first."""
        for deployment, value in self.mirror.items():
            yield TrafficUpdate(deployment, value, mirror=True)
        for deployment, value in self.production.items():
            yield TrafficUpdate(deployment, value, mirror=False)

    def __len__(self) -> int:
        return len(self.production) + len(self.mirror)


def parse_traffic_map(traffic_json: str) -> TrafficMap:
    """
    Parse traffic JSON text into a TrafficMap.

    Raises:
        TrafficSpecError: If the text is not a JSON object of the expected shape
    """
    try:
        data = json.loads(traffic_json)
    except (TypeError, json.JSONDecodeError) as e:
        raise TrafficSpecError(f"Invalid traffic JSON: {e}") from e

    if not isinstance(data, dict):
        raise TrafficSpecError(
            f"Traffic must be a JSON object, got {type(data).__name__}"
        )

    return TrafficMap.from_dict(data)


def build_traffic_command(
    resource_group: str, workspace_name: str, endpoint_name: str, update: TrafficUpdate
) -> List[str]:
    return [
        "ml",
        "online-endpoint",
        "update",
        "--name",
        endpoint_name,
        "--resource-group",
        resource_group,
        "--workspace-name",
        workspace_name,
        update.option,
        update.assignment,
    ]


class TrafficAllocator:
    """Applies a traffic map to an endpoint one deployment at a time."""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def apply(
        self,
        resource_group: str,
        workspace_name: str,
        endpoint_name: str,
        traffic: Union[str, TrafficMap],
    ) -> List[TrafficUpdateResult]:
        """
        Apply mirror then production traffic for every deployment in the map.

        Args:
            resource_group: Resource group of the workspace
            workspace_name: Azure ML workspace name
            endpoint_name: Online endpoint whose traffic is shifted
            traffic: Traffic JSON text or an already parsed TrafficMap

        Returns:
            One result per update, in the order they were issued

        Raises:
            TrafficSpecError: If ``traffic`` is text that cannot be parsed
        """
        traffic_map = traffic if isinstance(traffic, TrafficMap) else parse_traffic_map(traffic)

        if not traffic_map.mirror:
            logger.info("No mirror traffic specified", endpoint_name=endpoint_name)

        results = []
        for update in traffic_map.updates():
            results.append(
                self._apply_one(resource_group, workspace_name, endpoint_name, update)
            )

        failed = sum(1 for r in results if not r.success)
        logger.info(
            "Traffic allocation finished",
            endpoint_name=endpoint_name,
            updates=len(results),
            failed=failed,
        )
        return results

    def _apply_one(
        self,
        resource_group: str,
        workspace_name: str,
        endpoint_name: str,
        update: TrafficUpdate,
    ) -> TrafficUpdateResult:
        log = logger.bind(
            endpoint_name=endpoint_name,
            deployment=update.deployment,
            value=format_percentage(update.value),
            mirror=update.mirror,
        )
        log.info("Updating deployment traffic")

        result = self.executor.run(
            build_traffic_command(resource_group, workspace_name, endpoint_name, update)
        )
        if result.success:
            log.info("Traffic updated successfully")
        else:
            log.error(
                "Traffic update failed",
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return TrafficUpdateResult(update=update, result=result)
