"""Read-only existence checks for Azure ML resources."""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Tuple, Union

from .executor import CommandExecutor
from .logging import get_logger

logger = get_logger(__name__)


class ResourceKind(str, Enum):
    """Kinds of resource the rollout verifies before deploying."""

    RESOURCE_GROUP = "resource_group"
    WORKSPACE = "workspace"
    ENDPOINT = "endpoint"
    REGISTRY = "registry"
    MODEL_IN_REGISTRY = "model_in_registry"
    MODEL_IN_WORKSPACE = "model_in_workspace"


# Each entry: (az subcommand, [(flag, identifier name), ...])
_PROBE_COMMANDS: Dict[ResourceKind, Tuple[List[str], List[Tuple[str, str]]]] = {
    ResourceKind.RESOURCE_GROUP: (
        ["group", "show"],
        [("--name", "resource_group")],
    ),
    ResourceKind.WORKSPACE: (
        ["ml", "workspace", "show"],
        [("--name", "workspace_name"), ("--resource-group", "resource_group")],
    ),
    ResourceKind.ENDPOINT: (
        ["ml", "online-endpoint", "show"],
        [
            ("--name", "endpoint_name"),
            ("--resource-group", "resource_group"),
            ("--workspace-name", "workspace_name"),
        ],
    ),
    ResourceKind.REGISTRY: (
        ["ml", "registry", "show"],
        [("--name", "registry_name"), ("--resource-group", "resource_group")],
    ),
    ResourceKind.MODEL_IN_REGISTRY: (
        ["ml", "model", "show"],
        [
            ("--name", "model_name"),
            ("--version", "model_version"),
            ("--registry-name", "registry_name"),
            ("--resource-group", "resource_group"),
        ],
    ),
    ResourceKind.MODEL_IN_WORKSPACE: (
        ["ml", "model", "show"],
        [
            ("--name", "model_name"),
            ("--version", "model_version"),
            ("--workspace-name", "workspace_name"),
            ("--resource-group", "resource_group"),
        ],
    ),
}


def build_probe_command(kind: ResourceKind, **identifiers: str) -> List[str]:
    """
    Build the ``az`` arguments that show a resource of the given kind.

    Raises:
        ValueError: If an identifier the kind needs is missing or empty
    """
    subcommand, params = _PROBE_COMMANDS[kind]
    missing = [name for _, name in params if not identifiers.get(name)]
    if missing:
        raise ValueError(
            f"Missing identifiers for {kind.value} probe: {', '.join(missing)}"
        )

    args = list(subcommand)
    for flag, name in params:
        args.extend([flag, identifiers[name]])
    return args


def probe(executor: CommandExecutor, kind: ResourceKind, **identifiers: str) -> bool:
    """
    Check whether a resource exists.

    Returns True iff the show command exits successfully. A resource that
    does not exist and a failed CLI call both return False.
    """
    result = executor.run(build_probe_command(kind, **identifiers))
    log = logger.bind(kind=kind.value, **identifiers)

    if result.success:
        log.info("Resource found")
        log.debug("Resource details", stdout=result.stdout)
        return True

    log.error(
        "Resource not found or error occurred",
        returncode=result.returncode,
        stderr=result.stderr,
    )
    return False


def file_exists(path: Union[str, Path]) -> bool:
    """Check that a local file exists."""
    if Path(path).exists():
        logger.info("File exists", path=str(path))
        return True

    logger.error("File does not exist", path=str(path))
    return False
