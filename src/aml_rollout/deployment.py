"""Creates an online deployment from a YAML specification."""

from pathlib import Path
from typing import List, Union

from .executor import CommandExecutor
from .logging import get_logger

logger = get_logger(__name__)


def build_create_command(
    resource_group: str, workspace_name: str, spec_file: Union[str, Path]
) -> List[str]:
    return [
        "ml",
        "online-deployment",
        "create",
        "--file",
        str(spec_file),
        "--resource-group",
        resource_group,
        "--workspace-name",
        workspace_name,
    ]


def create_deployment(
    executor: CommandExecutor,
    resource_group: str,
    workspace_name: str,
    spec_file: Union[str, Path],
) -> bool:
    """
    Create a deployment from ``spec_file``.

    Returns:
        True if the CLI reported success, False otherwise
    """
    result = executor.run(build_create_command(resource_group, workspace_name, spec_file))
    log = logger.bind(
        resource_group=resource_group,
        workspace_name=workspace_name,
        spec_file=str(spec_file),
    )

    if result.success:
        log.info("Deployment created successfully", stdout=result.stdout)
        return True

    log.error("Deployment creation failed", returncode=result.returncode, stderr=result.stderr)
    return False
