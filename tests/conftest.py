"""Shared fixtures for aml-rollout tests."""

from typing import Callable, List, Optional, Sequence

import pytest
import structlog

from aml_rollout.config import RolloutInputs
from aml_rollout.executor import CommandExecutor, CommandResult


class RecordingExecutor(CommandExecutor):
    """Executor that records commands instead of running them.

    ``fail_when`` receives the subcommand arguments and returns True for
    calls that should report a nonzero exit.
    """

    def __init__(self, fail_when: Optional[Callable[[List[str]], bool]] = None):
        super().__init__()
        self.calls: List[List[str]] = []
        self.fail_when = fail_when or (lambda args: False)

    def run(self, args: Sequence[str]) -> CommandResult:
        args = list(args)
        self.calls.append(args)
        if self.fail_when(args):
            return CommandResult(
                args=self.build(args),
                success=False,
                stderr="ERROR: (ResourceNotFound) not found",
                returncode=1,
            )
        return CommandResult(args=self.build(args), success=True, stdout="{}", returncode=0)

    def traffic_calls(self) -> List[List[str]]:
        """(option, assignment) pairs of every endpoint update issued."""
        return [
            [args[-2], args[-1]]
            for args in self.calls
            if args[:3] == ["ml", "online-endpoint", "update"]
        ]


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def failing_executor() -> Callable[..., RecordingExecutor]:
    """Factory for executors that fail selected calls."""
    return RecordingExecutor


@pytest.fixture
def deployment_file(tmp_path):
    path = tmp_path / "deployment.yml"
    path.write_text(
        "$schema: https://azuremlschemas.azureedge.net/latest/managedOnlineDeployment.schema.json\n"
        "name: green\n"
        "endpoint_name: my-endpoint\n"
    )
    return path


@pytest.fixture
def rollout_inputs(deployment_file, monkeypatch) -> RolloutInputs:
    for name in RolloutInputs.model_fields:
        monkeypatch.delenv(f"INPUT_{name.upper()}", raising=False)
    return RolloutInputs(
        endpoint_name="my-endpoint",
        resource_group="rg-ml",
        workspace_name="ws-ml",
        model_name="churn-model",
        model_version="3",
        traffic='{"blue": 90, "green": 10}',
        deployment_yaml_file_path=str(deployment_file),
    )


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
