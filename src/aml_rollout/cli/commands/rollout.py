"""Rollout commands: run a full rollout or preview its traffic updates."""

from __future__ import annotations

from typing import Any, Dict, List

import click

from ...config.settings import INPUT_LABELS, RolloutInputs
from ...orchestrator import RolloutOrchestrator, RolloutResult
from ...traffic import format_percentage, parse_traffic_map
from ..core import BaseCommand, CLIError, OutputFormatter
from ..decorators import log_command_execution, timing
from ..utils import build_executor, display_error, display_info, display_success


def _input_option(name: str, help_text: str) -> click.Option:
    """Option for a rollout input, falling back to the ``INPUT_<NAME>`` env var."""
    return click.Option(
        [f"--{name.replace('_', '-')}", name],
        envvar=f"INPUT_{name.upper()}",
        default=None,
        show_envvar=True,
        help=help_text,
    )


INPUT_OPTIONS: List[click.Option] = [
    _input_option("endpoint_name", "Online endpoint to shift traffic on"),
    _input_option("resource_group", "Resource group of the workspace"),
    _input_option("workspace_name", "Azure ML workspace name"),
    _input_option("registry_name", "Model registry name (omit to use the workspace)"),
    _input_option("registry_resource_group", "Resource group of the registry"),
    _input_option("model_name", "Model name"),
    _input_option("model_version", "Model version"),
    _input_option("traffic", 'Traffic map JSON, e.g. \'{"blue": 90, "green": 10}\''),
    _input_option("deployment_yaml_file_path", "Deployment YAML file"),
]

OUTPUT_OPTION_KWARGS: Dict[str, Any] = {
    "type": click.Choice(["text", "json"]),
    "default": "text",
    "help": "Output format for the summary",
}


def collect_inputs(kwargs: Dict[str, Any]) -> RolloutInputs:
    """Build RolloutInputs from the input options that were given."""
    values = {
        name: kwargs[name]
        for name in INPUT_LABELS
        if kwargs.get(name) is not None
    }
    return RolloutInputs(**values)


class RolloutRunCommand(BaseCommand):
    """Validate resources, create the deployment and apply traffic."""

    @timing
    @log_command_execution
    def execute(self, **kwargs: Any) -> None:
        inputs = collect_inputs(kwargs)
        executor = build_executor(self.config_manager, dry_run=kwargs.get("dry_run", False))

        result = RolloutOrchestrator(executor).run(inputs)

        if kwargs.get("output") == "json":
            click.echo(OutputFormatter.format_json(result.to_dict()))
        else:
            self._display_result_text(result)

    def _display_result_text(self, result: RolloutResult) -> None:
        for update_result in result.traffic_results:
            update = update_result.update
            kind = "Mirror traffic" if update.mirror else "Traffic"
            message = (
                f"{kind} for deployment '{update.deployment}' "
                f"set to {format_percentage(update.value)}%"
            )
            if update_result.success:
                display_success(message)
            else:
                display_error(f"{message} failed")

        failed = len(result.failed_updates)
        if failed:
            display_info(f"{failed} traffic update(s) failed; see log for details")
        display_success("Deployment traffic updated successfully.")


class TrafficPlanCommand(BaseCommand):
    """Show the traffic updates a rollout would issue, without calling Azure."""

    def execute(self, **kwargs: Any) -> None:
        traffic = kwargs.get("traffic")
        if not traffic:
            raise CLIError("Traffic is required")

        traffic_map = parse_traffic_map(traffic)
        updates = list(traffic_map.updates())

        if kwargs.get("output") == "json":
            click.echo(
                OutputFormatter.format_json(
                    [
                        {"deployment": u.deployment, "value": u.value, "mirror": u.mirror}
                        for u in updates
                    ]
                )
            )
            return

        if not updates:
            display_info("Traffic map is empty; no updates would be issued")
            return

        if not traffic_map.mirror:
            display_info("No mirror traffic specified.")

        rows = [
            [
                str(i),
                "mirror" if u.mirror else "production",
                u.deployment,
                format_percentage(u.value),
            ]
            for i, u in enumerate(updates, 1)
        ]
        click.echo(
            OutputFormatter.format_table(["#", "kind", "deployment", "percentage"], rows)
        )


def register(registry) -> None:
    """Register rollout commands."""
    registry.register_command(
        "run",
        RolloutRunCommand,
        help="Validate resources, create the deployment and shift endpoint traffic",
        options=[
            *INPUT_OPTIONS,
            click.Option(
                ["--dry-run"],
                is_flag=True,
                default=False,
                help="Log the az commands instead of running them",
            ),
            click.Option(["--output"], **OUTPUT_OPTION_KWARGS),
        ],
    )

    registry.register_command(
        "plan",
        TrafficPlanCommand,
        help="Show the mirror and production traffic updates for a traffic map",
        options=[
            _input_option("traffic", "Traffic map JSON"),
            click.Option(["--output"], **OUTPUT_OPTION_KWARGS),
        ],
    )
