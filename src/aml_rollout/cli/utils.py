"""Shared helpers for the CLI commands."""

from __future__ import annotations

import os
from typing import cast

import click

from ..config import ConfigManager
from ..executor import CommandExecutor, DryRunExecutor


def get_config_manager(ctx: click.Context) -> ConfigManager:
    """Return the config manager stored on the click context."""
    return cast(ConfigManager, ctx.obj["config"])


def build_executor(config_manager: ConfigManager, dry_run: bool = False) -> CommandExecutor:
    """Create the Azure CLI executor described by the configuration."""
    executor_class = DryRunExecutor if dry_run else CommandExecutor
    return executor_class(
        executable=config_manager.azure_cli.executable,
        extra_args=config_manager.azure_cli.extra_args,
    )


def running_in_github_actions() -> bool:
    return os.getenv("GITHUB_ACTIONS", "").lower() == "true"


def report_failure(message: str) -> None:
    """
    Surface a fatal error as the run's failure reason.

    Inside GitHub Actions an ``::error::`` workflow command is also emitted
    so the message shows up as the step's annotation.
    """
    display_error(f"Action failed: {message}")
    if running_in_github_actions():
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        click.echo(f"::error::Action failed: {escaped}")


def display_success(message: str) -> None:
    """Display a success message."""
    click.echo(click.style(f"✓ {message}", fg="green"))


def display_error(message: str) -> None:
    """Display an error message."""
    click.echo(click.style(f"✗ {message}", fg="red"))


def display_warning(message: str, err: bool = False) -> None:
    """Display a warning message."""
    click.echo(click.style(f"⚠ {message}", fg="yellow"), err=err)


def display_info(message: str, err: bool = False) -> None:
    """Display an info message."""
    click.echo(click.style(f"ℹ {message}", fg="blue"), err=err)
