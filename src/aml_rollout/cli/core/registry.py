"""Command registry for attaching command classes to the CLI."""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, Type

import click

from ...logging import set_log_stream
from .base import BaseCommand


class CommandRegistry:
    """Registry for managing CLI commands."""

    def __init__(self) -> None:
        self._commands: Dict[str, Dict[str, Any]] = {}

    def register_command(
        self,
        name: str,
        command_class: Type[BaseCommand],
        help: Optional[str] = None,
        options: Optional[List[click.Parameter]] = None,
    ) -> None:
        """Register a command class with the registry.

        Args:
            name: Command name
            command_class: Command class to register
            help: Help text for the command
            options: Click parameters accepted by the command
        """
        self._commands[name] = {
            "class": command_class,
            "options": options or [],
            "help": help,
        }

    def get_command_info(self, name: str) -> Optional[Dict[str, Any]]:
        """Get command information by name."""
        return self._commands.get(name)

    def create_click_command(self, name: str) -> click.Command:
        """Create a Click command from a registered command class."""
        command_info = self.get_command_info(name)
        if not command_info:
            raise ValueError(f"Command '{name}' not found in registry")

        command_class = command_info["class"]

        @click.pass_context
        def callback(ctx: click.Context, **kwargs: Any) -> None:
            from ..utils import get_config_manager

            command = command_class(get_config_manager(ctx))
            if kwargs.get("output") == "json":
                # stdout carries only the JSON document
                set_log_stream(sys.stderr)
            try:
                command.execute(**kwargs)
            except click.exceptions.Exit:
                raise
            except Exception as e:  # noqa: BLE001
                command.handle_error(e, ctx)

        return click.Command(
            name=name,
            callback=callback,
            params=list(command_info["options"]),
            help=command_info.get("help") or f"Execute {name} command",
        )

    def attach_to_main(self, main_group: click.Group) -> None:
        """Attach all registered commands to the main CLI group."""
        for command_name in self._commands:
            main_group.add_command(self.create_click_command(command_name))
