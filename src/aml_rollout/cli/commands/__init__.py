"""Command registration helpers for the CLI."""

from __future__ import annotations

from . import rollout


def register_all(registry) -> None:
    """Register all commands with the registry."""
    rollout.register(registry)
