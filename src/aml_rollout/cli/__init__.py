"""Command line interface for aml-rollout."""

from .main import main

__all__ = ["main"]
