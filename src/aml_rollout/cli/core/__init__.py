"""Core CLI components and base classes."""

from .base import BaseCommand, CLIError, OutputFormatter
from .registry import CommandRegistry

__all__ = [
    "BaseCommand",
    "CLIError",
    "CommandRegistry",
    "OutputFormatter",
]
