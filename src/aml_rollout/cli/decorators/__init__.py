"""Decorators shared by CLI commands."""

from .common import log_command_execution, timing

__all__ = ["log_command_execution", "timing"]
